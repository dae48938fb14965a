"""
Models Package

Data structures for files, requests and results.
"""

"""
Configuration Package

All settings live in config/settings.py.
"""

"""
Utilities Package

Validation, timeout estimation, progress relay, error classification
and formatting helpers.
"""

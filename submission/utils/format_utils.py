"""
Formatting Utilities

Human-readable rendering shared by validation and error messages.
"""

SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_size(size_bytes: float) -> str:
    """
    Format byte size as human-readable string.

    The unit is the largest power of 1024 not exceeding the size (capped
    at GB). The value is rounded to 2 decimals with trailing zeros dropped.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string

    Example:
        format_size(0)           # "0 Bytes"
        format_size(1024)        # "1 KB"
        format_size(1536)        # "1.5 KB"
        format_size(20971520)    # "20 MB"
    """
    if size_bytes <= 0:
        return "0 Bytes"

    value = float(size_bytes)
    unit_index = 0
    while value >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        value /= 1024
        unit_index += 1

    rendered = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{rendered} {SIZE_UNITS[unit_index]}"


def format_minutes(milliseconds: int) -> int:
    """Whole minutes in a millisecond duration (rounded)"""
    return int(round(milliseconds / 60000))

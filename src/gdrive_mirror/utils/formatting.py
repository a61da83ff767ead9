#!/usr/bin/env python3
"""
Formatting helpers for console output.
"""

_UNITS = ['B', 'KB', 'MB', 'GB', 'TB']


def format_size(size):
    """Format a byte count as a human readable string, e.g. 1.50 MB."""
    size = float(size)
    for unit in _UNITS[:-1]:
        if abs(size) < 1024:
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} {_UNITS[-1]}"

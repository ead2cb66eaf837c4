"""Utility modules for deskctl.

This module exports commonly used utility functions.
"""

from deskctl.utils.formatting import (
    console,
    create_items_table,
    err_console,
    format_size,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_items_table",
    "err_console",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]

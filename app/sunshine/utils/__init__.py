"""Utility modules for sunshine.

This module exports commonly used utility functions.
"""

from sunshine.utils.formatting import (
    configure_logging,
    console,
    err_console,
    print_error,
    print_info,
    print_success,
)

__all__ = [
    "configure_logging",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
]

"""Compatibility layer for parsing values from lenient producers.

This module provides a compatibility layer for handling leap seconds that
are not in the leap second table.
"""

from .make_compat import enable_compat_mode

__all__ = [
    "enable_compat_mode",
]

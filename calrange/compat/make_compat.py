"""Compatibility layer for timestamps produced with unlisted leap seconds.

Some producers emit a seconds field of 60 at the end of any day, for example
when a clock was smeared or a leap second was announced but later withdrawn.
This module provides a context manager that allows such values to be parsed.
"""

import contextlib
from collections.abc import Generator
import logging
import re

from . import leap_second_compat


_LOGGER = logging.getLogger(__name__)

# Matches a seconds field of 60 in an extended or condensed time of day.
_LEAP_SECOND_RE = re.compile(r"[Tt ]\d{2}:?\d{2}:?60")


@contextlib.contextmanager
def enable_compat_mode(value: str) -> Generator[str]:
    """Enable compatibility mode for values that look like leap seconds."""
    if _LEAP_SECOND_RE.search(value):
        _LOGGER.debug("Enabling compatibility mode for leap second in %s", value)
        with leap_second_compat.enable_unlisted_leap_seconds():
            yield value
    else:
        _LOGGER.debug("No compatibility mode needed")
        yield value

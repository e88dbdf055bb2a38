"""Compatibility layer for leap seconds missing from the leap second table."""

from collections.abc import Generator
import contextlib
import contextvars


_unlisted_leap_seconds = contextvars.ContextVar("unlisted_leap_seconds", default=False)


@contextlib.contextmanager
def enable_unlisted_leap_seconds() -> Generator[None]:
    """Context manager to allow a second of 60 at the end of any UTC day."""
    token = _unlisted_leap_seconds.set(True)
    try:
        yield
    finally:
        _unlisted_leap_seconds.reset(token)


def is_unlisted_leap_seconds_enabled() -> bool:
    """Check if leap seconds outside the leap second table are allowed."""
    return _unlisted_leap_seconds.get()

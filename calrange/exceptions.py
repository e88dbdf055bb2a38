"""Exceptions for calrange library."""


class CalrangeError(Exception):
    """Base exception for all calrange errors."""


class InvalidDateError(CalrangeError, ValueError):
    """Exception raised when civil fields do not form a real calendar instant.

    This covers a day of month that does not exist in the given month (including
    February 29th in a non-leap year), any field outside of its range, and a
    second value of 60 that does not fall on a leap second at the end of a UTC day.
    """


class InvalidFormatError(CalrangeError, ValueError):
    """Exception raised when parsing a string that does not match the grammar.

    The 'message' attribute contains a human-readable message about the
    error that occurred. The 'detailed_error' attribute can provide additional
    information about the error, such as the part of the input that could not
    be understood.
    """

    def __init__(self, message: str, *, detailed_error: str | None = None) -> None:
        """Initialize the InvalidFormatError with a message."""
        super().__init__(message)
        self.message = message
        self.detailed_error = detailed_error


class TimezoneClashError(CalrangeError, ValueError):
    """Exception raised when an offset is given in the string and as an argument.

    A parsed value can only take its offset from one source, so the caller must
    either drop the offset from the string or stop passing an explicit offset.
    """


class IntervalError(CalrangeError):
    """Exception raised when evaluating an interval."""


class NotIntegerIntervalError(IntervalError, TypeError):
    """Exception raised when counting or indexing an interval that can't be counted.

    Counting, indexing and random draws need an element type with a successor
    and a distance function, and a finite interval to enumerate.
    """


class SyntheticCodepointError(IntervalError, ValueError):
    """Exception raised when enumerating text built from combining codepoints.

    A character followed by combining marks is a single grapheme made of several
    codepoints, so it has no well defined successor. The input text must be
    normalized before it is used as an interval bound.
    """

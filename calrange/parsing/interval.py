"""Library for parsing the text rendering of a numeric interval.

The rendering puts a caret on the side of `..` where a bound is excluded:

    1..5     both bounds included
    1^..5    start excluded
    1..^5    end excluded
    -Inf..^0 negative infinite start, end excluded

The grammar is built with pyparsing, and each bound is then converted to an
int, a Decimal or a float infinity.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Union

from pyparsing import Literal, Opt, ParseException, Regex, Suppress

from calrange.exceptions import InvalidFormatError

__all__ = ["ParsedInterval", "parse_interval", "parse_number"]

_LOGGER = logging.getLogger(__name__)

INTEGER_REGEX = re.compile(r"^[-+]?[0-9]+$")
INFINITY = {"inf": math.inf, "+inf": math.inf, "-inf": -math.inf}

_BOUND = Regex(
    r"[-+]?(?:inf|[0-9]*\.?[0-9]+(?:e[-+]?[0-9]+)?)", flags=re.IGNORECASE
)
INTERVAL_GRAMMAR = (
    _BOUND("start")
    + Opt(Literal("^"))("excludes_min")
    + Suppress("..")
    + Opt(Literal("^"))("excludes_max")
    + _BOUND("end")
)

Number = Union[int, Decimal, float]


@dataclass
class ParsedInterval:
    """Bounds and exclusion flags of a parsed interval."""

    start: Number
    end: Number
    excludes_min: bool
    excludes_max: bool


def parse_number(value: str, text: str | None = None) -> Number:
    """Parse an integer, decimal or infinite bound."""
    text = text or value
    value = value.strip()
    if (infinite := INFINITY.get(value.lower())) is not None:
        return infinite
    if INTEGER_REGEX.fullmatch(value):
        return int(value)
    try:
        result = Decimal(value)
    except InvalidOperation as err:
        raise InvalidFormatError(
            f"Expected interval bound to be a number: {text}",
            detailed_error=f"Unable to parse bound '{value}'",
        ) from err
    if not result.is_finite():
        raise InvalidFormatError(f"Expected interval bound to be a number: {text}")
    return result


def parse_interval(text: str) -> ParsedInterval:
    """Parse an interval rendering such as `1^..5` into bounds and flags."""
    try:
        tokens = INTERVAL_GRAMMAR.parse_string(text, parse_all=True)
    except ParseException as err:
        raise InvalidFormatError(
            f"Expected value to match interval pattern: {text}",
            detailed_error=str(err),
        ) from err
    result = ParsedInterval(
        start=parse_number(tokens["start"], text),
        end=parse_number(tokens["end"], text),
        excludes_min=bool(tokens.get("excludes_min")),
        excludes_max=bool(tokens.get("excludes_max")),
    )
    _LOGGER.debug("parse_interval returned %s", result)
    return result

"""Parsers for the instant and interval text grammars."""

from .instant import ParsedInstant, parse_instant
from .interval import ParsedInterval, parse_interval

__all__ = [
    "ParsedInstant",
    "parse_instant",
    "ParsedInterval",
    "parse_interval",
]

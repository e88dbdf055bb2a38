"""
.. include:: ../README.md
"""

__all__ = [
    "bound",
    "compat",
    "exceptions",
    "gregorian",
    "instant",
    "interval",
    "iter",
    "parsing",
    "types",
    "util",
]

"""Value types used by instants and intervals.

The `Duration` and `UtcOffset` types are consumed by `CivilInstant`
arithmetic and rendering. The element type registry describes which python
types an `Interval` can enumerate, count and index.
"""

from .duration import Duration
from .element_types import Discrete, Successor, discrete_for, successor_for
from .utc_offset import UtcOffset

__all__ = [
    "Duration",
    "UtcOffset",
    "Successor",
    "Discrete",
    "successor_for",
    "discrete_for",
]

"""Test fixtures."""

from collections.abc import Generator
import random

import pytest

from calrange.compat import leap_second_compat

SEED = 20151121


@pytest.fixture
def rng() -> random.Random:
    """Fixture for a deterministic random source."""
    return random.Random(SEED)


@pytest.fixture
def unlisted_leap_seconds() -> Generator[None, None, None]:
    """Fixture to allow leap seconds that are not in the leap second table."""
    with leap_second_compat.enable_unlisted_leap_seconds():
        yield

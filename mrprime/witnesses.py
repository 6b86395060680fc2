"""Witness selection and the per-witness Miller-Rabin check."""
from __future__ import annotations

from typing import Iterator

from .entropy import SecureRandomInteger, default_rng
from .errors import InvalidArgument

# (exclusive upper bound, bases). Published bounds (Jaeschke 1993, Pomerance,
# Selfridge & Wagstaff 1980); every composite below the bound fails at least
# one listed base. Do not round these.
DETERMINISTIC_WITNESSES = (
    (2_047, (2,)),
    (1_373_653, (2, 3)),
    (9_080_191, (31, 73)),
    (25_326_001, (2, 3, 5)),
    (3_215_031_751, (2, 3, 5, 7)),
    (4_759_123_141, (2, 7, 61)),
    (1_122_004_669_633, (2, 13, 23, 1662803)),
    (3_474_749_660_383, (2, 3, 5, 7, 11, 13)),
    (341_550_071_728_321, (2, 3, 5, 7, 11, 13, 17)),
)

DETERMINISTIC_LIMIT = DETERMINISTIC_WITNESSES[-1][0]


def deterministic_witnesses(n: int) -> tuple[int, ...] | None:
    for bound, bases in DETERMINISTIC_WITNESSES:
        if n < bound:
            return bases
    return None


def _random_witnesses(n: int, k: int, rng: SecureRandomInteger) -> Iterator[int]:
    # lazy: nothing is drawn for witnesses that are never checked
    for _ in range(k):
        yield rng.random_in_range(2, n - 2)


def select_witnesses(n: int, k: int, rng: SecureRandomInteger | None = None):
    """Witnesses for an odd candidate n >= 5; smaller n are settled before this."""
    if n < 5:
        raise InvalidArgument(f"witness selection needs n >= 5, got {n}")
    bases = deterministic_witnesses(n)
    if bases is not None:
        return bases
    if k < 1:
        raise InvalidArgument(f"k must be >= 1 for n >= {DETERMINISTIC_LIMIT}, got {k}")
    return _random_witnesses(n, k, rng or default_rng())


def check_witness(a: int, d: int, n: int, s: int) -> bool:
    """True if ``a`` is consistent with ``n`` prime, False if it proves n composite."""
    x = pow(a, d, n)
    if x == 1 or x == n - 1:
        return True
    for _ in range(s - 1):
        x = pow(x, 2, n)
        if x == n - 1:
            return True
    return False

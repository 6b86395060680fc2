"""Uniform random integers from a cryptographically secure byte source.

Witnesses must be unpredictable: an adversary who can guess them can build a
composite that passes exactly those bases. The byte source is therefore the OS
CSPRNG unless a caller injects something else (tests inject a seeded DRBG).
"""
from __future__ import annotations

import logging
import secrets
from typing import Callable

from .errors import EntropyUnavailable, InvalidArgument

log = logging.getLogger(__name__)

ByteSource = Callable[[int], bytes]


def system_source(n: int) -> bytes:
    return secrets.token_bytes(n)


def check_int(name, value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an int, got {type(value).__name__}")


class SecureRandomInteger:
    def __init__(self, source: ByteSource | None = None):
        self.source = source or system_source

    def _read(self, nbytes: int) -> bytes:
        try:
            data = self.source(nbytes)
        except Exception as e:
            raise EntropyUnavailable(f"secure random source failed: {e!r}") from e
        if not isinstance(data, (bytes, bytearray)):
            raise EntropyUnavailable(
                f"secure random source returned {type(data).__name__}, not bytes"
            )
        if len(data) != nbytes:
            raise EntropyUnavailable(
                f"secure random source returned {len(data)} of {nbytes} bytes"
            )
        return data

    def random_bits(self, bits: int) -> int:
        """Uniform in [0, 2**bits)."""
        check_int("bits", bits)
        if bits < 0:
            raise InvalidArgument(f"bits must be >= 0, got {bits}")
        if bits == 0:
            return 0
        nbytes = (bits + 7) // 8
        x = int.from_bytes(self._read(nbytes), "big")
        return x & ((1 << bits) - 1)

    def random_in_range(self, lo: int, hi: int) -> int:
        """Uniform in [lo, hi], both ends inclusive.

        Rejection sampling on the smallest bit width that covers the span, so
        more than half of every draw is accepted and there is no modulo bias.
        """
        check_int("lo", lo)
        check_int("hi", hi)
        if hi < lo:
            raise InvalidArgument(f"empty range [{lo}, {hi}]")
        span = hi - lo + 1
        if span == 1:
            return lo
        bits = (span - 1).bit_length()
        draws = 1
        while True:
            x = self.random_bits(bits)
            if x < span:
                if draws > 1:
                    log.debug("accepted after %d draws (span bits=%d)", draws, bits)
                return lo + x
            draws += 1

    def random_below(self, bound: int) -> int:
        check_int("bound", bound)
        if bound < 1:
            raise InvalidArgument(f"bound must be >= 1, got {bound}")
        return self.random_in_range(0, bound - 1)


_default = SecureRandomInteger()


def default_rng() -> SecureRandomInteger:
    return _default


def random_in_range(lo: int, hi: int) -> int:
    return _default.random_in_range(lo, hi)

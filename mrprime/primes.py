from __future__ import annotations

import logging

from .entropy import SecureRandomInteger, check_int, default_rng
from .errors import InvalidArgument
from .witnesses import check_witness, select_witnesses

log = logging.getLogger(__name__)

DEFAULT_ROUNDS = 20
KEYGEN_ROUNDS = 40


def decompose(n: int) -> tuple[int, int]:
    """Return (s, d) with n - 1 == 2**s * d and d odd. Requires odd n >= 3."""
    d = n - 1
    s = 0
    while d & 1 == 0:
        d >>= 1
        s += 1
    return s, d


def miller_rabin(n: int, k: int = DEFAULT_ROUNDS, rng: SecureRandomInteger | None = None) -> bool:
    """Miller-Rabin test.

    False means n is certainly composite. True means n is probably prime, or
    certainly prime when n is below the deterministic witness table's limit.
    ``k`` random witnesses are used above that limit, giving an error bound of
    at most 4**-k.
    """
    check_int("n", n)
    check_int("k", k)
    if k < 0:
        raise InvalidArgument(f"k must be >= 0, got {k}")
    if n < 2:
        return False
    if n == 2 or n == 3:
        return True
    if n & 1 == 0:
        return False

    s, d = decompose(n)
    for a in select_witnesses(n, k, rng):
        if not check_witness(a, d, n, s):
            return False
    return True


def small_primes(limit=10000):
    sieve = bytearray(b"\x01")*(limit+1)
    sieve[0:2] = b"\x00\x00"
    for p in range(2, int(limit**0.5)+1):
        if sieve[p]:
            start = p*p
            sieve[start:limit+1:p] = b"\x00"*(((limit - start)//p)+1)
    return [i for i, v in enumerate(sieve) if v]


SMALL_PRIMES = small_primes(10000)


def trial_division_pass(n: int) -> bool:
    """False if a small prime properly divides n."""
    for p in SMALL_PRIMES:
        if p*p > n:
            break
        if n % p == 0:
            return n == p
    return True


def is_probable_prime(n: int, rounds: int | None = None, rng: SecureRandomInteger | None = None) -> bool:
    check_int("n", n)
    if n < 2 or not trial_division_pass(n):
        return False
    return miller_rabin(n, DEFAULT_ROUNDS if rounds is None else rounds, rng)


def rounds_for_bits(bits: int, target_error_bits: int = 128) -> int:
    # each round errs with probability <= 1/4, i.e. buys two bits
    k = (target_error_bits + 1)//2
    base = 7 if bits <= 1024 else (10 if bits <= 2048 else 12)
    return max(base, k, KEYGEN_ROUNDS)


def random_odd_candidate(bits: int, rng: SecureRandomInteger | None = None) -> int:
    check_int("bits", bits)
    if bits < 2:
        raise InvalidArgument(f"bits must be >= 2, got {bits}")
    x = (rng or default_rng()).random_bits(bits)
    x |= 1 << (bits - 1)  # exact bit length
    x |= 1
    return x


def generate_prime(bits: int, rounds: int = KEYGEN_ROUNDS, rng: SecureRandomInteger | None = None) -> int:
    rng = rng or default_rng()
    tried = 0
    while True:
        n = random_odd_candidate(bits, rng)
        tried += 1
        if not trial_division_pass(n):
            continue
        if miller_rabin(n, rounds, rng):
            log.debug("%d-bit prime after %d candidates", bits, tried)
            return n


def generate_safe_prime(bits: int, rounds: int = KEYGEN_ROUNDS, rng: SecureRandomInteger | None = None) -> int:
    """Prime p = 2q + 1 with q prime and p exactly ``bits`` long."""
    check_int("bits", bits)
    if bits < 3:
        raise InvalidArgument(f"safe prime needs bits >= 3, got {bits}")
    rng = rng or default_rng()
    while True:
        q = generate_prime(bits - 1, rounds, rng)
        p = 2 * q + 1
        if trial_division_pass(p) and miller_rabin(p, rounds, rng):
            return p

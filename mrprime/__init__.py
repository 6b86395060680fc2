from .entropy import SecureRandomInteger, random_in_range
from .errors import EntropyUnavailable, InvalidArgument, MrPrimeError
from .primes import (
    DEFAULT_ROUNDS, KEYGEN_ROUNDS, generate_prime, generate_safe_prime,
    is_probable_prime, miller_rabin,
)

__all__ = [
    "SecureRandomInteger", "random_in_range",
    "EntropyUnavailable", "InvalidArgument", "MrPrimeError",
    "DEFAULT_ROUNDS", "KEYGEN_ROUNDS", "generate_prime", "generate_safe_prime",
    "is_probable_prime", "miller_rabin",
]

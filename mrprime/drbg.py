import hashlib
import hmac
import secrets

from .errors import InvalidArgument


class HmacDrbg:
    """HMAC-DRBG (SP 800-90A style, no prediction resistance).

    Deterministic for a given seed, so it can stand in for the OS source when a
    reproducible witness or candidate stream is needed. Instances are callable
    (``drbg(n) -> bytes``) and plug straight into ``SecureRandomInteger``.
    """
    def __init__(self, seed: bytes, hash_fn=hashlib.sha256):
        if not seed:
            raise InvalidArgument("DRBG seed must be non-empty")
        self.hash_fn = hash_fn
        size = hash_fn().digest_size
        self.K = b"\x00" * size
        self.V = b"\x01" * size
        self.reseed_counter = 1
        self._update(bytes(seed))

    def _hmac(self, key, data):
        return hmac.new(key, data, self.hash_fn).digest()

    def _update(self, provided_data: bytes | None):
        self.K = self._hmac(self.K, self.V + b"\x00" + (provided_data or b""))
        self.V = self._hmac(self.K, self.V)
        if provided_data:
            self.K = self._hmac(self.K, self.V + b"\x01" + provided_data)
            self.V = self._hmac(self.K, self.V)

    def reseed(self, entropy: bytes):
        if not entropy:
            raise InvalidArgument("reseed entropy must be non-empty")
        self._update(bytes(entropy))
        self.reseed_counter = 1

    def random_bytes(self, n: int) -> bytes:
        if n < 0:
            raise InvalidArgument(f"byte count must be >= 0, got {n}")
        chunks = []
        produced = 0
        while produced < n:
            self.V = self._hmac(self.K, self.V)
            chunks.append(self.V)
            produced += len(self.V)
        self._update(None)
        self.reseed_counter += 1
        return b"".join(chunks)[:n]

    __call__ = random_bytes


def new_drbg():
    return HmacDrbg(secrets.token_bytes(48))

import logging

import pytest

from mrprime.audit import HANDLER_NAME
from mrprime.drbg import HmacDrbg
from mrprime.entropy import SecureRandomInteger


@pytest.fixture(autouse=True)
def _quiet_audit(monkeypatch):
    monkeypatch.setenv("MRPRIME_LOG_LEVEL", "WARNING")
    yield
    root = logging.getLogger("mrprime")
    for h in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(h)


@pytest.fixture
def seeded_rng():
    return SecureRandomInteger(HmacDrbg(b"mrprime test seed"))


class ScriptedSource:
    """Byte source that replays fixed chunks and records every request."""

    def __init__(self, chunks):
        self.chunks = list(chunks)
        self.requests = []

    def __call__(self, n):
        self.requests.append(n)
        return self.chunks.pop(0)


@pytest.fixture
def scripted():
    return ScriptedSource

"""
Pytest configuration file

Puts backend/ on the path so tests import modules the same way main.py does,
and provides a controllable clock plus fresh registries per test.
"""
import os
import sys

import pytest

backend_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "backend")
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

from adapters.local.memory_key_store import InMemoryKeyStore  # noqa: E402
from config import DEFAULT_KEYS, WEBHOOK_ENV_VARS  # noqa: E402

BOOT_TIME = 1_700_000_000.0


class FakeClock:
    """Callable returning a settable Unix timestamp."""

    def __init__(self, now: float = BOOT_TIME):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def key_store(clock):
    return InMemoryKeyStore(DEFAULT_KEYS, clock=clock)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove gateway settings that a developer's shell or .env may have set."""
    for var in list(WEBHOOK_ENV_VARS.values()) + ["HOST", "PORT", "DEBUG", "RELAY_TIMEOUT", "SERVICE_NAME"]:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch

"""InMemoryKeyStore — process-local key registry with optional expiry."""

import logging
import math
import secrets
import string
import threading
import time
from datetime import datetime, timezone
from numbers import Real
from typing import Callable, Iterable, Mapping, Optional

from domain.errors import InvalidArgument
from domain.models import (
    InvalidReason, IssuedKey, KeyRecord, KeyView, ValidationResult,
)
from ports.key_store import KeyStorePort

logger = logging.getLogger(__name__)

LIFETIME_TIERS = frozenset({"DEVELOPER", "LIFETIME"})
TOKEN_ALPHABET = string.digits + string.ascii_uppercase
TOKEN_LENGTH = 13


def _new_token(tier: str) -> str:
    suffix = "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))
    return f"{tier}-{suffix}"


def _check_representable(expires_at: float) -> None:
    """Expiry must be a finite instant that datetime can render."""
    if not math.isfinite(expires_at):
        raise InvalidArgument("duration is too large")
    try:
        datetime.fromtimestamp(expires_at, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise InvalidArgument(f"duration is too large: {e}") from e


class InMemoryKeyStore(KeyStorePort):
    """Keys live only for the life of the process; a restart reseeds from bootstrap.

    ``bootstrap`` maps key -> KeyRecord. Expiry for every non-lifetime seed is
    computed once, at construction, as now + valid_for. ``clock`` returns Unix
    seconds and is injectable for tests.

    A key is expired when now > expiry; at the exact instant it is still valid.
    """

    def __init__(
        self,
        bootstrap: Optional[Mapping[str, KeyRecord]] = None,
        clock: Callable[[], float] = time.time,
        lifetime_tiers: Iterable[str] = LIFETIME_TIERS,
    ):
        self._clock = clock
        self._lifetime_tiers = frozenset(lifetime_tiers)
        self._lock = threading.Lock()
        self._records: dict[str, KeyRecord] = {}
        self._expiry: dict[str, float] = {}

        now = self._clock()
        for key, record in (bootstrap or {}).items():
            self._insert(key, record, now)

    def _insert(self, key: str, record: KeyRecord, now: float) -> Optional[float]:
        self._records[key] = record
        if record.is_lifetime:
            return None
        expires_at = now + record.valid_for
        self._expiry[key] = expires_at
        return expires_at

    def is_lifetime_tier(self, tier: str) -> bool:
        return tier in self._lifetime_tiers

    def validate(self, key: Optional[str]) -> ValidationResult:
        if key is not None and not isinstance(key, str):
            raise InvalidArgument(f"key must be a string, got {type(key).__name__}")
        if not key:
            return ValidationResult.invalid(InvalidReason.MISSING)

        with self._lock:
            record = self._records.get(key)
            expires_at = self._expiry.get(key)

        if record is None:
            return ValidationResult.invalid(InvalidReason.NOT_FOUND)
        if record.is_lifetime:
            return ValidationResult(valid=True, tier=record.tier, is_lifetime=True)
        if self._clock() > expires_at:
            return ValidationResult.invalid(InvalidReason.EXPIRED)
        return ValidationResult(
            valid=True,
            tier=record.tier,
            is_lifetime=False,
            valid_for=record.valid_for,
            expires_at=expires_at,
        )

    def issue(self, tier: str, duration_hours: float) -> IssuedKey:
        if not isinstance(tier, str) or not tier:
            raise InvalidArgument("tier must be a non-empty string")
        if isinstance(duration_hours, bool) or not isinstance(duration_hours, Real):
            raise InvalidArgument("duration must be a number of hours")
        try:
            finite = math.isfinite(duration_hours)
        except OverflowError:
            finite = False
        if not finite:
            raise InvalidArgument("duration must be finite")

        now = self._clock()
        is_lifetime = self.is_lifetime_tier(tier)
        if is_lifetime:
            record = KeyRecord(tier=tier, is_lifetime=True)
        else:
            if duration_hours <= 0:
                raise InvalidArgument("duration must be positive")
            valid_for = duration_hours * 60 * 60
            _check_representable(now + valid_for)
            record = KeyRecord(tier=tier, is_lifetime=False, valid_for=valid_for)

        with self._lock:
            key = _new_token(tier)
            while key in self._records:
                key = _new_token(tier)
            expires_at = self._insert(key, record, now)

        logger.info(f"New key generated: {key} tier={tier}")
        return IssuedKey(
            key=key,
            tier=record.tier,
            is_lifetime=record.is_lifetime,
            valid_for=record.valid_for,
            expires_at=expires_at,
        )

    def list_keys(self) -> list[KeyView]:
        with self._lock:
            entries = [(key, record, self._expiry.get(key)) for key, record in self._records.items()]
        now = self._clock()
        return [
            KeyView(
                key=key,
                tier=record.tier,
                is_lifetime=record.is_lifetime,
                expires_at=expires_at,
                is_expired=expires_at is not None and now > expires_at,
            )
            for key, record, expires_at in entries
        ]

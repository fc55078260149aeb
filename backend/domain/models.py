"""Framework-agnostic domain models for the key gateway.

The Pydantic DTOs in models.py are the HTTP shapes; these are what the
registry and relay work with. Mappers convert at the boundary.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Opaque JSON body forwarded by the relay. Never parsed past the API edge.
Payload = bytes


class Channel(str, Enum):
    """Outbound notification destinations."""
    KEY_TRACKING = "key_tracking"
    DEVELOPER_ACTIVITY = "developer_activity"
    ALL_ACTIVITY = "all_activity"


class InvalidReason(str, Enum):
    MISSING = "missing"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"


@dataclass(frozen=True)
class KeyRecord:
    """Tier metadata for one access key. valid_for is in seconds."""
    tier: str
    is_lifetime: bool
    valid_for: Optional[float] = None


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: Optional[InvalidReason] = None
    tier: Optional[str] = None
    is_lifetime: Optional[bool] = None
    valid_for: Optional[float] = None
    expires_at: Optional[float] = None

    @classmethod
    def invalid(cls, reason: InvalidReason) -> "ValidationResult":
        return cls(valid=False, reason=reason)


@dataclass(frozen=True)
class IssuedKey:
    """A freshly generated key. expires_at is None for lifetime keys."""
    key: str
    tier: str
    is_lifetime: bool
    valid_for: Optional[float] = None
    expires_at: Optional[float] = None


@dataclass(frozen=True)
class KeyView:
    """One registry entry as seen by List, with expiry resolved against now."""
    key: str
    tier: str
    is_lifetime: bool
    expires_at: Optional[float]
    is_expired: bool

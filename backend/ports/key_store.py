"""KeyStorePort — abstract interface for access key issuance and validation."""

from abc import ABC, abstractmethod
from typing import Optional

from domain.models import IssuedKey, KeyView, ValidationResult


class KeyStorePort(ABC):
    @abstractmethod
    def validate(self, key: Optional[str]) -> ValidationResult:
        """Check a key. Unknown or expired keys are results, not errors."""

    @abstractmethod
    def issue(self, tier: str, duration_hours: float) -> IssuedKey:
        """Generate and register a new key for ``tier``."""

    @abstractmethod
    def list_keys(self) -> list[KeyView]:
        """Return a snapshot of every registered key."""

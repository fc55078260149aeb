"""Key use cases — verification, issuance and listing on top of KeyStorePort."""

import logging
from dataclasses import dataclass
from typing import Optional

from domain.models import InvalidReason, IssuedKey, KeyView, ValidationResult
from ports.key_store import KeyStorePort

logger = logging.getLogger(__name__)

DEFAULT_TIER = "BASIC"
DEFAULT_DURATION_HOURS = 11


@dataclass
class VerifyKeyRequest:
    """userId and hwid come from the client script; they are only logged."""
    key: Optional[str] = None
    user_id: Optional[str] = None
    hwid: Optional[str] = None


@dataclass
class IssueKeyRequest:
    tier: str = DEFAULT_TIER
    duration_hours: float = DEFAULT_DURATION_HOURS


class VerifyKeyUseCase:
    def __init__(self, key_store: KeyStorePort):
        self._key_store = key_store

    def execute(self, req: VerifyKeyRequest) -> ValidationResult:
        logger.info(f"Key verification request: key={req.key} userId={req.user_id} hwid={req.hwid}")
        result = self._key_store.validate(req.key)

        if result.valid:
            logger.info(f"Key valid: {req.key} tier={result.tier}")
        elif result.reason == InvalidReason.EXPIRED:
            logger.info(f"Key expired: {req.key}")
        elif result.reason == InvalidReason.NOT_FOUND:
            logger.info(f"Invalid key: {req.key}")
        return result


class IssueKeyUseCase:
    def __init__(self, key_store: KeyStorePort):
        self._key_store = key_store

    def execute(self, req: IssueKeyRequest) -> IssuedKey:
        return self._key_store.issue(req.tier, req.duration_hours)


class ListKeysUseCase:
    def __init__(self, key_store: KeyStorePort):
        self._key_store = key_store

    def execute(self) -> list[KeyView]:
        return self._key_store.list_keys()

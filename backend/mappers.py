"""Domain <-> DTO mappers.

Converts registry results (domain dataclasses) to the Pydantic wire models
and inbound request DTOs to use-case requests.
"""

from datetime import datetime, timezone
from typing import Optional, Union

from domain.models import InvalidReason, IssuedKey, KeyView, ValidationResult
from models import (
    GenerateKeyRequest, GenerateKeyResponse, KeyListItem, VerifyRequest, VerifyResponse,
)
from use_cases.keys import IssueKeyRequest, VerifyKeyRequest

NEVER = "Never"

INVALID_MESSAGES = {
    InvalidReason.MISSING: "Key not provided",
    InvalidReason.NOT_FOUND: "Key is invalid or not found",
    InvalidReason.EXPIRED: "Key has expired",
}


def whole_seconds(seconds: Optional[float]) -> Optional[Union[int, float]]:
    """Durations go on the wire as integers when they have no fractional part."""
    if seconds is None or not float(seconds).is_integer():
        return seconds
    return int(seconds)


def to_iso8601(ts: Optional[float]) -> str:
    """Unix seconds -> ISO-8601 UTC with milliseconds and a Z suffix, or "Never"."""
    if ts is None:
        return NEVER
    dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def dto_to_verify_request(dto: Optional[VerifyRequest]) -> VerifyKeyRequest:
    if dto is None:
        return VerifyKeyRequest()
    return VerifyKeyRequest(
        key=dto.key,
        user_id=str(dto.user_id) if dto.user_id is not None else None,
        hwid=dto.hwid,
    )


def dto_to_issue_request(dto: Optional[GenerateKeyRequest]) -> IssueKeyRequest:
    if dto is None:
        return IssueKeyRequest()
    return IssueKeyRequest(tier=dto.tier, duration_hours=dto.duration)


def validation_to_dto(result: ValidationResult) -> VerifyResponse:
    if not result.valid:
        return VerifyResponse(
            valid=False,
            reason=result.reason.value,
            message=INVALID_MESSAGES[result.reason],
        )
    if result.is_lifetime:
        return VerifyResponse(valid=True, tier=result.tier, is_lifetime=True, expires_at=None)
    return VerifyResponse(
        valid=True,
        tier=result.tier,
        is_lifetime=False,
        valid_for=whole_seconds(result.valid_for),
        expires_at=result.expires_at,
    )


def issued_to_dto(issued: IssuedKey) -> GenerateKeyResponse:
    return GenerateKeyResponse(
        key=issued.key,
        tier=issued.tier,
        is_lifetime=issued.is_lifetime,
        valid_for=whole_seconds(issued.valid_for),
    )


def view_to_dto(view: KeyView) -> KeyListItem:
    return KeyListItem(
        key=view.key,
        tier=view.tier,
        is_lifetime=view.is_lifetime,
        expires_at=to_iso8601(view.expires_at),
        is_expired=view.is_expired,
    )


def views_to_dtos(views: list[KeyView]) -> list[KeyListItem]:
    return [view_to_dto(v) for v in views]

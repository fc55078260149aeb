from typing import Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr


class CamelModel(BaseModel):
    """Wire models use camelCase field names; Python code uses snake_case."""
    model_config = ConfigDict(populate_by_name=True)


class VerifyRequest(CamelModel):
    key: Optional[StrictStr] = None
    user_id: Optional[Union[StrictStr, int]] = Field(default=None, alias="userId")
    hwid: Optional[StrictStr] = None


class VerifyResponse(CamelModel):
    """Only explicitly set fields are serialized; expiresAt is null for lifetime keys."""
    valid: bool
    reason: Optional[str] = None
    message: Optional[str] = None
    tier: Optional[str] = None
    is_lifetime: Optional[bool] = Field(default=None, alias="isLifetime")
    valid_for: Optional[Union[int, float]] = Field(default=None, alias="validFor")
    expires_at: Optional[float] = Field(default=None, alias="expiresAt")


class GenerateKeyRequest(CamelModel):
    tier: StrictStr = "BASIC"
    duration: Union[StrictInt, StrictFloat] = 11


class GenerateKeyResponse(CamelModel):
    success: bool = True
    key: str
    tier: str
    is_lifetime: bool = Field(alias="isLifetime")
    valid_for: Optional[Union[int, float]] = Field(default=None, alias="validFor")


class KeyListItem(CamelModel):
    key: str
    tier: str
    is_lifetime: bool = Field(alias="isLifetime")
    expires_at: str = Field(alias="expiresAt")
    is_expired: bool = Field(alias="isExpired")


class KeyListResponse(BaseModel):
    keys: List[KeyListItem]


class ForwardResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    code: str


class StatusResponse(BaseModel):
    status: str = "online"
    service: str
    endpoints: Dict[str, str]

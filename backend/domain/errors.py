"""Error taxonomy for the key gateway.

Every failure carries an explicit ``kind`` and a wire ``code``. Key-domain
outcomes (not found, expired) are not errors; they come back as
ValidationResult reasons.
"""

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "invalid_argument"
    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    INTERNAL = "internal"


class GatewayError(Exception):
    """Base exception for gateway failures."""
    kind: ErrorKind = ErrorKind.INTERNAL
    code: str = "INTERNAL_ERROR"


class InvalidArgument(GatewayError):
    """Raised when a request has the wrong shape or type."""
    kind = ErrorKind.INVALID_ARGUMENT
    code = "INVALID_ARGUMENT"


class RelayError(GatewayError):
    """Base exception for notification relay failures."""


class ConfigurationError(RelayError):
    """Raised when a channel has no destination configured."""
    kind = ErrorKind.CONFIGURATION
    code = "WEBHOOK_NOT_CONFIGURED"


class TransportError(RelayError):
    """Raised when the outbound delivery fails (HTTP error, timeout, connection)."""
    kind = ErrorKind.TRANSPORT
    code = "DISCORD_ERROR"


class InternalError(GatewayError):
    """Raised for unexpected failures."""

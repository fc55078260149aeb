"""FastAPI application factory for the key gateway.

Routes are thin: parse the DTO, run a use case, map the result. Every
GatewayError is turned into an ErrorResponse by its ``kind``.
"""

import json
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from config import Config, create_infra_adapters, get_config
from domain.errors import ErrorKind, GatewayError, InvalidArgument
from domain.models import Channel
from mappers import (
    dto_to_issue_request, dto_to_verify_request, issued_to_dto,
    validation_to_dto, views_to_dtos,
)
from models import (
    ErrorResponse, ForwardResponse, GenerateKeyRequest, GenerateKeyResponse,
    KeyListResponse, StatusResponse, VerifyRequest,
)
from use_cases.keys import IssueKeyUseCase, ListKeysUseCase, VerifyKeyUseCase
from use_cases.relay import ForwardNotificationUseCase

logger = logging.getLogger(__name__)

VERIFY_PATH = "/webhook/verify"
GENERATE_KEY_PATH = "/webhook/generate-key"
LIST_KEYS_PATH = "/webhook/keys"

FORWARD_PATHS = {
    Channel.KEY_TRACKING: "/webhook/discord/key-tracking",
    Channel.DEVELOPER_ACTIVITY: "/webhook/discord/developer-activity",
    Channel.ALL_ACTIVITY: "/webhook/discord/all-activity",
}

STATUS_CODES = {
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.CONFIGURATION: 400,
    ErrorKind.TRANSPORT: 500,
    ErrorKind.INTERNAL: 500,
}

ERROR_PREFIXES = {
    ErrorKind.TRANSPORT: "Failed to send Discord webhook: ",
    ErrorKind.INTERNAL: "Server error: ",
}


def _error_response(kind: ErrorKind, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ERROR_PREFIXES.get(kind, "") + message, code=code)
    return JSONResponse(status_code=STATUS_CODES[kind], content=body.model_dump())


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        return _error_response(exc.kind, exc.code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        detail = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in errors
        )
        logger.warning(f"Rejected malformed request to {request.url.path}: {detail}")
        return _error_response(ErrorKind.INVALID_ARGUMENT, InvalidArgument.code, detail or "Invalid request")

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}: {exc}")
        return _error_response(ErrorKind.INTERNAL, "INTERNAL_ERROR", str(exc))


def _parse_json_payload(body: bytes) -> bytes:
    """Check the body is JSON without interpreting it. An empty body relays as {}."""
    if not body.strip():
        return b"{}"
    try:
        json.loads(body)
    except ValueError as e:
        raise InvalidArgument(f"Request body must be valid JSON: {e}") from e
    return body


def create_app(cfg: Optional[Config] = None, adapters: Optional[dict] = None) -> FastAPI:
    cfg = cfg or get_config()
    adapters = adapters or create_infra_adapters(cfg)

    app = FastAPI(title=cfg.service_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _install_error_handlers(app)

    app.state.key_store = adapters["key_store"]
    app.state.notifier = adapters["notifier"]

    verify_key = VerifyKeyUseCase(app.state.key_store)
    issue_key = IssueKeyUseCase(app.state.key_store)
    list_keys = ListKeysUseCase(app.state.key_store)
    forward = ForwardNotificationUseCase(app.state.notifier)

    @app.get("/", response_model=StatusResponse)
    def status():
        endpoints = {
            "verify": VERIFY_PATH,
            "keyTracking": FORWARD_PATHS[Channel.KEY_TRACKING],
            "developerActivity": FORWARD_PATHS[Channel.DEVELOPER_ACTIVITY],
            "allActivity": FORWARD_PATHS[Channel.ALL_ACTIVITY],
            "generateKey": GENERATE_KEY_PATH,
            "listKeys": LIST_KEYS_PATH,
        }
        return StatusResponse(service=cfg.service_name, endpoints=endpoints)

    @app.post(VERIFY_PATH)
    def verify(body: Optional[VerifyRequest] = None):
        result = verify_key.execute(dto_to_verify_request(body))
        # Invalid keys are a normal 200 answer; only set fields go on the wire.
        return validation_to_dto(result).model_dump(by_alias=True, exclude_unset=True)

    @app.post(GENERATE_KEY_PATH, response_model=GenerateKeyResponse, response_model_by_alias=True)
    def generate_key(body: Optional[GenerateKeyRequest] = None):
        issued = issue_key.execute(dto_to_issue_request(body))
        return issued_to_dto(issued)

    @app.get(LIST_KEYS_PATH, response_model=KeyListResponse, response_model_by_alias=True)
    def keys():
        return KeyListResponse(keys=views_to_dtos(list_keys.execute()))

    def make_forwarder(channel: Channel):
        async def forward_to_channel(request: Request):
            payload = _parse_json_payload(await request.body())
            # Blocking HTTP call; runs on the threadpool, not the event loop.
            await run_in_threadpool(forward.execute, channel, payload)
            return ForwardResponse()
        return forward_to_channel

    for channel, path in FORWARD_PATHS.items():
        app.add_api_route(
            path,
            make_forwarder(channel),
            methods=["POST"],
            response_model=ForwardResponse,
            responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
            name=f"forward_{channel.value}",
        )

    return app

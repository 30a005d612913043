"""
Exception handlers.

Renders module exceptions as the standard error response. Request body
validation failures are reported as missing input, so every failure
shares the ``{"error": ..., "code": ...}`` shape.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from modules.wallets.exceptions import MissingInputError
from shared.exceptions import WalletlinkError

from ..models.errors import ErrorResponse

logger = logging.getLogger(__name__)


async def walletlink_error_handler(request: Request, exc: WalletlinkError) -> JSONResponse:
    """Convert a WalletlinkError into a JSON error response."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.code}")

    body = ErrorResponse.from_error(exc)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def _invalid_field(exc: RequestValidationError) -> str:
    """Name of the first body field that failed validation."""
    for error in exc.errors():
        loc = error.get("loc", ())
        if len(loc) > 1 and isinstance(loc[-1], str):
            return loc[-1]
    return "body"


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report an unusable request body as a missing input (400)."""
    return await walletlink_error_handler(request, MissingInputError(_invalid_field(exc)))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error handlers to an application."""
    app.add_exception_handler(WalletlinkError, walletlink_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

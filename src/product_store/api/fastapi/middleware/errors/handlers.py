from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from product_store.exceptions import ProductStoreError

logger = logging.getLogger(__name__)


def _describe(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "invalid request body"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


def _bad_request(request: Request, message: str) -> JSONResponse:
    logger.info(
        "Rejected %s %s (400): %s",
        request.method,
        request.url.path,
        message,
        extra={"http_method": request.method, "path": request.url.path, "status_code": 400},
    )
    # Errors travel as a bare JSON string body.
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=message)


def register_error_handlers(app: FastAPI) -> None:
    """Map store errors and undecodable payloads to 400 responses."""

    @app.exception_handler(ProductStoreError)
    async def _store_error(request: Request, exc: ProductStoreError) -> JSONResponse:
        return _bad_request(request, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _bad_request(request, _describe(exc))

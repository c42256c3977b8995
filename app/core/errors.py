# app/core/errors.py
from typing import Any, Dict, Optional
from enum import Enum

from fastapi import FastAPI, HTTPException, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder

from core.logger import get_logger

log = get_logger(__name__)


class ErrorCode(str, Enum):
    UNAUTHORIZED = "unauthorized"        # 401
    NOT_FOUND = "not_found"              # 404
    CONFLICT = "conflict"                # 409
    VALIDATION_ERROR = "validation_error"# 400
    INTERNAL_ERROR = "internal_error"    # 500
    BAD_REQUEST = "bad_request"          # 400


def http_error(
    *,
    status_code: int,
    code: ErrorCode,
    message: str,
    meta: Optional[Dict[str, Any]] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> HTTPException:
    """
    Standardized HTTPException factory.
    Frontend should key on `code` for i18n and behavior.
    `extra` keys are merged into the top level of the error body.
    """
    detail = {
        "code": code.value,
        "message": message,
    }
    if meta:
        detail["meta"] = meta
    if extra:
        detail["extra"] = extra
    return HTTPException(status_code=status_code, detail=detail)


def _body(code: str, message: str, **extra: Any) -> Dict[str, Any]:
    return {"success": False, "code": code, "message": message, **extra}


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc.detail, dict):
        detail = exc.detail
        body = _body(detail.get("code", ErrorCode.BAD_REQUEST.value), detail.get("message", ""))
        if "meta" in detail:
            body["meta"] = detail["meta"]
        body.update(detail.get("extra", {}))
    else:
        # Starlette-raised errors (404 route, 405 method) carry a plain string
        body = _body(f"http_{exc.status_code}", str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    log.warning("Request validation failed", extra={"meta": {"path": request.url.path}})
    return JSONResponse(
        status_code=400,
        content=_body(
            ErrorCode.VALIDATION_ERROR.value,
            "The request body is invalid",
            errors=jsonable_encoder(exc.errors(), exclude={"input", "ctx"}),
        ),
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error("Unhandled error", exc_info=exc, extra={"meta": {"path": request.url.path}})
    return JSONResponse(
        status_code=500,
        content=_body(ErrorCode.INTERNAL_ERROR.value, "An unexpected error occurred"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Render every error as {success: false, code, message}."""
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)

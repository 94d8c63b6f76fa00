"""Request-id propagation, request logging, and JSON error payloads."""

from __future__ import annotations

from time import perf_counter
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from fastapi import status
from fastapi.exceptions import RequestValidationError, ResponseValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_planner.core.config import settings
from task_planner.core.errors import (
    CategoryInUseError,
    NotFoundError,
    PersistenceError,
    TaskPlannerError,
    ValidationError,
)
from task_planner.core.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastapi import FastAPI
    from starlette.requests import Request
    from starlette.responses import Response

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-Id"
_HEALTH_PATHS = frozenset({"/health", "/healthz", "/readyz"})
_DOMAIN_STATUS = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    CategoryInUseError: status.HTTP_400_BAD_REQUEST,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _json_safe(value: object) -> object:
    """Coerce validation-error context into JSON-serializable values."""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, dict):
        return {str(key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    if isinstance(value, memoryview):
        return value.tobytes().decode("utf-8", errors="replace")
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def _get_request_id(request: Request) -> str | None:
    request_id = getattr(request.state, "request_id", None)
    if isinstance(request_id, str) and request_id:
        return request_id
    return None


def _error_payload(*, detail: object, request_id: str | None) -> dict[str, Any]:
    payload: dict[str, Any] = {"detail": detail}
    if request_id is not None:
        payload["request_id"] = request_id
    return payload


def _json_response(
    request: Request,
    *,
    status_code: int,
    payload: dict[str, Any],
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    request_id = _get_request_id(request)
    response_headers = dict(headers or {})
    if request_id is not None:
        response_headers[REQUEST_ID_HEADER] = request_id
    return JSONResponse(status_code=status_code, content=payload, headers=response_headers)


async def _request_validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    if not isinstance(exc, RequestValidationError):
        msg = "Expected RequestValidationError"
        raise TypeError(msg)
    payload = _error_payload(detail=_json_safe(exc.errors()), request_id=_get_request_id(request))
    return _json_response(
        request,
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        payload=payload,
    )


async def _response_validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    if not isinstance(exc, ResponseValidationError):
        msg = "Expected ResponseValidationError"
        raise TypeError(msg)
    logger.error(
        "http.response.validation_failed",
        extra={"path": request.url.path, "errors": _json_safe(exc.errors())},
    )
    payload = _error_payload(detail="Internal Server Error", request_id=_get_request_id(request))
    return _json_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        payload=payload,
    )


async def _http_exception_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    if not isinstance(exc, StarletteHTTPException):
        msg = "Expected StarletteHTTPException"
        raise TypeError(msg)
    payload = _error_payload(detail=exc.detail, request_id=_get_request_id(request))
    return _json_response(
        request,
        status_code=exc.status_code,
        payload=payload,
        headers=exc.headers,
    )


async def _task_planner_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    if not isinstance(exc, TaskPlannerError):
        msg = "Expected TaskPlannerError"
        raise TypeError(msg)
    status_code = _DOMAIN_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    payload = _error_payload(detail=exc.message, request_id=_get_request_id(request))
    payload["code"] = exc.code
    if isinstance(exc, CategoryInUseError):
        payload["task_count"] = exc.count
    if isinstance(exc, PersistenceError):
        payload["retryable"] = True
        logger.error(
            "http.request.persistence_failed",
            extra={"path": request.url.path, "error": exc.message},
        )
    return _json_response(request, status_code=status_code, payload=payload)


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "http.request.unhandled_exception",
        exc_info=exc,
        extra={"method": request.method, "path": request.url.path},
    )
    payload = _error_payload(detail="Internal Server Error", request_id=_get_request_id(request))
    return _json_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        payload=payload,
    )


def _should_log_request(path: str) -> bool:
    return settings.request_log_include_health or path not in _HEALTH_PATHS


async def _request_id_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    incoming = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    request_id = incoming or uuid4().hex
    request.state.request_id = request_id

    started = perf_counter()
    response = await call_next(request)
    elapsed_ms = int((perf_counter() - started) * 1000)

    response.headers[REQUEST_ID_HEADER] = request_id
    path = request.url.path
    if _should_log_request(path):
        extra = {
            "method": request.method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": elapsed_ms,
            "request_id": request_id,
        }
        logger.debug("http.request.completed", extra=extra)
        if settings.request_log_slow_ms and elapsed_ms >= settings.request_log_slow_ms:
            logger.warning(
                "http.request.slow",
                extra={**extra, "slow_threshold_ms": settings.request_log_slow_ms},
            )
    return response


def install_error_handling(app: FastAPI) -> None:
    """Register request-id middleware and JSON exception handlers on *app*."""
    app.middleware("http")(_request_id_middleware)
    app.add_exception_handler(RequestValidationError, _request_validation_exception_handler)
    app.add_exception_handler(ResponseValidationError, _response_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_exception_handler)
    app.add_exception_handler(TaskPlannerError, _task_planner_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)

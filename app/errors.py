"""Failure taxonomy and the JSON error envelope.

Services signal failures with builtin exceptions:

* ``LookupError``: the lookup key matched nothing (404)
* ``ValueError``: validation failure or unique-key conflict (400)
* anything else: unexpected (500)

Routes convert them with :func:`map_error`; the handlers registered by
:func:`register_exception_handlers` render every failure as
``{"success": false, "message": ..., "error": ...}``.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.schemas.common import ErrorResponse

logger = structlog.get_logger("taxfarm.errors")


class ApiError(Exception):
	def __init__(self, status_code: int, message: str, error: str | None = None) -> None:
		super().__init__(message)
		self.status_code = status_code
		self.message = message
		self.error = error


def _redact(detail: str) -> str | None:
	return None if get_settings().is_production else detail


def map_error(exc: Exception, message: str) -> ApiError:
	if isinstance(exc, ApiError):
		return exc
	if isinstance(exc, LookupError):
		return ApiError(status.HTTP_404_NOT_FOUND, str(exc))
	if isinstance(exc, ValueError):
		return ApiError(status.HTTP_400_BAD_REQUEST, message, str(exc))
	logger.exception("unexpected_failure", message=message, error=str(exc))
	return ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, message, _redact(str(exc)))


def _render(status_code: int, message: str, error: str | None = None) -> JSONResponse:
	body = ErrorResponse(message=message, error=error)
	return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _format_validation_errors(exc: RequestValidationError) -> str:
	parts = []
	for err in exc.errors():
		location = ".".join(str(item) for item in err.get("loc", ()) if item != "body")
		parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
	return "; ".join(parts)


async def _api_error_handler(_request: Request, exc: ApiError) -> JSONResponse:
	return _render(exc.status_code, exc.message, exc.error)


async def _validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
	return _render(status.HTTP_400_BAD_REQUEST, "Validation failed", _format_validation_errors(exc))


async def _http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
	if exc.status_code == status.HTTP_404_NOT_FOUND:
		return _render(exc.status_code, "Route not found")
	return _render(exc.status_code, str(exc.detail))


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
	logger.exception("unhandled_exception", path=request.url.path, error=str(exc))
	return _render(
		status.HTTP_500_INTERNAL_SERVER_ERROR,
		"Something went wrong!",
		_redact(str(exc)),
	)


def register_exception_handlers(app: FastAPI) -> None:
	app.add_exception_handler(ApiError, _api_error_handler)  # type: ignore[arg-type]
	app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
	app.add_exception_handler(StarletteHTTPException, _http_error_handler)  # type: ignore[arg-type]
	app.add_exception_handler(Exception, _unhandled_error_handler)

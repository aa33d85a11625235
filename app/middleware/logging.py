"""Structured logging setup and per-request access logs with request IDs."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import LogFormat, get_settings

REQUEST_ID_HEADER = "x-request-id"

_configured = False


def configure_structured_logging() -> None:
	"""Configure stdlib + structlog once per process."""
	global _configured
	if _configured:
		return

	settings = get_settings()
	log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

	if settings.log_format == LogFormat.json:
		renderer: Any = structlog.processors.JSONRenderer()
		logging.basicConfig(level=log_level, format="%(message)s")
	else:
		renderer = structlog.dev.ConsoleRenderer()
		logging.basicConfig(level=log_level)

	# access lines are emitted by RequestLoggingMiddleware instead
	logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

	structlog.configure(
		processors=[
			structlog.contextvars.merge_contextvars,
			structlog.processors.add_log_level,
			structlog.processors.TimeStamper(fmt="iso", utc=True),
			structlog.processors.format_exc_info,
			renderer,
		],
		wrapper_class=structlog.make_filtering_bound_logger(log_level),
		logger_factory=structlog.PrintLoggerFactory(),
		cache_logger_on_first_use=True,
	)
	structlog.contextvars.bind_contextvars(environment=settings.environment.value)
	_configured = True


class RequestLoggingMiddleware(BaseHTTPMiddleware):
	"""Bind a request ID for the duration of the request and log its outcome.

	The ID is taken from the ``x-request-id`` header when the caller sends
	one and echoed back on the response either way.
	"""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
		request.state.request_id = request_id

		structlog.contextvars.bind_contextvars(
			request_id=request_id,
			method=request.method,
			path=request.url.path,
		)
		logger = structlog.get_logger("taxfarm.request")
		start = time.perf_counter()

		try:
			response = await call_next(request)
		except Exception as exc:
			logger.exception(
				"http_request_failed",
				duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
				error=str(exc),
			)
			structlog.contextvars.unbind_contextvars("request_id", "method", "path")
			raise

		response.headers[REQUEST_ID_HEADER] = request_id
		log = logger.warning if response.status_code >= 500 else logger.info
		log(
			"http_request",
			client=request.client.host if request.client else None,
			status_code=response.status_code,
			duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
		)
		structlog.contextvars.unbind_contextvars("request_id", "method", "path")
		return response

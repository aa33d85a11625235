"""Baseline security response headers."""

from __future__ import annotations

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

SECURITY_HEADERS: dict[str, str] = {
	"x-content-type-options": "nosniff",
	"x-frame-options": "SAMEORIGIN",
	"x-dns-prefetch-control": "off",
	"referrer-policy": "no-referrer",
	"cross-origin-resource-policy": "same-origin",
	"strict-transport-security": "max-age=15552000; includeSubDomains",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
	"""Add hardening headers to every response that does not already set them."""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		response = await call_next(request)
		for name, value in SECURITY_HEADERS.items():
			response.headers.setdefault(name, value)
		return response

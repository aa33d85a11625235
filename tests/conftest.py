"""Shared pytest fixtures: async test client and fake database sessions."""

from __future__ import annotations

import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.database import get_db
from app.main import app


class FakeResult:
	"""Stand-in for both ``Result`` and ``ScalarResult`` as the services use them."""

	def __init__(self, items: list[Any] | None = None, rows: list[tuple[Any, ...]] | None = None) -> None:
		self.items = items or []
		self.rows = rows or []

	def scalar_one_or_none(self) -> Any:
		return self.items[0] if self.items else None

	def one_or_none(self) -> Any:
		return self.items[0] if self.items else None

	def scalars(self) -> FakeResult:
		return self

	def all(self) -> list[Any]:
		return list(self.rows) if self.rows else list(self.items)


class FakeAsyncSession:
	def __init__(self) -> None:
		self.commit = AsyncMock()
		self.rollback = AsyncMock()
		self.close = AsyncMock()
		self.execute = AsyncMock(return_value=FakeResult())
		self.scalar = AsyncMock(return_value=0)
		self.scalars = AsyncMock(return_value=FakeResult())
		self.flush = AsyncMock()
		self.refresh = AsyncMock(side_effect=self._refresh)
		self.delete = AsyncMock()
		self.added: list[Any] = []

	def add(self, obj: Any) -> None:
		self.added.append(obj)

	def add_all(self, objs: list[Any]) -> None:
		self.added.extend(objs)

	@staticmethod
	async def _refresh(obj: Any) -> None:
		# Simulates the server-side defaults a real flush + refresh would load.
		now = datetime.now(UTC)
		if getattr(obj, "id", None) is None:
			obj.id = uuid.uuid4()
		if getattr(obj, "created_at", None) is None:
			obj.created_at = now
		obj.updated_at = now


@pytest.fixture
def fake_db_session() -> FakeAsyncSession:
	"""A lightweight async-session stub for dependency overrides in API tests."""
	return FakeAsyncSession()


@asynccontextmanager
async def _client_for(fake_db_session: FakeAsyncSession, **transport_kwargs: Any) -> AsyncGenerator[AsyncClient, None]:
	async def override_get_db() -> AsyncGenerator[Any, None]:
		yield fake_db_session

	app.dependency_overrides[get_db] = override_get_db
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan

	transport = ASGITransport(app=app, **transport_kwargs)
	try:
		async with AsyncClient(transport=transport, base_url="http://test") as test_client:
			yield test_client
	finally:
		app.router.lifespan_context = original_lifespan
		app.dependency_overrides.clear()


@pytest.fixture
async def client(fake_db_session: FakeAsyncSession) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and DB dependency mocked."""
	async with _client_for(fake_db_session) as test_client:
		yield test_client


@pytest.fixture
async def lenient_client(fake_db_session: FakeAsyncSession) -> AsyncGenerator[AsyncClient, None]:
	"""Like ``client`` but unhandled app exceptions come back as 500 responses."""
	async with _client_for(fake_db_session, raise_app_exceptions=False) as test_client:
		yield test_client


@pytest.fixture
def now_utc() -> datetime:
	return datetime.now(UTC)

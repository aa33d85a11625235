"""Wallet user service: lookup, authenticate-or-create, updates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

import structlog
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import flush_or_conflict
from app.models.users import User
from app.schemas.users import UserAuthRequest, UserUpdate

logger = structlog.get_logger("taxfarm.users")


@dataclass(slots=True)
class AuthResult:
	user: User
	is_new_user: bool


class UserService:
	def __init__(self, db: AsyncSession):
		self.db = db

	async def list_users(self) -> list[User]:
		rows = await self.db.execute(select(User).order_by(User.created_at.asc()))
		return list(rows.scalars().all())

	async def get_user(self, wallet_address: str) -> User:
		row = await self.db.execute(
			select(User).where(User.wallet_address == self.normalize_address(wallet_address))
		)
		user = row.scalar_one_or_none()
		if user is None:
			raise LookupError("User not found")
		return user

	async def authenticate(self, payload: UserAuthRequest) -> AuthResult:
		"""Create the user on first sight, otherwise refresh ``last_login``.

		The insert is a single ``INSERT ... ON CONFLICT DO NOTHING RETURNING``,
		so two concurrent first logins for one address create exactly one row;
		the loser of the race gets no row back and falls through to the
		existing-user branch.
		"""
		if not payload.wallet_address:
			raise ValueError("Wallet address is required")

		now = datetime.now(UTC)
		values: dict[str, object] = {
			"wallet_address": payload.wallet_address,
			"is_active": True,
			"last_login": now,
		}
		if payload.chain_id is not None:
			values["chain_id"] = payload.chain_id
		if payload.balance is not None:
			values["balance"] = payload.balance

		stmt = (
			insert(User)
			.values(**values)
			.on_conflict_do_nothing(index_elements=[User.wallet_address])
			.returning(User)
		)
		created = await self.db.scalars(stmt, execution_options={"populate_existing": True})
		user = created.one_or_none()
		if user is not None:
			logger.info("user_created", wallet_address=user.wallet_address)
			return AuthResult(user=user, is_new_user=True)

		user = await self.get_user(payload.wallet_address)
		user.last_login = now
		if payload.chain_id is not None:
			user.chain_id = payload.chain_id
		if payload.balance is not None:
			user.balance = payload.balance
		await self._save(user)
		return AuthResult(user=user, is_new_user=False)

	async def update_user(self, wallet_address: str, payload: UserUpdate) -> User:
		user = await self.get_user(wallet_address)
		for key, value in payload.model_dump(exclude_unset=True).items():
			if value is not None:
				setattr(user, key, value)
		return await self._save(user)

	async def update_balance(self, wallet_address: str, balance: str | None) -> User:
		if not balance:
			raise ValueError("Balance is required")
		user = await self.get_user(wallet_address)
		user.balance = balance
		return await self._save(user)

	async def delete_user(self, wallet_address: str) -> None:
		user = await self.get_user(wallet_address)
		await self.db.delete(user)
		await self.db.flush()

	async def _save(self, user: User) -> User:
		await flush_or_conflict(self.db, "User with this wallet address already exists")
		await self.db.refresh(user)
		return user

	@staticmethod
	def normalize_address(wallet_address: str) -> str:
		return wallet_address.strip().lower()

"""Pydantic request/response schemas for wallet users."""

from __future__ import annotations

import re
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import CamelModel

WALLET_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")


def normalize_wallet_address(value: str | None) -> str | None:
	if value is None or not value.strip():
		return None
	value = value.strip()
	if not WALLET_ADDRESS_RE.match(value):
		raise ValueError("Please enter a valid Ethereum wallet address")
	return value.lower()


class _UserInput(CamelModel):
	model_config = ConfigDict(coerce_numbers_to_str=True)


class UserAuthRequest(_UserInput):
	# Presence is checked by the service so a missing address reads "Wallet address is required".
	wallet_address: str | None = None
	chain_id: int | None = None
	balance: str | None = None

	@field_validator("wallet_address")
	@classmethod
	def normalize_address(cls, value: str | None) -> str | None:
		return normalize_wallet_address(value)


class UserUpdate(_UserInput):
	wallet_address: str | None = None
	chain_id: int | None = None
	balance: str | None = None
	is_active: bool | None = None

	@field_validator("wallet_address")
	@classmethod
	def normalize_address(cls, value: str | None) -> str | None:
		return normalize_wallet_address(value)


class BalanceUpdate(_UserInput):
	balance: str | None = None

	@field_validator("balance", mode="before")
	@classmethod
	def drop_falsy_balance(cls, value: object) -> object:
		# 0, 0.0 and false count as missing, same as an empty string
		return value or None


class UserRead(CamelModel):
	id: uuid.UUID
	wallet_address: str
	chain_id: int
	balance: str
	is_active: bool
	last_login: datetime
	created_at: datetime
	updated_at: datetime


class UserAuthRead(UserRead):
	is_new_user: bool


class UserResponse(BaseModel):
	success: bool = True
	user: UserRead


class UserMessageResponse(BaseModel):
	success: bool = True
	message: str
	user: UserRead


class UserAuthResponse(BaseModel):
	success: bool = True
	message: str
	user: UserAuthRead = Field(description="Stored user plus the transient isNewUser flag")

"""Pydantic request/response schemas for crop tokens."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import Field, field_validator

from app.models.enums import CropStatusEnum
from app.schemas.common import CamelModel


class CropCreate(CamelModel):
	name: str = Field(min_length=1, max_length=100)
	symbol: str = Field(min_length=1, max_length=32)
	crop: str = Field(min_length=1, max_length=255)
	image: str = Field(min_length=1, max_length=1024)
	land_area: str = Field(min_length=1, max_length=100)
	yield_season: str = Field(min_length=1, max_length=100)
	status: CropStatusEnum = CropStatusEnum.coming_soon
	tvl: str = Field(min_length=1, max_length=100)
	apy: str = Field(min_length=1, max_length=100)
	yield_logic: str = Field(min_length=10, max_length=500)
	bg_color: str = Field(min_length=1, max_length=100)
	status_color: str = Field(min_length=1, max_length=100)

	@field_validator("symbol")
	@classmethod
	def normalize_symbol(cls, value: str | None) -> str | None:
		return value.upper() if value is not None else None


class CropUpdate(CamelModel):
	"""Partial merge: unset (or null) fields keep their stored value."""

	name: str | None = Field(default=None, min_length=1, max_length=100)
	symbol: str | None = Field(default=None, min_length=1, max_length=32)
	crop: str | None = Field(default=None, min_length=1, max_length=255)
	image: str | None = Field(default=None, min_length=1, max_length=1024)
	land_area: str | None = Field(default=None, min_length=1, max_length=100)
	yield_season: str | None = Field(default=None, min_length=1, max_length=100)
	status: CropStatusEnum | None = None
	tvl: str | None = Field(default=None, min_length=1, max_length=100)
	apy: str | None = Field(default=None, min_length=1, max_length=100)
	yield_logic: str | None = Field(default=None, min_length=10, max_length=500)
	bg_color: str | None = Field(default=None, min_length=1, max_length=100)
	status_color: str | None = Field(default=None, min_length=1, max_length=100)

	@field_validator("symbol")
	@classmethod
	def normalize_symbol(cls, value: str | None) -> str | None:
		return value.upper() if value is not None else None


class CropStatusUpdate(CamelModel):
	# Checked against CropStatusEnum by the service so the error names the allowed values.
	status: str | None = None


class CropRead(CamelModel):
	id: uuid.UUID
	name: str
	symbol: str
	crop: str
	image: str
	land_area: str
	yield_season: str
	status: CropStatusEnum
	tvl: str
	apy: str
	yield_logic: str
	bg_color: str
	status_color: str
	is_active: bool
	created_at: datetime
	updated_at: datetime

"""Shared response envelopes and the camelCase base model."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
	"""Snake_case fields in Python, camelCase keys on the wire (both accepted on input)."""

	model_config = ConfigDict(
		alias_generator=to_camel,
		populate_by_name=True,
		from_attributes=True,
		str_strip_whitespace=True,
	)


class ErrorResponse(BaseModel):
	success: bool = False
	message: str
	error: str | None = None


class MessageResponse(BaseModel):
	success: bool = True
	message: str


class DataResponse(BaseModel, Generic[T]):
	success: bool = True
	data: T


class MessageDataResponse(BaseModel, Generic[T]):
	success: bool = True
	message: str
	data: T


class ListResponse(BaseModel, Generic[T]):
	success: bool = True
	count: int
	data: list[T]


class SeedResponse(ListResponse[T], Generic[T]):
	message: str

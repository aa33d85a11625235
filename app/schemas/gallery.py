"""Pydantic request/response schemas for gallery images."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator

from app.models.enums import GalleryLabelEnum, PlotStatusEnum, RegionEnum
from app.schemas.common import CamelModel


def _not_in_future(value: datetime | None) -> datetime | None:
	if value is None:
		return None
	if value.tzinfo is None:
		value = value.replace(tzinfo=UTC)
	if value > datetime.now(UTC):
		raise ValueError("Date cannot be in the future")
	return value


class GalleryImageCreate(CamelModel):
	plot_name: str = Field(min_length=2, max_length=100)
	plot_id: int = Field(ge=1)
	status: PlotStatusEnum
	crop: str = Field(min_length=2, max_length=50)
	region: RegionEnum
	label: GalleryLabelEnum
	caption: str = Field(min_length=10, max_length=500)
	date: datetime
	image: str = Field(min_length=1, max_length=1024)
	image_alt: str | None = Field(default=None, max_length=200)
	is_active: bool = True

	@field_validator("date")
	@classmethod
	def check_date(cls, value: datetime) -> datetime:
		return _not_in_future(value)


class GalleryImageUpdate(CamelModel):
	"""Partial merge; sending ``imageAlt: null`` re-derives the alt text."""

	plot_name: str | None = Field(default=None, min_length=2, max_length=100)
	plot_id: int | None = Field(default=None, ge=1)
	status: PlotStatusEnum | None = None
	crop: str | None = Field(default=None, min_length=2, max_length=50)
	region: RegionEnum | None = None
	label: GalleryLabelEnum | None = None
	caption: str | None = Field(default=None, min_length=10, max_length=500)
	date: datetime | None = None
	image: str | None = Field(default=None, min_length=1, max_length=1024)
	image_alt: str | None = Field(default=None, max_length=200)
	is_active: bool | None = None

	@field_validator("date")
	@classmethod
	def check_date(cls, value: datetime | None) -> datetime | None:
		return _not_in_future(value)


class GalleryFilter(BaseModel):
	"""Raw query-string filters; ``"all"`` or empty means unfiltered."""

	crop: str | None = None
	status: str | None = None
	region: str | None = None
	label: str | None = None
	plotId: str | None = None


class GalleryImageRead(CamelModel):
	id: uuid.UUID
	plot_name: str
	plot_id: int
	status: PlotStatusEnum
	crop: str
	region: RegionEnum
	label: GalleryLabelEnum
	caption: str
	date: datetime
	image: str
	image_alt: str
	is_active: bool
	status_color: str
	label_color: str
	created_at: datetime
	updated_at: datetime


class FilteredGalleryResponse(BaseModel):
	success: bool = True
	count: int
	data: list[GalleryImageRead]
	filters: GalleryFilter


class PlotGalleryResponse(BaseModel):
	success: bool = True
	count: int
	plotId: int
	data: list[GalleryImageRead]


class FilterOptions(BaseModel):
	crops: list[str]
	regions: list[str]
	statuses: list[str]
	labels: list[str]


class StatsBucket(BaseModel):
	value: str
	count: int


class StatsBreakdown(CamelModel):
	by_status: list[StatsBucket] = Field(default_factory=list)
	by_region: list[StatsBucket] = Field(default_factory=list)
	by_label: list[StatsBucket] = Field(default_factory=list)


class GalleryStats(CamelModel):
	total_images: int
	breakdown: StatsBreakdown
	recent_images: list[GalleryImageRead] = Field(default_factory=list)

"""Gallery image CRUD, filtering and statistics service."""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import InstrumentedAttribute

from app.database import flush_or_conflict
from app.models.enums import GalleryLabelEnum, PlotStatusEnum, RegionEnum
from app.models.gallery import GalleryImage
from app.schemas.gallery import (
	FilterOptions,
	GalleryFilter,
	GalleryImageCreate,
	GalleryImageRead,
	GalleryImageUpdate,
	GalleryStats,
	StatsBreakdown,
	StatsBucket,
)

logger = structlog.get_logger("taxfarm.gallery")

RECENT_IMAGES_LIMIT = 5

_SEED_IMAGES: list[dict[str, Any]] = [
	{
		"plot_name": "Green Valley Farm",
		"plot_id": 1,
		"status": PlotStatusEnum.cultivation,
		"crop": "Potatoes",
		"region": RegionEnum.midwest,
		"label": GalleryLabelEnum.drone,
		"caption": "Aerial view of our 247-acre potato cultivation showing healthy crop growth during peak season.",
		"date": datetime(2024, 8, 15, tzinfo=UTC),
		"image": "/assets/gallery/drone-1.jpg",
		"is_active": True,
	},
	{
		"plot_name": "Sunny Acres",
		"plot_id": 2,
		"status": PlotStatusEnum.acquired,
		"crop": "Corn",
		"region": RegionEnum.midwest,
		"label": GalleryLabelEnum.before,
		"caption": "Freshly acquired 156-acre plot prepared for corn planting in the upcoming spring season.",
		"date": datetime(2024, 3, 10, tzinfo=UTC),
		"image": "/assets/gallery/before-1.jpg",
		"is_active": True,
	},
	{
		"plot_name": "Mountain View Ranch",
		"plot_id": 3,
		"status": PlotStatusEnum.harvested,
		"crop": "Wheat",
		"region": RegionEnum.northwest,
		"label": GalleryLabelEnum.harvest,
		"caption": "Successful wheat harvest from our 312-acre plot yielding exceptional quality grain.",
		"date": datetime(2024, 9, 22, tzinfo=UTC),
		"image": "/assets/gallery/harvest-1.jpg",
		"is_active": True,
	},
	{
		"plot_name": "Riverside Farm",
		"plot_id": 4,
		"status": PlotStatusEnum.cultivation,
		"crop": "Avocados",
		"region": RegionEnum.southwest,
		"label": GalleryLabelEnum.drone,
		"caption": "Drone footage of our organic avocado orchard showing mature trees ready for year-round harvest.",
		"date": datetime(2024, 7, 30, tzinfo=UTC),
		"image": "/assets/gallery/drone-2.jpg",
		"is_active": True,
	},
	{
		"plot_name": "Prairie Fields",
		"plot_id": 5,
		"status": PlotStatusEnum.acquired,
		"crop": "Soybeans",
		"region": RegionEnum.southeast,
		"label": GalleryLabelEnum.before,
		"caption": "Newly acquired 89-acre field being prepared for soybean cultivation with sustainable farming practices.",
		"date": datetime(2024, 4, 5, tzinfo=UTC),
		"image": "/assets/gallery/before-2.jpg",
		"is_active": True,
	},
	{
		"plot_name": "Golden Plains",
		"plot_id": 6,
		"status": PlotStatusEnum.harvested,
		"crop": "Corn",
		"region": RegionEnum.midwest,
		"label": GalleryLabelEnum.harvest,
		"caption": "Corn harvest season in full swing with high-quality grain being collected and processed.",
		"date": datetime(2024, 10, 12, tzinfo=UTC),
		"image": "/assets/gallery/harvest-2.jpg",
		"is_active": True,
	},
]

_Query = Callable[[AsyncSession], Awaitable[Any]]


def _is_unfiltered(value: str | None) -> bool:
	return value is None or value.strip() == "" or value.strip() == "all"


def _parse_enum(enum_cls: type[StrEnum], value: str, field: str) -> StrEnum:
	try:
		return enum_cls(value.strip())
	except ValueError:
		allowed = ", ".join(member.value for member in enum_cls)
		raise ValueError(f"{field} must be one of: {allowed}") from None


def parse_plot_id(value: str | int) -> int:
	try:
		plot_id = int(value)
	except (TypeError, ValueError):
		raise ValueError(f"plotId must be an integer, got {value!r}") from None
	if plot_id < 1:
		raise ValueError("plotId must be a positive number")
	return plot_id


class GalleryService:
	"""Service for gallery image CRUD, soft deletion and aggregate reads.

	``session_factory`` is only needed by :meth:`get_stats`, which runs its
	independent reads concurrently, each on a session of its own.  Without a
	factory the reads run one after another on ``db``.
	"""

	def __init__(
		self,
		db: AsyncSession,
		session_factory: async_sessionmaker[AsyncSession] | None = None,
	):
		self.db = db
		self.session_factory = session_factory

	async def list_active(self) -> list[GalleryImage]:
		return await self._active_images(self.db)

	async def list_filtered(self, filters: GalleryFilter) -> list[GalleryImage]:
		stmt = select(GalleryImage).where(GalleryImage.is_active.is_(True))
		if not _is_unfiltered(filters.crop):
			stmt = stmt.where(GalleryImage.crop.icontains(filters.crop.strip(), autoescape=True))
		if not _is_unfiltered(filters.status):
			stmt = stmt.where(GalleryImage.status == _parse_enum(PlotStatusEnum, filters.status, "status"))
		if not _is_unfiltered(filters.region):
			stmt = stmt.where(GalleryImage.region == _parse_enum(RegionEnum, filters.region, "region"))
		if not _is_unfiltered(filters.label):
			stmt = stmt.where(GalleryImage.label == _parse_enum(GalleryLabelEnum, filters.label, "label"))
		if not _is_unfiltered(filters.plotId):
			stmt = stmt.where(GalleryImage.plot_id == parse_plot_id(filters.plotId))

		rows = await self.db.execute(stmt.order_by(GalleryImage.date.desc()))
		return list(rows.scalars().all())

	async def get_image(self, image_id: uuid.UUID) -> GalleryImage:
		row = await self.db.execute(select(GalleryImage).where(GalleryImage.id == image_id))
		image = row.scalar_one_or_none()
		if image is None:
			raise LookupError("Gallery image not found")
		return image

	async def list_by_plot(self, plot_id: int) -> list[GalleryImage]:
		stmt = (
			select(GalleryImage)
			.where(GalleryImage.plot_id == plot_id, GalleryImage.is_active.is_(True))
			.order_by(GalleryImage.date.desc())
		)
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())

	async def create_image(self, payload: GalleryImageCreate) -> GalleryImage:
		image = GalleryImage(**payload.model_dump())
		return await self._save(image, add=True)

	async def update_image(self, image_id: uuid.UUID, payload: GalleryImageUpdate) -> GalleryImage:
		image = await self.get_image(image_id)
		for key, value in payload.model_dump(exclude_unset=True).items():
			if value is None and key != "image_alt":
				continue
			setattr(image, key, value)
		return await self._save(image)

	async def soft_delete_image(self, image_id: uuid.UUID) -> GalleryImage:
		image = await self.get_image(image_id)
		image.is_active = False
		await self.db.flush()
		return image

	async def hard_delete_image(self, image_id: uuid.UUID) -> None:
		image = await self.get_image(image_id)
		await self.db.delete(image)
		await self.db.flush()

	async def get_filter_options(self) -> FilterOptions:
		crops = await self.db.execute(select(GalleryImage.crop).distinct())
		regions = await self.db.execute(select(GalleryImage.region).distinct())
		return FilterOptions(
			crops=sorted(str(value) for value in crops.scalars().all()),
			regions=sorted(str(value) for value in regions.scalars().all()),
			statuses=[member.value for member in PlotStatusEnum],
			labels=[member.value for member in GalleryLabelEnum],
		)

	async def get_stats(self) -> GalleryStats:
		queries: list[_Query] = [
			self._count_active,
			lambda db: self._count_by(db, GalleryImage.status),
			lambda db: self._count_by(db, GalleryImage.region),
			lambda db: self._count_by(db, GalleryImage.label),
			lambda db: self._active_images(db, limit=RECENT_IMAGES_LIMIT),
		]
		if self.session_factory is None:
			results = [await query(self.db) for query in queries]
		else:
			results = await asyncio.gather(*(self._in_own_session(query) for query in queries))

		total, by_status, by_region, by_label, recent = results
		return GalleryStats(
			total_images=total,
			breakdown=StatsBreakdown(by_status=by_status, by_region=by_region, by_label=by_label),
			recent_images=[GalleryImageRead.model_validate(image) for image in recent],
		)

	async def seed_images(self) -> list[GalleryImage]:
		existing = await self.db.scalar(select(func.count()).select_from(GalleryImage))
		if existing:
			raise ValueError("Gallery images already seeded. Use individual endpoints to add more images.")

		images = [GalleryImage(**record) for record in _SEED_IMAGES]
		for image in images:
			image.ensure_image_alt()
		self.db.add_all(images)
		await flush_or_conflict(self.db, "Error seeding gallery images")
		for image in images:
			await self.db.refresh(image)
		logger.info("gallery_seeded", count=len(images))
		return images

	async def _save(self, image: GalleryImage, add: bool = False) -> GalleryImage:
		image.ensure_image_alt()
		if add:
			self.db.add(image)
		await flush_or_conflict(self.db, "Error saving gallery image")
		await self.db.refresh(image)
		return image

	async def _in_own_session(self, query: _Query) -> Any:
		assert self.session_factory is not None
		async with self.session_factory() as session:
			return await query(session)

	@staticmethod
	async def _active_images(db: AsyncSession, limit: int | None = None) -> list[GalleryImage]:
		stmt = (
			select(GalleryImage)
			.where(GalleryImage.is_active.is_(True))
			.order_by(GalleryImage.date.desc())
		)
		if limit is not None:
			stmt = stmt.limit(limit)
		rows = await db.execute(stmt)
		return list(rows.scalars().all())

	@staticmethod
	async def _count_active(db: AsyncSession) -> int:
		stmt = select(func.count()).select_from(GalleryImage).where(GalleryImage.is_active.is_(True))
		return int(await db.scalar(stmt) or 0)

	@staticmethod
	async def _count_by(db: AsyncSession, column: InstrumentedAttribute[Any]) -> list[StatsBucket]:
		count = func.count().label("count")
		stmt = (
			select(column, count)
			.where(GalleryImage.is_active.is_(True))
			.group_by(column)
			.order_by(count.desc())
		)
		rows = await db.execute(stmt)
		return [StatsBucket(value=str(value), count=int(total)) for value, total in rows.all()]

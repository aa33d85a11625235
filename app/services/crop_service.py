"""Crop token CRUD service."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import structlog
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import flush_or_conflict
from app.models.crops import Crop
from app.models.enums import CropStatusEnum
from app.schemas.crops import CropCreate, CropUpdate

logger = structlog.get_logger("taxfarm.crops")

_SEED_CROPS: list[dict[str, Any]] = [
	{
		"name": "$POTATO",
		"symbol": "SPOTATO",
		"crop": "Premium Potatoes",
		"image": "/assets/potato-crop.jpg",
		"land_area": "247 acres",
		"yield_season": "Sep - Nov 2024",
		"status": CropStatusEnum.active,
		"tvl": "$142,000",
		"apy": "12.4%",
		"yield_logic": "Harvest revenue distributed proportionally to token holders",
		"bg_color": "bg-bright-green",
		"status_color": "bg-green-500",
	},
	{
		"name": "$AVOCADO",
		"symbol": "SAVOCADO",
		"crop": "Organic Avocados",
		"image": "/assets/avocado-crop.jpg",
		"land_area": "89 acres",
		"yield_season": "Year-round",
		"status": CropStatusEnum.active,
		"tvl": "$89,500",
		"apy": "15.2%",
		"yield_logic": "Monthly harvest yields shared among all token holders",
		"bg_color": "bg-accent",
		"status_color": "bg-green-500",
	},
	{
		"name": "$CORN",
		"symbol": "SCORN",
		"crop": "Sweet Corn",
		"image": "/assets/corn-crop.jpg",
		"land_area": "156 acres",
		"yield_season": "Aug - Oct 2024",
		"status": CropStatusEnum.coming_soon,
		"tvl": "TBD",
		"apy": "Est. 11.8%",
		"yield_logic": "Seasonal harvest profits distributed to holders quarterly",
		"bg_color": "bg-orange",
		"status_color": "bg-yellow-500",
	},
	{
		"name": "$WHEAT",
		"symbol": "SWHEAT",
		"crop": "Golden Wheat",
		"image": "/assets/wheat-crop.jpg",
		"land_area": "312 acres",
		"yield_season": "Jun - Aug 2024",
		"status": CropStatusEnum.coming_soon,
		"tvl": "TBD",
		"apy": "Est. 10.5%",
		"yield_logic": "Annual wheat sales revenue shared proportionally with token holders",
		"bg_color": "bg-peach",
		"status_color": "bg-yellow-500",
	},
]

_STATUS_VALUES = ", ".join(member.value for member in CropStatusEnum)


class CropService:
	"""Service for crop token lookup, creation, status transitions and seeding."""

	def __init__(self, db: AsyncSession):
		self.db = db

	async def list_crops(self) -> list[Crop]:
		rows = await self.db.execute(select(Crop).order_by(Crop.created_at.asc(), Crop.name.asc()))
		return list(rows.scalars().all())

	async def list_active_crops(self) -> list[Crop]:
		stmt = (
			select(Crop)
			.where(Crop.status == CropStatusEnum.active, Crop.is_active.is_(True))
			.order_by(Crop.created_at.asc(), Crop.name.asc())
		)
		rows = await self.db.execute(stmt)
		return list(rows.scalars().all())

	async def get_crop(self, symbol: str) -> Crop:
		row = await self.db.execute(select(Crop).where(Crop.symbol == self.normalize_symbol(symbol)))
		crop = row.scalar_one_or_none()
		if crop is None:
			raise LookupError("Crop not found")
		return crop

	async def create_crop(self, payload: CropCreate) -> Crop:
		stmt = select(Crop).where(or_(Crop.name == payload.name, Crop.symbol == payload.symbol))
		row = await self.db.execute(stmt.limit(1))
		if row.scalar_one_or_none() is not None:
			raise ValueError("Crop with this name or symbol already exists")

		crop = Crop(**payload.model_dump())
		return await self._save(crop, add=True)

	async def update_crop(self, symbol: str, payload: CropUpdate) -> Crop:
		crop = await self.get_crop(symbol)
		for key, value in payload.model_dump(exclude_unset=True).items():
			if value is not None:
				setattr(crop, key, value)
		return await self._save(crop)

	async def update_status(self, symbol: str, status: str | None) -> Crop:
		new_status = self.parse_status(status)
		crop = await self.get_crop(symbol)
		crop.status = new_status
		return await self._save(crop)

	async def delete_crop(self, symbol: str) -> None:
		crop = await self.get_crop(symbol)
		await self.db.delete(crop)
		await self.db.flush()

	async def seed_crops(self) -> list[Crop]:
		existing = await self.db.scalar(select(func.count()).select_from(Crop))
		if existing:
			raise ValueError("Crops already seeded. Use individual endpoints to add more crops.")

		crops = [Crop(**record) for record in _SEED_CROPS]
		# rows from one transaction would share now(); stagger so listings keep seed order
		now = datetime.now(UTC)
		for offset, crop in enumerate(crops):
			crop.created_at = now + timedelta(microseconds=offset)
			crop.sync_is_active()
		self.db.add_all(crops)
		await flush_or_conflict(self.db, "Error seeding crops")
		for crop in crops:
			await self.db.refresh(crop)
		logger.info("crops_seeded", count=len(crops))
		return crops

	async def _save(self, crop: Crop, add: bool = False) -> Crop:
		crop.sync_is_active()
		if add:
			self.db.add(crop)
		await flush_or_conflict(self.db, "Crop with this name or symbol already exists")
		await self.db.refresh(crop)
		return crop

	@staticmethod
	def normalize_symbol(symbol: str) -> str:
		return symbol.strip().upper()

	@staticmethod
	def parse_status(status: str | None) -> CropStatusEnum:
		try:
			return CropStatusEnum(status)
		except ValueError:
			raise ValueError(f"Valid status is required ({_STATUS_VALUES})") from None

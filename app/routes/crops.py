"""Crop token routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.errors import map_error
from app.schemas.common import DataResponse, ListResponse, MessageDataResponse, MessageResponse, SeedResponse
from app.schemas.crops import CropCreate, CropRead, CropStatusUpdate, CropUpdate
from app.services.crop_service import CropService

router = APIRouter(prefix="/crops", tags=["crops"])


def _to_crop_read(crop: object) -> CropRead:
	return CropRead.model_validate(crop)


@router.get("", response_model=ListResponse[CropRead])
async def list_crops(db: AsyncSession = Depends(get_db)) -> ListResponse[CropRead]:
	try:
		crops = await CropService(db).list_crops()
	except Exception as exc:
		raise map_error(exc, "Error fetching crops") from exc
	return ListResponse[CropRead](count=len(crops), data=[_to_crop_read(crop) for crop in crops])


@router.get("/active", response_model=ListResponse[CropRead])
async def list_active_crops(db: AsyncSession = Depends(get_db)) -> ListResponse[CropRead]:
	try:
		crops = await CropService(db).list_active_crops()
	except Exception as exc:
		raise map_error(exc, "Error fetching active crops") from exc
	return ListResponse[CropRead](count=len(crops), data=[_to_crop_read(crop) for crop in crops])


@router.post("/seed", response_model=SeedResponse[CropRead], status_code=status.HTTP_201_CREATED)
async def seed_crops(db: AsyncSession = Depends(get_db)) -> SeedResponse[CropRead]:
	try:
		crops = await CropService(db).seed_crops()
	except Exception as exc:
		raise map_error(exc, "Error seeding crops") from exc
	return SeedResponse[CropRead](
		message="Crops seeded successfully",
		count=len(crops),
		data=[_to_crop_read(crop) for crop in crops],
	)


@router.get("/{symbol}", response_model=DataResponse[CropRead])
async def get_crop(symbol: str, db: AsyncSession = Depends(get_db)) -> DataResponse[CropRead]:
	try:
		crop = await CropService(db).get_crop(symbol)
	except Exception as exc:
		raise map_error(exc, "Error fetching crop") from exc
	return DataResponse[CropRead](data=_to_crop_read(crop))


@router.post("", response_model=MessageDataResponse[CropRead], status_code=status.HTTP_201_CREATED)
async def create_crop(
	payload: CropCreate,
	db: AsyncSession = Depends(get_db),
) -> MessageDataResponse[CropRead]:
	try:
		crop = await CropService(db).create_crop(payload)
	except Exception as exc:
		raise map_error(exc, "Error creating crop") from exc
	return MessageDataResponse[CropRead](message="Crop created successfully", data=_to_crop_read(crop))


@router.put("/{symbol}", response_model=MessageDataResponse[CropRead])
async def update_crop(
	symbol: str,
	payload: CropUpdate,
	db: AsyncSession = Depends(get_db),
) -> MessageDataResponse[CropRead]:
	try:
		crop = await CropService(db).update_crop(symbol, payload)
	except Exception as exc:
		raise map_error(exc, "Error updating crop") from exc
	return MessageDataResponse[CropRead](message="Crop updated successfully", data=_to_crop_read(crop))


@router.put("/{symbol}/status", response_model=MessageDataResponse[CropRead])
async def update_crop_status(
	symbol: str,
	payload: CropStatusUpdate,
	db: AsyncSession = Depends(get_db),
) -> MessageDataResponse[CropRead]:
	try:
		crop = await CropService(db).update_status(symbol, payload.status)
	except Exception as exc:
		raise map_error(exc, "Error updating crop status") from exc
	return MessageDataResponse[CropRead](message="Crop status updated successfully", data=_to_crop_read(crop))


@router.delete("/{symbol}", response_model=MessageResponse)
async def delete_crop(symbol: str, db: AsyncSession = Depends(get_db)) -> MessageResponse:
	try:
		await CropService(db).delete_crop(symbol)
	except Exception as exc:
		raise map_error(exc, "Error deleting crop") from exc
	return MessageResponse(message="Crop deleted successfully")

"""Gallery image routes."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import async_session_factory, get_db
from app.errors import map_error
from app.schemas.common import DataResponse, ListResponse, MessageDataResponse, MessageResponse, SeedResponse
from app.schemas.gallery import (
	FilteredGalleryResponse,
	FilterOptions,
	GalleryFilter,
	GalleryImageCreate,
	GalleryImageRead,
	GalleryImageUpdate,
	GalleryStats,
	PlotGalleryResponse,
)
from app.services.gallery_service import GalleryService

router = APIRouter(prefix="/gallery", tags=["gallery"])


def _to_image_read(image: object) -> GalleryImageRead:
	return GalleryImageRead.model_validate(image)


@router.get("", response_model=ListResponse[GalleryImageRead])
async def list_gallery_images(db: AsyncSession = Depends(get_db)) -> ListResponse[GalleryImageRead]:
	try:
		images = await GalleryService(db).list_active()
	except Exception as exc:
		raise map_error(exc, "Error fetching gallery images") from exc
	return ListResponse[GalleryImageRead](count=len(images), data=[_to_image_read(image) for image in images])


@router.get("/filter", response_model=FilteredGalleryResponse)
async def filter_gallery_images(
	crop: str | None = Query(default=None),
	status_: str | None = Query(default=None, alias="status"),
	region: str | None = Query(default=None),
	label: str | None = Query(default=None),
	plot_id: str | None = Query(default=None, alias="plotId"),
	db: AsyncSession = Depends(get_db),
) -> FilteredGalleryResponse:
	filters = GalleryFilter(crop=crop, status=status_, region=region, label=label, plotId=plot_id)
	try:
		images = await GalleryService(db).list_filtered(filters)
	except Exception as exc:
		raise map_error(exc, "Error fetching filtered gallery images") from exc
	return FilteredGalleryResponse(
		count=len(images),
		data=[_to_image_read(image) for image in images],
		filters=filters,
	)


@router.get("/options", response_model=DataResponse[FilterOptions])
async def get_filter_options(db: AsyncSession = Depends(get_db)) -> DataResponse[FilterOptions]:
	try:
		options = await GalleryService(db).get_filter_options()
	except Exception as exc:
		raise map_error(exc, "Error fetching filter options") from exc
	return DataResponse[FilterOptions](data=options)


@router.get("/stats", response_model=DataResponse[GalleryStats])
async def get_gallery_stats(db: AsyncSession = Depends(get_db)) -> DataResponse[GalleryStats]:
	service = GalleryService(db, session_factory=async_session_factory)
	try:
		stats = await service.get_stats()
	except Exception as exc:
		raise map_error(exc, "Error fetching gallery statistics") from exc
	return DataResponse[GalleryStats](data=stats)


@router.post("/seed", response_model=SeedResponse[GalleryImageRead], status_code=status.HTTP_201_CREATED)
async def seed_gallery_images(db: AsyncSession = Depends(get_db)) -> SeedResponse[GalleryImageRead]:
	try:
		images = await GalleryService(db).seed_images()
	except Exception as exc:
		raise map_error(exc, "Error seeding gallery images") from exc
	return SeedResponse[GalleryImageRead](
		message="Gallery images seeded successfully",
		count=len(images),
		data=[_to_image_read(image) for image in images],
	)


@router.get("/plot/{plot_id}", response_model=PlotGalleryResponse)
async def list_plot_images(
	plot_id: int = Path(ge=1),
	db: AsyncSession = Depends(get_db),
) -> PlotGalleryResponse:
	try:
		images = await GalleryService(db).list_by_plot(plot_id)
	except Exception as exc:
		raise map_error(exc, "Error fetching gallery images for plot") from exc
	return PlotGalleryResponse(
		count=len(images),
		plotId=plot_id,
		data=[_to_image_read(image) for image in images],
	)


@router.get("/{image_id}", response_model=DataResponse[GalleryImageRead])
async def get_gallery_image(
	image_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
) -> DataResponse[GalleryImageRead]:
	try:
		image = await GalleryService(db).get_image(image_id)
	except Exception as exc:
		raise map_error(exc, "Error fetching gallery image") from exc
	return DataResponse[GalleryImageRead](data=_to_image_read(image))


@router.post("", response_model=MessageDataResponse[GalleryImageRead], status_code=status.HTTP_201_CREATED)
async def create_gallery_image(
	payload: GalleryImageCreate,
	db: AsyncSession = Depends(get_db),
) -> MessageDataResponse[GalleryImageRead]:
	try:
		image = await GalleryService(db).create_image(payload)
	except Exception as exc:
		raise map_error(exc, "Error creating gallery image") from exc
	return MessageDataResponse[GalleryImageRead](
		message="Gallery image created successfully",
		data=_to_image_read(image),
	)


@router.put("/{image_id}", response_model=MessageDataResponse[GalleryImageRead])
async def update_gallery_image(
	image_id: uuid.UUID,
	payload: GalleryImageUpdate,
	db: AsyncSession = Depends(get_db),
) -> MessageDataResponse[GalleryImageRead]:
	try:
		image = await GalleryService(db).update_image(image_id, payload)
	except Exception as exc:
		raise map_error(exc, "Error updating gallery image") from exc
	return MessageDataResponse[GalleryImageRead](
		message="Gallery image updated successfully",
		data=_to_image_read(image),
	)


@router.delete("/{image_id}", response_model=MessageResponse)
async def delete_gallery_image(image_id: uuid.UUID, db: AsyncSession = Depends(get_db)) -> MessageResponse:
	try:
		await GalleryService(db).soft_delete_image(image_id)
	except Exception as exc:
		raise map_error(exc, "Error deleting gallery image") from exc
	return MessageResponse(message="Gallery image deleted successfully")


@router.delete("/{image_id}/hard", response_model=MessageResponse)
async def hard_delete_gallery_image(image_id: uuid.UUID, db: AsyncSession = Depends(get_db)) -> MessageResponse:
	try:
		await GalleryService(db).hard_delete_image(image_id)
	except Exception as exc:
		raise map_error(exc, "Error permanently deleting gallery image") from exc
	return MessageResponse(message="Gallery image permanently deleted")

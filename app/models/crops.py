"""Crop ORM model: tokenized crop offerings.

``is_active`` is never written by clients: it mirrors ``status`` and is
recomputed by :meth:`Crop.sync_is_active` right before every flush that
persists a crop (create, seed, update, status change).
"""

from __future__ import annotations

from sqlalchemy import Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin, pg_enum
from app.models.enums import CropStatusEnum


class Crop(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A crop token: identity, marketing fields and funding status."""

    __tablename__ = "crops"
    __table_args__ = (
        Index("ix_crops_status_is_active", "status", "is_active"),
        Index("ix_crops_symbol_name", "symbol", "name"),
    )

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    symbol: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    crop: Mapped[str] = mapped_column(String(255), nullable=False)
    image: Mapped[str] = mapped_column(String(1024), nullable=False)
    land_area: Mapped[str] = mapped_column(String(100), nullable=False)
    yield_season: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[CropStatusEnum] = mapped_column(
        pg_enum(CropStatusEnum, "crop_status"),
        nullable=False,
        default=CropStatusEnum.coming_soon,
        server_default=CropStatusEnum.coming_soon.value,
    )
    tvl: Mapped[str] = mapped_column(String(100), nullable=False)
    apy: Mapped[str] = mapped_column(String(100), nullable=False)
    yield_logic: Mapped[str] = mapped_column(String(500), nullable=False)
    bg_color: Mapped[str] = mapped_column(String(100), nullable=False)
    status_color: Mapped[str] = mapped_column(String(100), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        default=False,
        server_default=text("false"),
        nullable=False,
    )

    def sync_is_active(self) -> None:
        if self.status is None:
            self.status = CropStatusEnum.coming_soon
        self.is_active = self.status == CropStatusEnum.active

    def __repr__(self) -> str:
        return f"<Crop id={self.id} symbol={self.symbol!r} status={self.status}>"

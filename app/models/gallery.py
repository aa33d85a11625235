"""GalleryImage ORM model: photos of farm plots.

Records are soft-deleted by clearing ``is_active``; normal listings only
return active rows.  ``image_alt`` is always populated before a flush: when
the client omits it, :meth:`GalleryImage.ensure_image_alt` derives it from
the label, plot, crop and region.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin, pg_enum
from app.models.enums import GalleryLabelEnum, PlotStatusEnum, RegionEnum

_STATUS_COLORS: dict[PlotStatusEnum, str] = {
    PlotStatusEnum.acquired: "bg-orange text-orange-foreground",
    PlotStatusEnum.cultivation: "bg-green-500 text-white",
    PlotStatusEnum.harvested: "bg-blue-500 text-white",
    PlotStatusEnum.planned: "bg-purple-500 text-white",
    PlotStatusEnum.maintenance: "bg-yellow-500 text-white",
}

_LABEL_COLORS: dict[GalleryLabelEnum, str] = {
    GalleryLabelEnum.before: "bg-muted text-muted-foreground",
    GalleryLabelEnum.drone: "bg-primary text-primary-foreground",
    GalleryLabelEnum.harvest: "bg-bright-green text-bright-green-foreground",
    GalleryLabelEnum.progress: "bg-blue-500 text-white",
    GalleryLabelEnum.equipment: "bg-gray-500 text-white",
}

_DEFAULT_COLOR = "bg-muted text-muted-foreground"


def build_image_alt(
    label: str,
    plot_name: str,
    crop: str,
    region: str,
) -> str:
    return f"{label} photo of {plot_name} - {crop} in {region}"


class GalleryImage(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A single plot photo with its plot metadata."""

    __tablename__ = "gallery_images"
    __table_args__ = (
        Index("ix_gallery_images_plot_id_date", "plot_id", "date"),
        Index("ix_gallery_images_status_is_active", "status", "is_active"),
        Index("ix_gallery_images_crop_region", "crop", "region"),
        Index("ix_gallery_images_label_status", "label", "status"),
    )

    plot_name: Mapped[str] = mapped_column(String(100), nullable=False)
    plot_id: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[PlotStatusEnum] = mapped_column(
        pg_enum(PlotStatusEnum, "plot_status"), nullable=False
    )
    crop: Mapped[str] = mapped_column(String(50), nullable=False)
    region: Mapped[RegionEnum] = mapped_column(
        pg_enum(RegionEnum, "region"), nullable=False
    )
    label: Mapped[GalleryLabelEnum] = mapped_column(
        pg_enum(GalleryLabelEnum, "gallery_label"), nullable=False
    )
    caption: Mapped[str] = mapped_column(String(500), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    image: Mapped[str] = mapped_column(String(1024), nullable=False)
    image_alt: Mapped[str] = mapped_column(String(200), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        default=True,
        server_default=text("true"),
        nullable=False,
    )

    def ensure_image_alt(self) -> None:
        if not self.image_alt or not self.image_alt.strip():
            self.image_alt = build_image_alt(
                GalleryLabelEnum(self.label).value,
                self.plot_name,
                self.crop,
                RegionEnum(self.region).value,
            )

    @property
    def status_color(self) -> str:
        return _STATUS_COLORS.get(self.status, _DEFAULT_COLOR)

    @property
    def label_color(self) -> str:
        return _LABEL_COLORS.get(self.label, _DEFAULT_COLOR)

    def __repr__(self) -> str:
        return (
            f"<GalleryImage id={self.id} plot={self.plot_id} "
            f"label={self.label} active={self.is_active}>"
        )

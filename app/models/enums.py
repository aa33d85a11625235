"""PostgreSQL-backed enum types for all ORM models.

Each StrEnum maps 1:1 to a PostgreSQL CREATE TYPE ... AS ENUM.  Member
values are the display strings clients send and receive, so the columns are
declared with ``values_callable`` (see ``app.models.base.pg_enum``).
"""

from enum import StrEnum

# ── Crop enums ──────────────────────────────────────────────────────────────


class CropStatusEnum(StrEnum):
    """Funding lifecycle of a crop token."""

    active = "Active"
    coming_soon = "Coming Soon"
    completed = "Completed"
    paused = "Paused"


# ── Gallery enums ───────────────────────────────────────────────────────────


class PlotStatusEnum(StrEnum):
    """State of the plot shown in a gallery image."""

    acquired = "Acquired"
    cultivation = "Cultivation"
    harvested = "Harvested"
    planned = "Planned"
    maintenance = "Maintenance"


class RegionEnum(StrEnum):
    midwest = "Midwest"
    northwest = "Northwest"
    southwest = "Southwest"
    southeast = "Southeast"
    northeast = "Northeast"


class GalleryLabelEnum(StrEnum):
    """Kind of photo."""

    before = "Before"
    drone = "Drone"
    harvest = "Harvest"
    progress = "Progress"
    equipment = "Equipment"

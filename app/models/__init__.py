"""ORM model registry: importing this module registers every table on Base.metadata.

Alembic ``env.py`` imports ``Base`` from here (not from ``base.py``) so that
autogenerate sees all tables.  Application code can also do::

    from app.models import Crop, GalleryImage, User
"""

# ── Base & Mixins ───────────────────────────────────────────────────────────
from app.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

# ── Domain models ───────────────────────────────────────────────────────────
from app.models.crops import Crop

# ── Enums ───────────────────────────────────────────────────────────────────
from app.models.enums import (
    CropStatusEnum,
    GalleryLabelEnum,
    PlotStatusEnum,
    RegionEnum,
)
from app.models.gallery import GalleryImage
from app.models.users import User

__all__ = [
    # Base & mixins
    "Base",
    # Domain
    "Crop",
    # Enums
    "CropStatusEnum",
    "GalleryImage",
    "GalleryLabelEnum",
    "PlotStatusEnum",
    "RegionEnum",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "User",
]

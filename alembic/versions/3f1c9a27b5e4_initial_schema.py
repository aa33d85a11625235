"""initial_schema

Revision ID: 3f1c9a27b5e4
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the crops, gallery_images and users tables, their four PostgreSQL
enum types and secondary indexes.  Enables uuid-ossp for the server-side
primary key default.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3f1c9a27b5e4"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# ── Enum type names (PostgreSQL CREATE TYPE) ────────────────────────────────
ENUM_CROP_STATUS = postgresql.ENUM(
    "Active",
    "Coming Soon",
    "Completed",
    "Paused",
    name="crop_status",
    create_type=False,
)
ENUM_PLOT_STATUS = postgresql.ENUM(
    "Acquired",
    "Cultivation",
    "Harvested",
    "Planned",
    "Maintenance",
    name="plot_status",
    create_type=False,
)
ENUM_REGION = postgresql.ENUM(
    "Midwest",
    "Northwest",
    "Southwest",
    "Southeast",
    "Northeast",
    name="region",
    create_type=False,
)
ENUM_GALLERY_LABEL = postgresql.ENUM(
    "Before",
    "Drone",
    "Harvest",
    "Progress",
    "Equipment",
    name="gallery_label",
    create_type=False,
)

_ALL_ENUMS = (ENUM_CROP_STATUS, ENUM_PLOT_STATUS, ENUM_REGION, ENUM_GALLERY_LABEL)


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')
    for enum in _ALL_ENUMS:
        enum.create(op.get_bind(), checkfirst=True)

    # crops
    op.create_table(
        "crops",
        _id_column(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("symbol", sa.String(32), nullable=False),
        sa.Column("crop", sa.String(255), nullable=False),
        sa.Column("image", sa.String(1024), nullable=False),
        sa.Column("land_area", sa.String(100), nullable=False),
        sa.Column("yield_season", sa.String(100), nullable=False),
        sa.Column(
            "status",
            ENUM_CROP_STATUS,
            server_default="Coming Soon",
            nullable=False,
        ),
        sa.Column("tvl", sa.String(100), nullable=False),
        sa.Column("apy", sa.String(100), nullable=False),
        sa.Column("yield_logic", sa.String(500), nullable=False),
        sa.Column("bg_color", sa.String(100), nullable=False),
        sa.Column("status_color", sa.String(100), nullable=False),
        sa.Column(
            "is_active",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        sa.UniqueConstraint("symbol"),
    )
    op.create_index("ix_crops_status_is_active", "crops", ["status", "is_active"])
    op.create_index("ix_crops_symbol_name", "crops", ["symbol", "name"])

    # gallery_images
    op.create_table(
        "gallery_images",
        _id_column(),
        sa.Column("plot_name", sa.String(100), nullable=False),
        sa.Column("plot_id", sa.Integer(), nullable=False),
        sa.Column("status", ENUM_PLOT_STATUS, nullable=False),
        sa.Column("crop", sa.String(50), nullable=False),
        sa.Column("region", ENUM_REGION, nullable=False),
        sa.Column("label", ENUM_GALLERY_LABEL, nullable=False),
        sa.Column("caption", sa.String(500), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("image", sa.String(1024), nullable=False),
        sa.Column("image_alt", sa.String(200), nullable=False),
        sa.Column(
            "is_active",
            sa.Boolean(),
            server_default=sa.text("true"),
            nullable=False,
        ),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_gallery_images_plot_id_date", "gallery_images", ["plot_id", "date"])
    op.create_index("ix_gallery_images_status_is_active", "gallery_images", ["status", "is_active"])
    op.create_index("ix_gallery_images_crop_region", "gallery_images", ["crop", "region"])
    op.create_index("ix_gallery_images_label_status", "gallery_images", ["label", "status"])

    # users
    op.create_table(
        "users",
        _id_column(),
        sa.Column("wallet_address", sa.String(42), nullable=False),
        sa.Column("chain_id", sa.Integer(), server_default=sa.text("1"), nullable=False),
        sa.Column("balance", sa.String(100), server_default="0", nullable=False),
        sa.Column(
            "is_active",
            sa.Boolean(),
            server_default=sa.text("true"),
            nullable=False,
        ),
        sa.Column(
            "last_login",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_wallet_address", "users", ["wallet_address"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_users_wallet_address", table_name="users")
    op.drop_table("users")
    op.drop_table("gallery_images")
    op.drop_table("crops")

    for enum in reversed(_ALL_ENUMS):
        enum.drop(op.get_bind(), checkfirst=True)

"""Initial walk schema (users, pets, walks, walk maps, walker settings, payments)

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


WALK_STATUS = sa.Enum(
    "requested",
    "awaiting_payment",
    "scheduled",
    "active",
    "finished",
    "rejected",
    "cancelled",
    name="walkstatus",
)

USER_ROLE = sa.Enum("OWNER", "WALKER", "ADMIN", name="userrole")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("firebase_uid", sa.String(128), nullable=False, unique=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255)),
        sa.Column("phone", sa.String(30)),
        sa.Column("image_url", sa.String(255)),
        sa.Column("role", USER_ROLE, nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
    )

    op.create_table(
        "pets",
        sa.Column("pet_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("owner_id", sa.Integer(), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("breed", sa.String(50)),
        sa.Column("image_url", sa.String(255)),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )

    op.create_table(
        "walks",
        sa.Column("walk_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("walker_id", sa.Integer(), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("owner_id", sa.Integer(), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("scheduled_start_time", sa.DateTime(), nullable=False),
        sa.Column("scheduled_end_time", sa.DateTime(), nullable=False),
        sa.Column("actual_start_time", sa.DateTime()),
        sa.Column("actual_end_time", sa.DateTime()),
        sa.Column("start_address", sa.String(255), nullable=False),
        sa.Column("total_price", sa.DECIMAL(10, 2), nullable=False),
        sa.Column("status", WALK_STATUS, nullable=False),
        sa.Column("duration_min", sa.Integer()),
        sa.Column("distance_km", sa.Float()),
        sa.Column("walker_notes", sa.Text()),
        sa.Column("admin_notes", sa.Text()),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_walks_walker_id", "walks", ["walker_id"])
    op.create_index("ix_walks_owner_id", "walks", ["owner_id"])
    op.create_index("ix_walks_status", "walks", ["status"])

    op.create_table(
        "walk_pets",
        sa.Column(
            "walk_id",
            sa.Integer(),
            sa.ForeignKey("walks.walk_id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("pet_id", sa.Integer(), sa.ForeignKey("pets.pet_id"), primary_key=True),
    )

    op.create_table(
        "walk_maps",
        sa.Column("map_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "walk_id",
            sa.Integer(),
            sa.ForeignKey("walks.walk_id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )

    op.create_table(
        "walk_locations",
        sa.Column("location_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "map_id",
            sa.Integer(),
            sa.ForeignKey("walk_maps.map_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("latitude", sa.DECIMAL(10, 7), nullable=False),
        sa.Column("longitude", sa.DECIMAL(10, 7), nullable=False),
        sa.Column("elevation", sa.Float(), nullable=False, server_default="0"),
        sa.Column("address", sa.String(255)),
        sa.Column("recorded_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_walk_locations_map_id", "walk_locations", ["map_id"])

    op.create_table(
        "walker_settings",
        sa.Column("setting_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "walker_id",
            sa.Integer(),
            sa.ForeignKey("users.user_id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("has_gps_tracker", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("gps_tracking_enabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("gps_tracking_interval", sa.Integer(), nullable=False, server_default="30"),
        sa.Column("has_discount", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("discount_percentage", sa.DECIMAL(5, 2), server_default="0"),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now()),
    )

    op.create_table(
        "payments",
        sa.Column("payment_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "walk_id",
            sa.Integer(),
            sa.ForeignKey("walks.walk_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("amount", sa.DECIMAL(10, 2), nullable=False),
        sa.Column("payment_method", sa.String(50)),
        sa.Column("transaction_id", sa.String(100)),
        sa.Column("status", sa.String(30), nullable=False, server_default="pending"),
        sa.Column("notes", sa.String(255)),
        sa.Column("payment_date", sa.DateTime()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index("ix_payments_walk_id", "payments", ["walk_id"])


def downgrade() -> None:
    op.drop_index("ix_payments_walk_id", table_name="payments")
    op.drop_table("payments")
    op.drop_table("walker_settings")
    op.drop_index("ix_walk_locations_map_id", table_name="walk_locations")
    op.drop_table("walk_locations")
    op.drop_table("walk_maps")
    op.drop_table("walk_pets")
    op.drop_index("ix_walks_status", table_name="walks")
    op.drop_index("ix_walks_owner_id", table_name="walks")
    op.drop_index("ix_walks_walker_id", table_name="walks")
    op.drop_table("walks")
    op.drop_table("pets")
    op.drop_table("users")

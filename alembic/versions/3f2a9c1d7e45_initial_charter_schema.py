"""initial_charter_schema

Revision ID: 3f2a9c1d7e45
Revises:
Create Date: 2025-09-14 10:12:31.402118

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7e45"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

catalog_kind = sa.Enum(
    "YACHT", "WATER_SPORT", "FOOD", "ADDITIONAL_SERVICE", name="catalogkind"
)
promotion_catalog = sa.Enum("YACHTS", "SERVICES", name="promotioncatalog")
booking_status = sa.Enum("PENDING", "CONFIRMED", "CANCELLED", name="bookingstatus")
booking_source = sa.Enum("DIRECT", "WHATSAPP", name="bookingsource")
duration_type = sa.Enum("HOURLY", "DAILY", name="durationtype")
cart_item_type = sa.Enum("WATER_SPORT", "FOOD", name="cartitemtype")
app_role = sa.Enum("ADMIN", "USER", name="approle")


def upgrade() -> None:
    """Create the catalog, promotion, booking, cart, settings and role tables."""
    op.create_table(
        "yachts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("description_ar", sa.Text()),
        sa.Column("main_image", sa.String(), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("length", sa.Numeric(6, 2), nullable=True),
        sa.Column("price_per_hour", sa.Numeric(10, 2), nullable=True),
        sa.Column("price_per_day", sa.Numeric(10, 2), nullable=True),
        sa.Column("features", sa.JSON(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("is_available", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_yachts_id", "yachts", ["id"])

    op.create_table(
        "yacht_options",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "yacht_id",
            sa.Integer(),
            sa.ForeignKey("yachts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_yacht_options_id", "yacht_options", ["id"])
    op.create_index("ix_yacht_options_yacht_id", "yacht_options", ["yacht_id"])

    op.create_table(
        "water_sports",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("pax", sa.Integer(), nullable=False),
        sa.Column("price_30min", sa.Numeric(10, 2), nullable=True),
        sa.Column("price_60min", sa.Numeric(10, 2), nullable=True),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_water_sports_id", "water_sports", ["id"])

    op.create_table(
        "food_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("price_per_person", sa.Numeric(10, 2), nullable=True),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_food_items_id", "food_items", ["id"])

    op.create_table(
        "additional_services",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_additional_services_id", "additional_services", ["id"])

    op.create_table(
        "promotions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("code", sa.String(), nullable=True),
        sa.Column("description", sa.Text()),
        sa.Column("discount_percentage", sa.Numeric(5, 2), nullable=True),
        sa.Column("discount_amount", sa.Numeric(10, 2), nullable=True),
        sa.Column("catalog", promotion_catalog, nullable=False),
        sa.Column("item_kind", catalog_kind, nullable=True),
        sa.Column("item_id", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("valid_from", sa.DateTime(timezone=True), nullable=True),
        sa.Column("valid_until", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_promotions_id", "promotions", ["id"])
    op.create_index("ix_promotions_item_id", "promotions", ["item_id"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("yacht_id", sa.Integer(), sa.ForeignKey("yachts.id"), nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column("customer_name", sa.String(), nullable=False),
        sa.Column("customer_email", sa.String(), nullable=False),
        sa.Column("customer_phone", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("country", sa.String(), nullable=True),
        sa.Column("start_date", sa.DateTime(), nullable=False),
        sa.Column("end_date", sa.DateTime(), nullable=False),
        sa.Column("duration_type", duration_type, nullable=False),
        sa.Column("duration_value", sa.Numeric(8, 2), nullable=True),
        sa.Column("number_of_persons", sa.Integer(), nullable=True),
        sa.Column("trip_type", sa.String(), nullable=True),
        sa.Column("status", booking_status, nullable=False),
        sa.Column("booking_source", booking_source, nullable=False),
        sa.Column("total_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("rate_per_hour", sa.Numeric(10, 2), nullable=True),
        sa.Column("apply_vat", sa.Boolean(), nullable=False),
        sa.Column("other_charges", sa.Numeric(10, 2), nullable=False),
        sa.Column("discount", sa.Numeric(10, 2), nullable=False),
        sa.Column("fine_penalty", sa.Numeric(10, 2), nullable=False),
        sa.Column("coupon_code", sa.String(), nullable=True),
        sa.Column("notes", sa.Text()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_bookings_id", "bookings", ["id"])
    op.create_index("ix_bookings_yacht_id", "bookings", ["yacht_id"])
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"])
    op.create_index("idx_bookings_status_created", "bookings", ["status", "created_at"])

    op.create_table(
        "booking_options",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "booking_id",
            sa.Integer(),
            sa.ForeignKey("bookings.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "option_id",
            sa.Integer(),
            sa.ForeignKey("yacht_options.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("option_name", sa.String(), nullable=False),
        sa.Column("option_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_booking_options_id", "booking_options", ["id"])
    op.create_index("ix_booking_options_booking_id", "booking_options", ["booking_id"])

    op.create_table(
        "service_cart_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("session_id", sa.String(), nullable=False),
        sa.Column("item_type", cart_item_type, nullable=False),
        sa.Column("item_id", sa.Integer(), nullable=False),
        sa.Column("item_name", sa.String(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_service_cart_items_id", "service_cart_items", ["id"])
    op.create_index(
        "ix_service_cart_items_session_id", "service_cart_items", ["session_id"]
    )

    op.create_table(
        "site_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("key", sa.String(), nullable=False, unique=True),
        sa.Column("value", sa.Text(), nullable=True),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_site_settings_id", "site_settings", ["id"])

    op.create_table(
        "user_roles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("role", app_role, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),
    )
    op.create_index("ix_user_roles_id", "user_roles", ["id"])
    op.create_index("ix_user_roles_user_id", "user_roles", ["user_id"])


def downgrade() -> None:
    """Drop everything created above."""
    op.drop_table("user_roles")
    op.drop_table("site_settings")
    op.drop_table("service_cart_items")
    op.drop_table("booking_options")
    op.drop_index("idx_bookings_status_created", table_name="bookings")
    op.drop_table("bookings")
    op.drop_table("promotions")
    op.drop_table("additional_services")
    op.drop_table("food_items")
    op.drop_table("water_sports")
    op.drop_table("yacht_options")
    op.drop_table("yachts")

    bind = op.get_bind()
    for enum_type in (
        app_role,
        cart_item_type,
        duration_type,
        booking_source,
        booking_status,
        promotion_catalog,
        catalog_kind,
    ):
        enum_type.drop(bind, checkfirst=True)

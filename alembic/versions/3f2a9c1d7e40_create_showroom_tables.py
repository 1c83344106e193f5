"""create showroom tables

Revision ID: 3f2a9c1d7e40
Revises:
Create Date: 2026-10-18 10:12:31.402117
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql as pg

# revision identifiers, used by Alembic.
revision = "3f2a9c1d7e40"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(updated: bool = True):
    cols = [sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.text("now()"))]
    if updated:
        cols.append(sa.Column("updated_at", sa.TIMESTAMP(), server_default=sa.text("now()")))
    return cols


def upgrade() -> None:
    op.create_table(
        "admins",
        sa.Column("id", pg.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("mobile", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False, unique=True),
        sa.Column("password_hash", sa.Text(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "makes",
        sa.Column("id", pg.UUID(as_uuid=True), primary_key=True),
        sa.Column("name_en", sa.Text(), nullable=False, unique=True),
        sa.Column("name_ar", sa.Text(), nullable=False),
        sa.Column("models", sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        *_timestamps(),
    )

    op.create_table(
        "cars",
        sa.Column("id", pg.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "make_id",
            pg.UUID(as_uuid=True),
            sa.ForeignKey("makes.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("model_en", sa.Text(), nullable=False),
        sa.Column("model_ar", sa.Text(), nullable=False),
        sa.Column("name_en", sa.Text(), nullable=False),
        sa.Column("name_ar", sa.Text(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("condition", sa.Text(), nullable=False),
        sa.Column("mileage", sa.Integer(), nullable=False),
        sa.Column("stock_number", sa.Text(), nullable=False, unique=True),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("exterior_color_en", sa.Text()),
        sa.Column("exterior_color_ar", sa.Text()),
        sa.Column("interior_color_en", sa.Text()),
        sa.Column("interior_color_ar", sa.Text()),
        sa.Column("engine_en", sa.Text()),
        sa.Column("engine_ar", sa.Text()),
        sa.Column("bhp_en", sa.Text()),
        sa.Column("bhp_ar", sa.Text()),
        sa.Column("door", sa.Integer()),
        sa.Column("warranty", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("ix_cars_make_id", "cars", ["make_id"])
    op.create_index("ix_cars_model_en", "cars", ["model_en"])
    op.create_index("ix_cars_model_ar", "cars", ["model_ar"])

    op.create_table(
        "car_images",
        sa.Column("id", pg.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "car_id",
            pg.UUID(as_uuid=True),
            sa.ForeignKey("cars.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_main", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("content_type", sa.Text()),
        sa.Column("original_filename", sa.Text()),
        sa.Column("width", sa.Integer()),
        sa.Column("height", sa.Integer()),
        sa.Column("bytes", sa.Integer()),
        *_timestamps(updated=False),
    )
    op.create_index("ix_car_images_car_id", "car_images", ["car_id"])
    op.execute(
        "CREATE UNIQUE INDEX ux_car_images_main_per_car "
        "ON car_images(car_id) WHERE is_main"
    )

    op.create_table(
        "news",
        sa.Column("id", pg.UUID(as_uuid=True), primary_key=True),
        sa.Column("title_en", sa.Text(), nullable=False),
        sa.Column("title_ar", sa.Text(), nullable=False),
        sa.Column("details_en", sa.Text(), nullable=False),
        sa.Column("details_ar", sa.Text(), nullable=False),
        sa.Column("image", sa.Text()),
        sa.Column("date", sa.TIMESTAMP(), server_default=sa.text("now()")),
        *_timestamps(),
    )

    op.create_table(
        "seasonal_offers",
        sa.Column("id", pg.UUID(as_uuid=True), primary_key=True),
        sa.Column("title_en", sa.Text(), nullable=False),
        sa.Column("title_ar", sa.Text(), nullable=False),
        sa.Column("details_en", sa.Text(), nullable=False),
        sa.Column("details_ar", sa.Text(), nullable=False),
        sa.Column("show", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("image", sa.Text()),
        *_timestamps(),
    )

    op.create_table(
        "partners",
        sa.Column("id", pg.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("image", sa.Text()),
        *_timestamps(),
    )

    op.create_table(
        "faqs",
        sa.Column("id", pg.UUID(as_uuid=True), primary_key=True),
        sa.Column("question_en", sa.Text(), nullable=False),
        sa.Column("question_ar", sa.Text(), nullable=False),
        sa.Column("answer_en", sa.Text(), nullable=False),
        sa.Column("answer_ar", sa.Text(), nullable=False),
        *_timestamps(updated=False),
    )

    op.create_table(
        "feedback",
        sa.Column("id", pg.UUID(as_uuid=True), primary_key=True),
        sa.Column("full_name", sa.Text(), nullable=False),
        sa.Column("mobile_number", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        *_timestamps(updated=False),
    )

    # singletons: the primary key is pinned to 1
    op.create_table(
        "home_page_images",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("what_we_do", sa.Text()),
        sa.Column("brands", sa.Text()),
        sa.Column("news", sa.Text()),
        sa.Column("showroom", sa.Text()),
        sa.Column("feedback", sa.Text()),
        sa.Column("terms", sa.Text()),
        sa.Column("updated_at", sa.TIMESTAMP(), server_default=sa.text("now()")),
        sa.CheckConstraint("id = 1", name="ck_home_page_images_singleton"),
    )
    op.create_table(
        "social_links",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("mobile", sa.Text()),
        sa.Column("insta", sa.Text()),
        sa.Column("tiktok", sa.Text()),
        sa.Column("youtube", sa.Text()),
        sa.Column("snapchat", sa.Text()),
        sa.Column("location", sa.Text()),
        sa.Column("location_link", sa.Text()),
        sa.Column("email", sa.Text()),
        sa.Column("whatsapp", sa.Text()),
        sa.Column("sales_numbers", sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("updated_at", sa.TIMESTAMP(), server_default=sa.text("now()")),
        sa.CheckConstraint("id = 1", name="ck_social_links_singleton"),
    )
    op.create_table(
        "terms_and_conditions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("content", sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("updated_at", sa.TIMESTAMP(), server_default=sa.text("now()")),
        sa.CheckConstraint("id = 1", name="ck_terms_singleton"),
    )
    op.create_table(
        "what_we_do",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("content_en", sa.Text(), nullable=False),
        sa.Column("content_ar", sa.Text(), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(), server_default=sa.text("now()")),
        sa.CheckConstraint("id = 1", name="ck_what_we_do_singleton"),
    )


def downgrade() -> None:
    for table in ("what_we_do", "terms_and_conditions", "social_links", "home_page_images",
                  "feedback", "faqs", "partners", "seasonal_offers", "news"):
        op.drop_table(table)
    op.drop_index("ux_car_images_main_per_car", table_name="car_images")
    op.drop_index("ix_car_images_car_id", table_name="car_images")
    op.drop_table("car_images")
    op.drop_index("ix_cars_model_ar", table_name="cars")
    op.drop_index("ix_cars_model_en", table_name="cars")
    op.drop_index("ix_cars_make_id", table_name="cars")
    op.drop_table("cars")
    op.drop_table("makes")
    op.drop_table("admins")

"""Initial schema — sake_types, breweries, sakes, drink_styles, sake_drink_styles.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from app.models.brewery import Geometry

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(), comment="created at",
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(), comment="updated at",
        ),
    ]


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS postgis")

    op.create_table(
        "sake_types",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.Text, nullable=False, unique=True, comment="sake type name"),
        *_timestamps(),
        comment="sake types",
    )

    op.create_table(
        "breweries",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.Text, nullable=False, comment="brewery name"),
        sa.Column("origin_country", sa.Text, nullable=False, comment="country of origin"),
        sa.Column("origin_region", sa.Text, nullable=True, comment="region of origin"),
        sa.Column("position", Geometry("Point", 4326), nullable=True, comment="location (optional)"),
        *_timestamps(),
        sa.UniqueConstraint("name", "origin_country"),
        comment="breweries",
    )
    op.create_index("idx_breweries_origin_country", "breweries", ["origin_country"])
    op.create_index(
        "idx_breweries_position", "breweries", ["position"], postgresql_using="gist",
    )

    op.create_table(
        "sakes",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "type_id", sa.Integer,
            sa.ForeignKey("sake_types.id", ondelete="RESTRICT"),
            nullable=False, comment="sake type id",
        ),
        sa.Column(
            "brewery_id", sa.Integer,
            sa.ForeignKey("breweries.id", ondelete="RESTRICT"),
            nullable=False, comment="brewery id",
        ),
        sa.Column("name", sa.Text, nullable=False, comment="sake name"),
        sa.Column("abv", sa.Numeric(4, 2), nullable=False, comment="alcohol by volume (%)"),
        sa.Column("taste_notes", sa.Text, nullable=False, comment="taste notes"),
        sa.Column("memo", sa.Text, nullable=True, comment="personal notes"),
        *_timestamps(),
        comment="sakes",
    )
    op.create_index("idx_sakes_type_id", "sakes", ["type_id"])
    op.create_index("idx_sakes_brewery_id", "sakes", ["brewery_id"])
    op.create_index("idx_sakes_name", "sakes", ["name"])
    op.create_index("idx_sakes_created_at_id", "sakes", ["created_at", "id"])

    op.create_table(
        "drink_styles",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.Text, nullable=False, unique=True, comment="drink style name"),
        sa.Column("description", sa.Text, nullable=True, comment="description"),
        *_timestamps(),
        comment="drink styles",
    )

    op.create_table(
        "sake_drink_styles",
        sa.Column(
            "sake_id", sa.Integer,
            sa.ForeignKey("sakes.id", ondelete="CASCADE"),
            primary_key=True, comment="sake id",
        ),
        sa.Column(
            "drink_style_id", sa.Integer,
            sa.ForeignKey("drink_styles.id", ondelete="RESTRICT"),
            primary_key=True, comment="drink style id",
        ),
        comment="sake to drink style links",
    )
    op.create_index(
        "idx_sake_drink_styles_drink_style_id",
        "sake_drink_styles", ["drink_style_id"],
    )


def downgrade() -> None:
    op.drop_table("sake_drink_styles")
    op.drop_table("drink_styles")
    op.drop_table("sakes")
    op.drop_table("breweries")
    op.drop_table("sake_types")

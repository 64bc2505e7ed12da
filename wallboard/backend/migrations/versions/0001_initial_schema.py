"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

ENTRY_TABLES = ("wall_entries", "friend_entries", "tech_notes", "song_quotes", "project_ideas")


def _entry_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("visibility", sa.String(length=16), nullable=False),
        sa.Column("is_pinned", sa.Boolean(), nullable=False),
        sa.Column("pin_order", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def _entry_constraints(table: str) -> list:
    return [
        sa.PrimaryKeyConstraint("id", name=f"pk_{table}"),
        sa.CheckConstraint(
            "(is_pinned AND pin_order IS NOT NULL) OR "
            "(NOT is_pinned AND pin_order IS NULL)",
            name=f"ck_{table}_pin_state",
        ),
        sa.CheckConstraint(
            "pin_order IS NULL OR pin_order >= 0",
            name=f"ck_{table}_pin_order_non_negative",
        ),
        sa.CheckConstraint(
            "visibility IN ('public', 'draft')",
            name=f"ck_{table}_visibility",
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "walls",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("slug", sa.String(length=120), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_walls"),
        sa.UniqueConstraint("slug", name="uq_walls_slug"),
    )
    op.create_index("ix_walls_created_at", "walls", ["created_at"])

    extra_columns = {
        "wall_entries": [
            sa.Column("wall_id", sa.String(), nullable=True),
        ],
        "friend_entries": [sa.Column("name", sa.String(length=100), nullable=False)],
        "song_quotes": [sa.Column("artist", sa.String(length=255), nullable=True)],
    }
    for table in ENTRY_TABLES:
        constraints = _entry_constraints(table)
        if table == "wall_entries":
            constraints.append(
                sa.ForeignKeyConstraint(
                    ["wall_id"],
                    ["walls.id"],
                    name="fk_wall_entries_wall_id_walls",
                    ondelete="CASCADE",
                )
            )
        op.create_table(table, *_entry_columns(), *extra_columns.get(table, []), *constraints)
        op.create_index(f"ix_{table}_created_at", table, ["created_at"])
        op.create_index(f"ix_{table}_pinned", table, ["is_pinned", "pin_order"])
    op.create_index("ix_wall_entries_wall_id", "wall_entries", ["wall_id"])

    op.create_table(
        "short_links",
        sa.Column("code", sa.String(length=32), nullable=False),
        sa.Column("target_kind", sa.String(length=16), nullable=False),
        sa.Column("target_id", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("code", name="pk_short_links"),
        sa.UniqueConstraint("target_kind", "target_id", name="uq_short_links_target"),
    )

    op.create_table(
        "series",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_series"),
    )
    op.create_index("ix_series_created_at", "series", ["created_at"])

    op.create_table(
        "series_items",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("series_id", sa.String(), nullable=False),
        sa.Column("entry_kind", sa.String(length=16), nullable=False),
        sa.Column("entry_id", sa.String(length=36), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["series_id"],
            ["series.id"],
            name="fk_series_items_series_id_series",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_series_items"),
        sa.UniqueConstraint("series_id", "entry_kind", "entry_id", name="uq_series_items_entry"),
    )
    op.create_index("ix_series_items_created_at", "series_items", ["created_at"])
    op.create_index("ix_series_items_series_id", "series_items", ["series_id"])


def downgrade() -> None:
    op.drop_table("series_items")
    op.drop_table("series")
    op.drop_table("short_links")
    for table in reversed(ENTRY_TABLES):
        op.drop_table(table)
    op.drop_table("walls")

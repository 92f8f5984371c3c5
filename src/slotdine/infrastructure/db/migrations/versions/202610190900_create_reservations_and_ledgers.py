"""create reservations and ledgers

Revision ID: 202610190900
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "202610190900"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "reservations",
        sa.Column("ticket_id", sa.String(length=50), nullable=False),
        sa.Column("booking_date", sa.String(length=64), nullable=True),
        sa.Column("time_slot", sa.String(length=64), nullable=True),
        sa.Column("guest_name", sa.String(length=255), nullable=True),
        sa.Column("theater_name", sa.String(length=255), nullable=True),
        sa.Column("number_of_people", sa.Integer(), nullable=True),
        sa.Column("occasion", sa.String(length=100), nullable=True),
        sa.Column("occasion_fields", sa.JSON(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("ticket_id"),
    )

    op.create_table(
        "ledgers",
        sa.Column("ticket_id", sa.String(length=50), nullable=False),
        sa.Column("ledger", sa.String(length=64), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["ticket_id"], ["reservations.ticket_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("ticket_id", "ledger"),
    )

    op.create_table(
        "ordered_items",
        sa.Column("id", sa.String(length=50), nullable=False),
        sa.Column("ticket_id", sa.String(length=50), nullable=False),
        sa.Column("ledger", sa.String(length=64), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("line_id", sa.String(length=150), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price_minor", sa.Integer(), nullable=True),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column(
            "is_decoration_charge",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column("veg_type", sa.String(length=10), nullable=False),
        sa.Column("variant_key", sa.String(length=20), nullable=True),
        sa.Column("category", sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(
            ["ticket_id", "ledger"],
            ["ledgers.ticket_id", "ledgers.ledger"],
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_ordered_items_ticket_ledger",
        "ordered_items",
        ["ticket_id", "ledger"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_ordered_items_ticket_ledger", table_name="ordered_items")
    op.drop_table("ordered_items")
    op.drop_table("ledgers")
    op.drop_table("reservations")

"""Create cabanas, reservas, pagos and mensajes

Revision ID: 3f2a9c41d7b0
Revises:
Create Date: 2026-10-18 10:12:31.000000

"""

import sqlalchemy as sa

from alembic import op  # type: ignore[attr-defined]
from cabin_admin.config import SCHEMA
from cabin_admin.models.base import qualified

# revision identifiers, used by Alembic.
revision = "3f2a9c41d7b0"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "cabanas",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        schema=SCHEMA,
    )

    op.create_table(
        "reservas",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "cabana_id",
            sa.Uuid(),
            sa.ForeignKey(qualified("cabanas.id"), ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("guest_name", sa.String(), nullable=False),
        sa.Column("guest_phone", sa.String(), nullable=True),
        sa.Column("guest_email", sa.String(), nullable=True),
        sa.Column("guests_count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("check_in", sa.Date(), nullable=False),
        sa.Column("check_out", sa.Date(), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default="pending"),
        sa.Column("amount", sa.Numeric(14, 2), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("check_out > check_in", name="reservas_check_out_after_check_in"),
        sa.CheckConstraint("guests_count > 0", name="reservas_guests_count_positive"),
        schema=SCHEMA,
    )
    op.create_index("ix_reservas_cabana_id", "reservas", ["cabana_id"], schema=SCHEMA)
    op.create_index("ix_reservas_status", "reservas", ["status"], schema=SCHEMA)

    op.create_table(
        "pagos",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "reserva_id",
            sa.Uuid(),
            sa.ForeignKey(qualified("reservas.id"), ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("currency", sa.String(), nullable=False, server_default="CLP"),
        sa.Column("payment_type", sa.String(), nullable=False, server_default="partial"),
        sa.Column("method", sa.String(), nullable=False, server_default="transfer"),
        sa.Column("reference", sa.String(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", sa.String(), nullable=False, server_default="confirmed"),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        schema=SCHEMA,
    )
    op.create_index("ix_pagos_reserva_id", "pagos", ["reserva_id"], schema=SCHEMA)
    op.create_index("ix_pagos_created_at", "pagos", ["created_at"], schema=SCHEMA)

    op.create_table(
        "mensajes",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("guest_name", sa.String(), nullable=False),
        sa.Column("guest_email", sa.String(), nullable=True),
        sa.Column("guest_phone", sa.String(), nullable=True),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("source", sa.String(), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("archived", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        schema=SCHEMA,
    )
    op.create_index("ix_mensajes_created_at", "mensajes", ["created_at"], schema=SCHEMA)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_mensajes_created_at", table_name="mensajes", schema=SCHEMA)
    op.drop_table("mensajes", schema=SCHEMA)
    op.drop_index("ix_pagos_created_at", table_name="pagos", schema=SCHEMA)
    op.drop_index("ix_pagos_reserva_id", table_name="pagos", schema=SCHEMA)
    op.drop_table("pagos", schema=SCHEMA)
    op.drop_index("ix_reservas_status", table_name="reservas", schema=SCHEMA)
    op.drop_index("ix_reservas_cabana_id", table_name="reservas", schema=SCHEMA)
    op.drop_table("reservas", schema=SCHEMA)
    op.drop_table("cabanas", schema=SCHEMA)

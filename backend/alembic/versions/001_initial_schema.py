"""Initial schema — productos, orden_grupos, ordenes, facturas.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "productos",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("url", sa.String(500), nullable=False),
        sa.Column("cantidad", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_index("ix_productos_name", "productos", ["name"])

    op.create_table(
        "orden_grupos",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "ordenes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("orden_id", sa.Integer, sa.ForeignKey("orden_grupos.id"), nullable=False),
        sa.Column("producto_id", sa.Integer, sa.ForeignKey("productos.id"), nullable=False),
        sa.Column("cantidad", sa.Integer, nullable=False),
        sa.Column("cliente_nombre", sa.String(200), nullable=False),
        sa.Column("cliente_email", sa.String(200), nullable=False),
        sa.Column("cliente_direccion", sa.String(500), nullable=False),
    )
    op.create_index("ix_ordenes_orden_id", "ordenes", ["orden_id"])

    op.create_table(
        "facturas",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("orden_id", sa.Integer, sa.ForeignKey("orden_grupos.id"), nullable=False),
        sa.Column("fecha", sa.DateTime(timezone=True), nullable=False),
        sa.Column("total", sa.Numeric(12, 2), nullable=False),
    )
    op.create_index("ix_facturas_orden_id", "facturas", ["orden_id"])


def downgrade() -> None:
    op.drop_table("facturas")
    op.drop_table("ordenes")
    op.drop_table("orden_grupos")
    op.drop_table("productos")

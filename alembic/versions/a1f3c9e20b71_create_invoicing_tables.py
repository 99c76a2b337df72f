"""create invoicing tables

Revision ID: a1f3c9e20b71
Revises:
Create Date: 2026-10-19 10:02:41.318204

Creates clients, invoices, invoice_items, item_materials and
pricing_settings. Tables already created by Base.metadata.create_all()
are left alone.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = 'a1f3c9e20b71'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _table_exists(table_name):
    """Check if a table exists."""
    bind = op.get_bind()
    insp = inspect(bind)
    return table_name in insp.get_table_names()


def upgrade() -> None:
    if not _table_exists("clients"):
        op.create_table(
            "clients",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("company", sa.String(), nullable=True),
            sa.Column("address", sa.Text(), nullable=True),
            sa.Column("phone", sa.String(), nullable=True),
            sa.Column("email", sa.String(), nullable=True),
            sa.Column("site_address", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_clients_id", "clients", ["id"])
        op.create_index("ix_clients_email", "clients", ["email"], unique=True)

    if not _table_exists("invoices"):
        op.create_table(
            "invoices",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("invoice_no", sa.String(), nullable=False),
            sa.Column("client_id", sa.Integer(), nullable=True),
            sa.Column("project_name", sa.String(), nullable=True),
            sa.Column("invoice_date", sa.Date(), nullable=False),
            sa.Column("due_date", sa.Date(), nullable=True),
            sa.Column("order_class", sa.String(), nullable=True),
            sa.Column("status", sa.Enum("DRAFT", "SENT", "PAID", name="invoicestatus"), nullable=True),
            sa.Column("subtotal", sa.Float(), nullable=True),
            sa.Column("discount", sa.Float(), nullable=True),
            sa.Column("vat_rate", sa.Float(), nullable=True),
            sa.Column("vat_amount", sa.Float(), nullable=True),
            sa.Column("total", sa.Float(), nullable=True),
            sa.Column("notes", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(["client_id"], ["clients.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_invoices_id", "invoices", ["id"])
        op.create_index("ix_invoices_invoice_no", "invoices", ["invoice_no"], unique=True)

    if not _table_exists("invoice_items"):
        op.create_table(
            "invoice_items",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("invoice_id", sa.Integer(), nullable=False),
            sa.Column("category", sa.String(), nullable=True),
            sa.Column("code", sa.String(), nullable=True),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("dimensions", sa.String(), nullable=True),
            sa.Column("qty", sa.Float(), nullable=True),
            sa.Column("unit_price", sa.Float(), nullable=True),
            sa.Column("line_total", sa.Float(), nullable=True),
            sa.Column("image_url", sa.String(), nullable=True),
            sa.Column("sort_order", sa.Integer(), nullable=True),
            sa.ForeignKeyConstraint(["invoice_id"], ["invoices.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_invoice_items_id", "invoice_items", ["id"])

    if not _table_exists("item_materials"):
        op.create_table(
            "item_materials",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("invoice_item_id", sa.Integer(), nullable=False),
            sa.Column("material_name", sa.String(), nullable=False),
            sa.Column("unit", sa.String(), nullable=True),
            sa.Column("qty_per_item", sa.Float(), nullable=True),
            sa.Column("total_qty", sa.Float(), nullable=True),
            sa.Column("unit_cost", sa.Float(), nullable=True),
            sa.Column("total_cost", sa.Float(), nullable=True),
            sa.ForeignKeyConstraint(["invoice_item_id"], ["invoice_items.id"]),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_item_materials_id", "item_materials", ["id"])

    if not _table_exists("pricing_settings"):
        op.create_table(
            "pricing_settings",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("rates_json", sa.JSON(), nullable=False),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_pricing_settings_id", "pricing_settings", ["id"])


def downgrade() -> None:
    for table_name in ["pricing_settings", "item_materials", "invoice_items",
                       "invoices", "clients"]:
        if _table_exists(table_name):
            op.drop_table(table_name)

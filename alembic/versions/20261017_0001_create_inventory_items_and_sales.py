"""create inventory_items and sales tables

Revision ID: 20261017_0001
Revises:
Create Date: 2026-10-17 09:30:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261017_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "inventory_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "sku",
            sa.String(length=120),
            nullable=False,
            comment="Seller SKU; import upserts match on this",
        ),
        sa.Column("category", sa.String(length=120), nullable=True),
        sa.Column("selling_price", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column(
            "cost_price",
            sa.Numeric(precision=12, scale=2),
            nullable=True,
            comment="Authoritative unit cost used to recompute sale profit",
        ),
        sa.Column("current_stock", sa.Integer(), nullable=False),
        sa.Column("reorder_point", sa.Integer(), nullable=False),
        sa.Column("lead_time_days", sa.Integer(), nullable=False),
        sa.Column("supplier_name", sa.String(length=255), nullable=True),
        sa.Column("supplier_contact", sa.String(length=255), nullable=True),
        sa.Column("location", sa.String(length=120), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_inventory_items"),
        sa.UniqueConstraint("sku", name="uq_inventory_items_sku"),
    )

    op.create_table(
        "sales",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("inventory_item_id", sa.Integer(), nullable=True),
        sa.Column(
            "import_batch",
            sa.String(length=64),
            nullable=True,
            comment="Groups rows written by one import call",
        ),
        sa.Column("sku", sa.String(length=120), nullable=False),
        sa.Column("product_name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=120), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("total_revenue", sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column("total_cost", sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column("profit", sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column("sale_date", sa.Date(), nullable=False),
        sa.Column("marketplace", sa.String(length=64), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(
            ["inventory_item_id"],
            ["inventory_items.id"],
            name="fk_sales_inventory_item_id_inventory_items",
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_sales"),
    )
    op.create_index("ix_sales_inventory_item_id", "sales", ["inventory_item_id"], unique=False)
    op.create_index("ix_sales_import_batch", "sales", ["import_batch"], unique=False)
    op.create_index("ix_sales_sku", "sales", ["sku"], unique=False)
    op.create_index("ix_sales_sale_date", "sales", ["sale_date"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_sales_sale_date", table_name="sales")
    op.drop_index("ix_sales_sku", table_name="sales")
    op.drop_index("ix_sales_import_batch", table_name="sales")
    op.drop_index("ix_sales_inventory_item_id", table_name="sales")
    op.drop_table("sales")
    op.drop_table("inventory_items")

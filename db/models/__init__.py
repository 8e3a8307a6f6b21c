"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.inventory_item import InventoryItem
from db.models.sale import Sale

__all__ = [
    "InventoryItem",
    "Sale",
]

"""
app/repositories package marker.
"""

from app.repositories.inventory_repository import InventoryRepository
from app.repositories.sale_repository import SaleRepository

__all__ = [
    "InventoryRepository",
    "SaleRepository",
]

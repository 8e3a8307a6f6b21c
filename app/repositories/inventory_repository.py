"""
app/repositories/inventory_repository.py

Persistence helpers for inventory items.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.domain.commerce_import import ProductRecord
from db.models.inventory_item import InventoryItem


class InventoryRepository:
    """
    Repository for SKU-keyed inventory reads and writes.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_sku(self, sku: str) -> InventoryItem | None:
        stmt = select(InventoryItem).where(InventoryItem.sku == sku.strip())
        return self._session.execute(stmt).scalars().first()

    def get_by_skus(self, skus: Iterable[str]) -> dict[str, InventoryItem]:
        """
        Load every item whose SKU is in ``skus``, keyed by SKU.
        """

        wanted = {sku.strip() for sku in skus if sku and sku.strip()}
        if not wanted:
            return {}
        stmt = select(InventoryItem).where(InventoryItem.sku.in_(wanted))
        return {item.sku: item for item in self._session.execute(stmt).scalars().all()}

    def upsert_from_record(self, record: ProductRecord) -> tuple[InventoryItem, bool]:
        """
        Insert or overwrite the item with ``record.sku``.

        Returns the item and whether it was newly created.
        """

        existing = self.get_by_sku(record.sku)
        created = existing is None
        item = existing or InventoryItem(sku=record.sku.strip())

        item.name = record.name
        item.category = record.category
        item.selling_price = Decimal(record.selling_price)
        item.cost_price = Decimal(record.cost_price)
        item.current_stock = record.current_stock
        item.reorder_point = record.reorder_point
        item.lead_time_days = record.lead_time
        item.supplier_name = record.supplier_name
        item.supplier_contact = record.supplier_contact or None
        item.location = record.location
        item.notes = record.notes

        if created:
            self._session.add(item)
        self._session.flush()
        return item, created

    def decrement_stock(self, item: InventoryItem, quantity: int) -> int:
        """
        Subtract sold units from ``item`` and return the new stock level.
        """

        item.current_stock = (item.current_stock or 0) - quantity
        return item.current_stock

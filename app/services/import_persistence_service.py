"""
app/services/import_persistence_service.py

Writes parsed import records to the database and applies inventory effects.

Products are upserted by SKU first. Then every imported sale takes its
sold units off the matching inventory item (same SKU), and when that item
carries a unit cost the sale's total cost and profit are recomputed from
it; the parser's ``profit`` is only a placeholder.

Everything happens in one transaction: the session is committed once at
the end, or rolled back and ``ImportPersistenceError`` raised.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from functools import lru_cache
from typing import Any, Mapping, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import ImportDefaults, get_import_defaults
from app.domain.commerce_import import (
    CSVType,
    ImportSummary,
    ParseResult,
    ProductRecord,
    RecordKind,
    SalesRecord,
)
from app.parsers.coercion import (
    format_money,
    parse_calendar_date,
    parse_number,
    parse_quantity,
    quantize_money,
)
from app.repositories.inventory_repository import InventoryRepository
from app.repositories.sale_repository import SaleRepository
from app.validators.record_validator import RecordValidator
from db.models.sale import Sale

logger = logging.getLogger(__name__)


class ImportValidationError(ValueError):
    """
    Raised when records are not fit to persist.
    """

    def __init__(self, *, message: str, errors: Sequence[str]) -> None:
        super().__init__(message)
        self.message = message
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, object]:
        return {"message": self.message, "errors": list(self.errors)}


class ImportPersistenceError(RuntimeError):
    """
    Raised when valid records cannot be persisted.
    """


@dataclass(frozen=True)
class _SaleOutcome:
    sale: Sale
    matched_inventory: bool


def new_batch_id() -> str:
    stamp = datetime.now(tz=timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"csv_{stamp}_{uuid.uuid4().hex[:8]}"


class ImportPersistenceService:
    """
    Coordinates validation, persistence, and inventory updates for imports.
    """

    def __init__(
        self,
        *,
        validator: RecordValidator | None = None,
        defaults: ImportDefaults | None = None,
    ) -> None:
        self._validator = validator or RecordValidator()
        self._defaults = defaults or ImportDefaults()

    def import_parse_result(self, *, result: ParseResult, db: Session) -> ImportSummary:
        """
        Persist a clean ``ParseResult``; any parse error blocks the import.
        """

        if result.has_errors:
            raise ImportValidationError(message="CSV parsing errors", errors=result.errors)
        return self._import(
            sales=list(result.sales_data),
            products=list(result.products_data),
            db=db,
            csv_type=result.csv_type,
        )

    def import_sales(self, *, records: Sequence[SalesRecord | Mapping[str, Any]], db: Session) -> ImportSummary:
        """
        Persist already-parsed (possibly hand-edited) sales records.
        """

        return self._import(sales=list(records), products=[], db=db, csv_type=CSVType.SALES)

    def _import(
        self,
        *,
        sales: list[SalesRecord | Mapping[str, Any]],
        products: list[ProductRecord],
        db: Session,
        csv_type: CSVType | None,
    ) -> ImportSummary:
        sales_errors = self._validator.validate(sales, RecordKind.SALES)
        if sales_errors:
            raise ImportValidationError(message="Sales data validation failed", errors=sales_errors)
        product_errors = self._validator.validate(products, RecordKind.PRODUCTS)
        if product_errors:
            raise ImportValidationError(message="Product data validation failed", errors=product_errors)

        sale_records = [self._to_sales_record(record) for record in sales]
        batch_id = new_batch_id() if sale_records else None
        inventory = InventoryRepository(db)

        try:
            created = updated = 0
            for record in products:
                _, was_created = inventory.upsert_from_record(record)
                if was_created:
                    created += 1
                else:
                    updated += 1
            outcomes = self._persist_sales(
                records=sale_records,
                batch_id=batch_id,
                inventory=inventory,
                sale_repository=SaleRepository(db),
            )
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise ImportPersistenceError("Failed to persist imported records.") from exc

        unmatched = sorted({outcome.sale.sku for outcome in outcomes if not outcome.matched_inventory})
        if unmatched:
            logger.info("Imported sales without inventory match batch=%s skus=%s", batch_id, unmatched)
        logger.info(
            "Import persisted batch=%s type=%s sales=%d products_created=%d products_updated=%d",
            batch_id,
            csv_type.value if csv_type is not None else None,
            len(outcomes),
            created,
            updated,
        )
        return ImportSummary(
            imported_sales=len(outcomes),
            imported_products=created + updated,
            batch_id=batch_id,
            csv_type=csv_type,
            products_created=created,
            products_updated=updated,
            unmatched_skus=unmatched,
        )

    def _persist_sales(
        self,
        *,
        records: Sequence[SalesRecord],
        batch_id: str | None,
        inventory: InventoryRepository,
        sale_repository: SaleRepository,
    ) -> list[_SaleOutcome]:
        if not records:
            return []

        items = inventory.get_by_skus(record.sku for record in records)
        outcomes: list[_SaleOutcome] = []
        for record in records:
            item = items.get(record.sku)
            revenue = Decimal(record.total_revenue)
            total_cost = Decimal(record.total_cost)
            if item is not None:
                remaining = inventory.decrement_stock(item, record.quantity)
                if remaining < 0:
                    logger.warning("Stock below zero after import sku=%s stock=%d", item.sku, remaining)
                if item.cost_price:
                    total_cost = quantize_money(item.cost_price * record.quantity)

            sale = Sale(
                inventory_item_id=item.id if item is not None else None,
                import_batch=batch_id,
                sku=record.sku,
                product_name=record.product_name,
                category=record.category,
                quantity=record.quantity,
                unit_price=Decimal(record.unit_price),
                total_revenue=revenue,
                total_cost=total_cost,
                profit=quantize_money(revenue - total_cost),
                sale_date=record.sale_date,
                marketplace=record.marketplace,
                notes=record.notes or None,
            )
            outcomes.append(_SaleOutcome(sale=sale, matched_inventory=item is not None))

        sale_repository.add_many([outcome.sale for outcome in outcomes])
        return outcomes

    def _to_sales_record(self, record: SalesRecord | Mapping[str, Any]) -> SalesRecord:
        """
        Build a ``SalesRecord`` from a validated record or edited mapping.

        Revenue is recomputed because an edit may have changed quantity or
        price without touching the total.
        """

        if isinstance(record, SalesRecord):
            values: Mapping[str, Any] = record.to_dict()
        else:
            values = record

        sku = str(values["sku"]).strip()
        quantity = parse_quantity(str(values["quantity"]))
        unit_price = quantize_money(parse_number(str(values["unit_price"])))
        raw_cost = values.get("total_cost")
        cost = parse_number(str(raw_cost)) if raw_cost not in (None, "") else None
        sale_date = values["sale_date"]
        if not isinstance(sale_date, date):
            sale_date = parse_calendar_date(str(sale_date))
        revenue = format_money(unit_price * quantity)

        return SalesRecord(
            sku=sku,
            product_name=self._text(values.get("product_name")) or sku,
            category=self._text(values.get("category")) or self._defaults.category,
            quantity=quantity,
            unit_price=format_money(unit_price),
            total_revenue=revenue,
            total_cost=format_money(cost) if cost is not None else self._defaults.money,
            profit=revenue,
            sale_date=sale_date,
            marketplace=self._text(values.get("marketplace")) or self._defaults.marketplace,
            notes=self._text(values.get("notes")) or "",
        )

    @staticmethod
    def _text(value: Any) -> str | None:
        if value is None:
            return None
        stripped = str(value).strip()
        return stripped or None


@lru_cache(maxsize=1)
def get_import_persistence_service() -> ImportPersistenceService:
    """
    Build and cache the persistence service with env-driven defaults.
    """

    return ImportPersistenceService(defaults=get_import_defaults())

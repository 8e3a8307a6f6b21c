"""
app/parsers/sales_parser.py

Strict parsing of one CSV row into a canonical sales record.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Mapping, Sequence

from app.config import ImportDefaults
from app.domain.commerce_import import RawRow, RowParseError, SalesRecord
from app.mappers.field_resolver import SALES_FIELD_ALIASES, FieldResolver
from app.parsers.coercion import (
    format_money,
    parse_calendar_date,
    parse_number,
    parse_quantity,
    quantize_money,
)


class SalesRowParser:
    """
    Turns a raw row into a ``SalesRecord`` or raises ``RowParseError``.

    A sale without SKU, date, quantity or price is rejected outright;
    only descriptive fields fall back to defaults.
    """

    def __init__(
        self,
        *,
        resolver: FieldResolver | None = None,
        defaults: ImportDefaults | None = None,
        aliases: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        self._resolver = resolver or FieldResolver()
        self._defaults = defaults or ImportDefaults()
        self._aliases: dict[str, tuple[str, ...]] = {
            canonical: tuple(values)
            for canonical, values in (aliases or SALES_FIELD_ALIASES).items()
        }

    def parse(self, row: RawRow, row_number: int) -> SalesRecord:
        sku = self._resolve(row, "sku")
        raw_date = self._resolve(row, "sale_date")
        raw_quantity = self._resolve(row, "quantity")
        raw_price = self._resolve(row, "unit_price")

        if sku is None:
            raise RowParseError("SKU is required for sales records", row_number=row_number, field="sku")
        if raw_date is None:
            raise RowParseError("Date is required for sales records", row_number=row_number, field="sale_date")

        quantity = parse_quantity(raw_quantity)
        if quantity is None or quantity < 1:
            raise RowParseError(
                "Valid quantity is required for sales records",
                row_number=row_number,
                field="quantity",
            )

        price_value = parse_number(raw_price)
        if price_value is None or price_value < 0:
            raise RowParseError(
                "Valid price is required for sales records",
                row_number=row_number,
                field="unit_price",
            )

        sale_date = parse_calendar_date(raw_date)
        if sale_date is None:
            raise RowParseError("Invalid date format", row_number=row_number, field="sale_date")

        unit_price = quantize_money(price_value)
        total_revenue = format_money(unit_price * quantity)

        return SalesRecord(
            sku=sku,
            product_name=self._resolve(row, "product_name") or sku,
            category=self._resolve(row, "category") or self._defaults.category,
            quantity=quantity,
            unit_price=format_money(unit_price),
            total_revenue=total_revenue,
            total_cost=self._parse_total_cost(row),
            # Recomputed downstream once the inventory cost price is known.
            profit=total_revenue,
            sale_date=sale_date,
            marketplace=self._resolve(row, "marketplace") or self._defaults.marketplace,
            notes=self._resolve(row, "notes") or self._defaults.notes_for_row(row_number),
        )

    def _resolve(self, row: RawRow, canonical: str) -> str | None:
        return self._resolver.resolve(row, self._aliases.get(canonical, ()))

    def _parse_total_cost(self, row: RawRow) -> str:
        cost = parse_number(self._resolve(row, "total_cost"))
        if cost is None or cost < Decimal("0"):
            return self._defaults.money
        return format_money(cost)

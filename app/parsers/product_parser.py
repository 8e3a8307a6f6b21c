"""
app/parsers/product_parser.py

Lenient parsing of one CSV row into a canonical product record.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from app.config import ImportDefaults
from app.domain.commerce_import import ProductRecord, RawRow, RowParseError
from app.mappers.field_resolver import PRODUCT_FIELD_ALIASES, FieldResolver
from app.parsers.coercion import format_money, parse_number, parse_quantity


class ProductRowParser:
    """
    Turns a raw row into a ``ProductRecord`` or raises ``RowParseError``.

    Only name and SKU are required. Numeric fields that are missing or
    unreadable fall back to the configured defaults instead of failing
    the row; values that do parse are kept even when out of range, so the
    record validator can report them.
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
            for canonical, values in (aliases or PRODUCT_FIELD_ALIASES).items()
        }

    def parse(self, row: RawRow, row_number: int) -> ProductRecord:
        fields = self._resolver.resolve_fields(row, self._aliases)
        defaults = self._defaults

        name = fields.get("name")
        sku = fields.get("sku")
        if name is None:
            raise RowParseError("Product name is required", row_number=row_number, field="name")
        if sku is None:
            raise RowParseError("SKU is required", row_number=row_number, field="sku")

        return ProductRecord(
            name=name,
            sku=sku,
            category=fields.get("category") or defaults.category,
            selling_price=self._money(fields.get("selling_price")),
            cost_price=self._money(fields.get("cost_price")),
            current_stock=self._integer(fields.get("current_stock"), defaults.current_stock),
            reorder_point=self._integer(fields.get("reorder_point"), defaults.reorder_point),
            lead_time=self._integer(fields.get("lead_time"), defaults.lead_time),
            supplier_name=fields.get("supplier_name") or defaults.supplier_name,
            supplier_contact=fields.get("supplier_contact") or defaults.supplier_contact,
            location=fields.get("location") or defaults.location,
            notes=fields.get("notes") or defaults.notes_for_row(row_number),
        )

    def _money(self, raw: str | None) -> str:
        value = parse_number(raw)
        if value is None:
            return self._defaults.money
        return format_money(value)

    @staticmethod
    def _integer(raw: str | None, default: int) -> int:
        value = parse_quantity(raw)
        return default if value is None else value

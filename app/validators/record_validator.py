"""
app/validators/record_validator.py

Report-only business-rule checks for already-parsed import records.

Records reaching this pass may have been edited by hand in a preview, so
nothing here fills defaults or rewrites values; it only lists what is
still wrong.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Sequence

from app.domain.commerce_import import RecordKind
from app.parsers.coercion import parse_calendar_date, parse_number, parse_quantity


class RecordValidator:
    """
    Validates sales and product records before persistence.
    """

    def validate(self, records: Sequence[Any], kind: RecordKind | str) -> list[str]:
        """
        Return ``Row N: message`` errors, N being the 1-based record position.
        """

        record_kind = RecordKind(kind)
        check = self._check_sales if record_kind is RecordKind.SALES else self._check_product

        errors: list[str] = []
        for position, record in enumerate(records, start=1):
            errors.extend(f"Row {position}: {message}" for message in check(record))
        return errors

    def _check_sales(self, record: Any) -> list[str]:
        messages: list[str] = []

        if self._is_blank(self._field(record, "sku")):
            messages.append("SKU is required")

        if self._as_quantity(self._field(record, "quantity")) is None:
            messages.append("Valid quantity is required")

        unit_price = self._as_decimal(self._field(record, "unit_price"))
        if unit_price is None or unit_price < 0:
            messages.append("Valid price is required")

        sale_date = self._field(record, "sale_date")
        if self._is_blank(sale_date):
            messages.append("Sale date is required")
        elif not isinstance(sale_date, date) and parse_calendar_date(str(sale_date)) is None:
            messages.append("Invalid date format")

        total_cost = self._field(record, "total_cost")
        if not self._is_blank(total_cost):
            cost = self._as_decimal(total_cost)
            if cost is None:
                messages.append("Total cost must be a number")
            elif cost < 0:
                messages.append("Total cost cannot be negative")

        return messages

    def _check_product(self, record: Any) -> list[str]:
        messages: list[str] = []

        if self._is_blank(self._field(record, "name")):
            messages.append("Product name is required")
        if self._is_blank(self._field(record, "sku")):
            messages.append("SKU is required")

        for field_name, label in (
            ("current_stock", "Stock"),
            ("selling_price", "Selling price"),
            ("cost_price", "Cost price"),
            ("reorder_point", "Reorder point"),
        ):
            raw = self._field(record, field_name)
            if self._is_blank(raw):
                continue
            value = self._as_decimal(raw)
            if value is None:
                messages.append(f"{label} must be a number")
            elif value < 0:
                messages.append(f"{label} cannot be negative")

        return messages

    @staticmethod
    def _field(record: Any, name: str) -> Any:
        if isinstance(record, Mapping):
            return record.get(name)
        return getattr(record, name, None)

    @classmethod
    def _as_quantity(cls, value: Any) -> int | None:
        """
        Return a positive whole unit count, or None.

        The value must mean the same number read as a decimal and as a
        unit count, so ``"2.5"`` and ``"1e3"`` are both rejected.
        """

        number = cls._as_decimal(value)
        if number is None or number <= 0 or number != number.to_integral_value():
            return None
        quantity = parse_quantity(cls._literal(value))
        if quantity is None or quantity != number:
            return None
        return quantity

    @classmethod
    def _as_decimal(cls, value: Any) -> Decimal | None:
        if value is None or isinstance(value, bool):
            return None
        return parse_number(cls._literal(value))

    @staticmethod
    def _literal(value: Any) -> str:
        return repr(value) if isinstance(value, float) else str(value)

    @staticmethod
    def _is_blank(value: Any) -> bool:
        if value is None:
            return True
        return isinstance(value, str) and value.strip() == ""


_DEFAULT_VALIDATOR = RecordValidator()


def validate_records(records: Sequence[Any], kind: RecordKind | str) -> list[str]:
    """
    Validate records with the shared stateless validator.
    """

    return _DEFAULT_VALIDATOR.validate(records, kind)

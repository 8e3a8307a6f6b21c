"""
tests/test_record_validator.py

Pytest tests for the report-only validation pass over parsed or edited records.
"""

from __future__ import annotations

from datetime import date

import pytest

from app.domain.commerce_import import ProductRecord, RecordKind, SalesRecord
from app.validators.record_validator import RecordValidator, validate_records


@pytest.fixture()
def validator() -> RecordValidator:
    return RecordValidator()


def _sale(**overrides: object) -> dict[str, object]:
    record: dict[str, object] = {
        "sku": "A1",
        "quantity": "2",
        "unit_price": "9.99",
        "sale_date": "2024-01-05",
        "total_cost": "",
    }
    record.update(overrides)
    return record


def _product(**overrides: object) -> dict[str, object]:
    record: dict[str, object] = {
        "name": "Widget",
        "sku": "W1",
        "current_stock": "5",
        "selling_price": "9.99",
        "cost_price": "4.00",
        "reorder_point": "10",
    }
    record.update(overrides)
    return record


class TestSalesValidation:
    def test_clean_mapping_passes(self, validator: RecordValidator) -> None:
        assert validator.validate([_sale()], RecordKind.SALES) == []

    def test_parsed_record_passes(self, validator: RecordValidator) -> None:
        record = SalesRecord(
            sku="A1",
            product_name="Widget",
            category="imported",
            quantity=1,
            unit_price="0.00",
            total_revenue="0.00",
            total_cost="0.00",
            profit="0.00",
            sale_date=date(2024, 1, 5),
            marketplace="imported",
            notes="",
        )

        assert validator.validate([record], "sales") == []

    def test_native_numbers_are_accepted(self, validator: RecordValidator) -> None:
        assert validator.validate([_sale(quantity=3, unit_price=9.99, total_cost=4)], "sales") == []

    def test_every_problem_is_listed(self, validator: RecordValidator) -> None:
        record = _sale(sku=" ", quantity="0", unit_price="-1", sale_date="", total_cost="x")

        assert validator.validate([record], RecordKind.SALES) == [
            "Row 1: SKU is required",
            "Row 1: Valid quantity is required",
            "Row 1: Valid price is required",
            "Row 1: Sale date is required",
            "Row 1: Total cost must be a number",
        ]

    @pytest.mark.parametrize("quantity", ["2.5", "abc", None, -1, "1e3", 10**15, 3.5])
    def test_invalid_quantity(self, validator: RecordValidator, quantity: object) -> None:
        assert validator.validate([_sale(quantity=quantity)], "sales") == ["Row 1: Valid quantity is required"]

    def test_invalid_date_format(self, validator: RecordValidator) -> None:
        assert validator.validate([_sale(sale_date="soon")], "sales") == ["Row 1: Invalid date format"]

    def test_out_of_range_price(self, validator: RecordValidator) -> None:
        assert validator.validate([_sale(unit_price=10**15)], "sales") == ["Row 1: Valid price is required"]

    def test_whole_float_quantity_is_accepted(self, validator: RecordValidator) -> None:
        assert validator.validate([_sale(quantity=3.0)], "sales") == []

    def test_negative_total_cost(self, validator: RecordValidator) -> None:
        assert validator.validate([_sale(total_cost="-3")], "sales") == ["Row 1: Total cost cannot be negative"]

    def test_rows_are_numbered_by_position(self, validator: RecordValidator) -> None:
        errors = validator.validate([_sale(), _sale(sku=""), _sale(unit_price="free")], "sales")

        assert errors == ["Row 2: SKU is required", "Row 3: Valid price is required"]

    def test_no_defaults_are_filled(self, validator: RecordValidator) -> None:
        record = _sale(sku=None)

        validator.validate([record], "sales")

        assert record["sku"] is None


class TestProductValidation:
    def test_clean_mapping_passes(self, validator: RecordValidator) -> None:
        assert validator.validate([_product()], RecordKind.PRODUCTS) == []

    def test_blank_numbers_are_allowed(self, validator: RecordValidator) -> None:
        record = _product(current_stock="", selling_price=None, cost_price="", reorder_point=None)

        assert validator.validate([record], "products") == []

    def test_required_fields(self, validator: RecordValidator) -> None:
        assert validator.validate([_product(name="", sku=None)], "products") == [
            "Row 1: Product name is required",
            "Row 1: SKU is required",
        ]

    def test_numeric_field_messages(self, validator: RecordValidator) -> None:
        record = _product(current_stock="-1", selling_price="abc", cost_price="-0.01", reorder_point="x")

        assert validator.validate([record], "products") == [
            "Row 1: Stock cannot be negative",
            "Row 1: Selling price must be a number",
            "Row 1: Cost price cannot be negative",
            "Row 1: Reorder point must be a number",
        ]

    def test_parsed_record_with_negative_stock(self, validator: RecordValidator) -> None:
        record = ProductRecord(
            name="Widget",
            sku="W1",
            category="imported",
            selling_price="9.99",
            cost_price="4.00",
            current_stock=-3,
            reorder_point=10,
            lead_time=7,
            supplier_name="Unknown",
            supplier_contact="",
            location="Default",
            notes="",
        )

        assert validator.validate([record], "products") == ["Row 1: Stock cannot be negative"]


class TestValidatorEntryPoints:
    def test_unknown_kind_is_rejected(self, validator: RecordValidator) -> None:
        with pytest.raises(ValueError):
            validator.validate([_sale()], "orders")

    def test_module_helper(self) -> None:
        assert validate_records([_sale(sku="")], "sales") == ["Row 1: SKU is required"]

    def test_empty_batch(self, validator: RecordValidator) -> None:
        assert validator.validate([], "products") == []

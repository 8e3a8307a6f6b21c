"""
tests/test_type_classifier.py

Header-row classification into sales, products, mixed or undetermined.
"""

from __future__ import annotations

import pytest

from app.domain.commerce_import import CSVType
from app.mappers.type_classifier import classify_headers


class TestClassifyHeaders:
    @pytest.mark.parametrize(
        ("headers", "expected"),
        [
            (["SKU", "Date", "Quantity", "Price"], CSVType.SALES),
            (["sku", "Units Sold", "Price"], CSVType.SALES),
            (["Product Name", "SKU", "Current Stock"], CSVType.PRODUCTS),
            (["sku", "Supplier", "Reorder Level"], CSVType.PRODUCTS),
            (["Product Name", "Sale Date", "Quantity", "Price"], CSVType.MIXED),
            (["foo", "bar"], CSVType.UNDETERMINED),
            ([], CSVType.UNDETERMINED),
        ],
    )
    def test_classification(self, headers: list[str], expected: CSVType) -> None:
        assert classify_headers(headers) is expected

    def test_signal_words_match_as_substrings(self) -> None:
        assert classify_headers(["Sale Date (UTC)", "sku"]) is CSVType.SALES

    def test_headers_are_trimmed_and_lowercased(self) -> None:
        assert classify_headers(["  CURRENT STOCK  "]) is CSVType.PRODUCTS

    def test_blank_headers_are_ignored(self) -> None:
        assert classify_headers(["", "Name"]) is CSVType.UNDETERMINED

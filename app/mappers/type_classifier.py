"""
app/mappers/type_classifier.py

Header-based detection of which record families a CSV file carries.
"""

from __future__ import annotations

from typing import Iterable

from app.domain.commerce_import import CSVType

SALES_SIGNAL_WORDS: tuple[str, ...] = ("units sold", "quantity", "sale date", "date")
PRODUCT_SIGNAL_WORDS: tuple[str, ...] = ("product name", "current stock", "supplier", "reorder")


def _has_signal(headers: Iterable[str], signal_words: Iterable[str]) -> bool:
    words = tuple(signal_words)
    return any(word in header for header in headers for word in words)


def classify_headers(headers: Iterable[str]) -> CSVType:
    """
    Classify a header row as sales, products, mixed, or undetermined.

    Matching is substring-based on lower-cased, trimmed headers, so
    ``"Sale Date (UTC)"`` counts as a sales signal.
    """

    normalized = {header.strip().lower() for header in headers if header}
    has_sales_fields = _has_signal(normalized, SALES_SIGNAL_WORDS)
    has_product_fields = _has_signal(normalized, PRODUCT_SIGNAL_WORDS)

    if has_sales_fields and has_product_fields:
        return CSVType.MIXED
    if has_sales_fields:
        return CSVType.SALES
    if has_product_fields:
        return CSVType.PRODUCTS
    return CSVType.UNDETERMINED

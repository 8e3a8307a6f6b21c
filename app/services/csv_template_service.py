"""
app/services/csv_template_service.py

Reference CSV files with canonical headers for sellers to fill in.
"""

from __future__ import annotations

import csv
import io
from typing import Sequence

SALES_TEMPLATE_HEADERS: tuple[str, ...] = (
    "sku",
    "product_name",
    "category",
    "quantity",
    "unit_price",
    "total_cost",
    "sale_date",
    "marketplace",
    "notes",
)

PRODUCTS_TEMPLATE_HEADERS: tuple[str, ...] = (
    "name",
    "sku",
    "category",
    "selling_price",
    "cost_price",
    "current_stock",
    "reorder_point",
    "lead_time",
    "supplier_name",
    "supplier_contact",
    "location",
    "notes",
)

# Sale price sits under "Price" so it never collides with "Selling Price".
MIXED_TEMPLATE_HEADERS: tuple[str, ...] = (
    "Product Name",
    "SKU",
    "Category",
    "Selling Price",
    "Cost Price",
    "Current Stock",
    "Supplier",
    "Sale Date",
    "Quantity",
    "Price",
    "Marketplace",
)

_TEMPLATES: dict[str, tuple[tuple[str, ...], tuple[tuple[str, ...], ...]]] = {
    "sales": (
        SALES_TEMPLATE_HEADERS,
        (
            ("WEP-2024-001", "Wireless Earbuds Pro", "Electronics", "2", "120.00", "90.00", "2024-07-15", "amazon", ""),
            ("FTX-2024-002", "Fitness Tracker X1", "Health & Beauty", "1", "110.00", "65.00", "2024-07-14", "amazon", ""),
            ("SPC-2024-003", "Sports Water Bottle", "Sports", "5", "30.00", "40.00", "2024-07-13", "ebay", ""),
        ),
    ),
    "products": (
        PRODUCTS_TEMPLATE_HEADERS,
        (
            ("Example Product", "EX-001", "Electronics", "29.99", "15.00", "100", "20", "7", "Supplier Inc", "orders@supplier.example", "Main Warehouse", ""),
            ("Another Item", "AN-002", "Home & Garden", "19.99", "8.50", "50", "10", "14", "Garden Co", "", "Default", ""),
        ),
    ),
    "mixed": (
        MIXED_TEMPLATE_HEADERS,
        (
            ("Wireless Earbuds Pro", "WEP-2024-001", "Electronics", "120.00", "45.00", "40", "Audio Supply Co", "2024-07-15", "2", "120.00", "amazon"),
        ),
    ),
}

TEMPLATE_KINDS: tuple[str, ...] = tuple(_TEMPLATES)


class UnknownTemplateError(ValueError):
    """
    Raised when a template kind is not one of ``TEMPLATE_KINDS``.
    """


def _render(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue()


def build_csv_template(kind: str) -> str:
    """
    Return CSV text with canonical headers and example rows for ``kind``.
    """

    key = (kind or "").strip().lower()
    if key not in _TEMPLATES:
        raise UnknownTemplateError(
            f"Unknown template kind '{kind}'. Allowed values: {', '.join(TEMPLATE_KINDS)}."
        )
    headers, rows = _TEMPLATES[key]
    return _render(headers, rows)

"""
app/domain/commerce_import.py

Domain models used by the sales/product CSV import flow.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Mapping

RawRow = Mapping[str, str | None]


class CSVType(str, Enum):
    """
    Kind of records a CSV file carries, decided from its header row.
    """

    SALES = "sales"
    PRODUCTS = "products"
    MIXED = "mixed"
    UNDETERMINED = "undetermined"


class RecordKind(str, Enum):
    """
    Record family selector for validation and templates.
    """

    SALES = "sales"
    PRODUCTS = "products"


class RowParseError(ValueError):
    """
    Raised when one CSV row cannot be turned into a canonical record.
    """

    def __init__(self, message: str, *, row_number: int, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.row_number = row_number
        self.field = field


@dataclass(frozen=True)
class SalesRecord:
    """
    Canonical sale event parsed from one CSV row.

    Money fields are decimal strings with exactly two fractional digits.
    ``profit`` equals ``total_revenue`` until the persistence layer
    recomputes it from the inventory cost price.
    """

    sku: str
    product_name: str
    category: str
    quantity: int
    unit_price: str
    total_revenue: str
    total_cost: str
    profit: str
    sale_date: date
    marketplace: str
    notes: str

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["sale_date"] = self.sale_date.isoformat()
        return payload


@dataclass(frozen=True)
class ProductRecord:
    """
    Canonical product/inventory record parsed from one CSV row.
    """

    name: str
    sku: str
    category: str
    selling_price: str
    cost_price: str
    current_stock: int
    reorder_point: int
    lead_time: int
    supplier_name: str
    supplier_contact: str
    location: str
    notes: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of one CSV import parse.

    ``csv_type`` is None when the whole batch was rejected (empty input,
    unreadable CSV, or a header row that matches no known record type).
    """

    csv_type: CSVType | None
    sales_data: tuple[SalesRecord, ...] = ()
    products_data: tuple[ProductRecord, ...] = ()
    errors: tuple[str, ...] = ()

    @classmethod
    def fatal(cls, message: str) -> ParseResult:
        return cls(csv_type=None, errors=(message,))

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.csv_type.value if self.csv_type is not None else None,
            "sales_data": [record.to_dict() for record in self.sales_data],
            "products_data": [record.to_dict() for record in self.products_data],
            "errors": list(self.errors),
        }


@dataclass(frozen=True)
class ImportSummary:
    """
    End-of-run persistence summary for one import.
    """

    imported_sales: int
    imported_products: int
    batch_id: str | None = None
    csv_type: CSVType | None = None
    products_created: int = 0
    products_updated: int = 0
    unmatched_skus: list[str] = field(default_factory=list)

"""
app/schemas/csv_import.py

Request and response schemas for the sales/product CSV import endpoints.
"""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

from app.domain.commerce_import import ImportSummary, ParseResult

# Edited records arrive loosely typed; the validation pass reports bad values.
LooseNumber = int | float | str | None


class SalesRecordResponse(BaseModel):
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


class ProductRecordResponse(BaseModel):
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


class CSVParseResultResponse(BaseModel):
    """
    API response model for a CSV preview.
    """

    type: Literal["sales", "products", "mixed", "undetermined"] | None = None
    sales_data: list[SalesRecordResponse] = Field(default_factory=list)
    products_data: list[ProductRecordResponse] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ParseResult) -> CSVParseResultResponse:
        return cls.model_validate(result.to_dict())


class ImportSummaryResponse(BaseModel):
    """
    API response model for a persisted import.
    """

    message: str
    imported_sales: int = Field(..., ge=0)
    imported_products: int = Field(..., ge=0)
    products_created: int = Field(default=0, ge=0)
    products_updated: int = Field(default=0, ge=0)
    type: Literal["sales", "products", "mixed", "undetermined"] | None = None
    batch_id: str | None = None
    unmatched_skus: list[str] = Field(default_factory=list)

    @classmethod
    def from_summary(cls, summary: ImportSummary) -> ImportSummaryResponse:
        return cls(
            message=(
                f"Successfully imported {summary.imported_sales} sales records "
                f"and {summary.imported_products} products"
            ),
            imported_sales=summary.imported_sales,
            imported_products=summary.imported_products,
            products_created=summary.products_created,
            products_updated=summary.products_updated,
            type=summary.csv_type.value if summary.csv_type is not None else None,
            batch_id=summary.batch_id,
            unmatched_skus=list(summary.unmatched_skus),
        )


class EditedSalesRecord(BaseModel):
    """
    One sales record as edited in a preview before bulk import.
    """

    sku: str | None = None
    product_name: str | None = None
    category: str | None = None
    quantity: LooseNumber = None
    unit_price: LooseNumber = None
    total_cost: LooseNumber = None
    sale_date: str | None = None
    marketplace: str | None = None
    notes: str | None = None


class BulkSalesImportRequest(BaseModel):
    sales_data: list[EditedSalesRecord] = Field(..., min_length=1)


class RecordValidationRequest(BaseModel):
    """
    Records to check, as plain objects, with the record family to check them as.
    """

    kind: Literal["sales", "products"]
    records: list[dict[str, str | int | float | bool | None]] = Field(default_factory=list)


class RecordValidationResponse(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)

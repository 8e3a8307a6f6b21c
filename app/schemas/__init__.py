"""
app/schemas package marker.
"""

from app.schemas.csv_import import (
    BulkSalesImportRequest,
    CSVParseResultResponse,
    EditedSalesRecord,
    ImportSummaryResponse,
    ProductRecordResponse,
    RecordValidationRequest,
    RecordValidationResponse,
    SalesRecordResponse,
)

__all__ = [
    "BulkSalesImportRequest",
    "CSVParseResultResponse",
    "EditedSalesRecord",
    "ImportSummaryResponse",
    "ProductRecordResponse",
    "RecordValidationRequest",
    "RecordValidationResponse",
    "SalesRecordResponse",
]

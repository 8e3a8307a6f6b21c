"""
app/domain package marker.
"""

from app.domain.commerce_import import (
    CSVType,
    ImportSummary,
    ParseResult,
    ProductRecord,
    RawRow,
    RecordKind,
    RowParseError,
    SalesRecord,
)

__all__ = [
    "CSVType",
    "ImportSummary",
    "ParseResult",
    "ProductRecord",
    "RawRow",
    "RecordKind",
    "RowParseError",
    "SalesRecord",
]

"""
app/mappers package marker.
"""

from app.mappers.field_resolver import (
    PRODUCT_FIELD_ALIASES,
    SALES_FIELD_ALIASES,
    FieldResolver,
    normalize_header,
    resolve_field,
)
from app.mappers.type_classifier import classify_headers

__all__ = [
    "PRODUCT_FIELD_ALIASES",
    "SALES_FIELD_ALIASES",
    "FieldResolver",
    "classify_headers",
    "normalize_header",
    "resolve_field",
]

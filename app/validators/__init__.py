"""
app/validators package marker.
"""

from app.validators.record_validator import RecordValidator, validate_records

__all__ = [
    "RecordValidator",
    "validate_records",
]

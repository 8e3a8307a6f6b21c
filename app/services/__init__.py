"""
app/services package marker.
"""

from app.services.csv_import_service import CSVImportParser, get_csv_import_parser, parse_csv
from app.services.csv_template_service import UnknownTemplateError, build_csv_template
from app.services.import_persistence_service import (
    ImportPersistenceError,
    ImportPersistenceService,
    ImportValidationError,
    get_import_persistence_service,
)

__all__ = [
    "CSVImportParser",
    "get_csv_import_parser",
    "parse_csv",
    "UnknownTemplateError",
    "build_csv_template",
    "ImportPersistenceError",
    "ImportPersistenceService",
    "ImportValidationError",
    "get_import_persistence_service",
]

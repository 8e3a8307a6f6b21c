"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class ImportDefaults:
    """
    Fallback values applied when an imported row leaves a field blank.

    Sales rows only use ``category``, ``marketplace``, ``money`` and
    ``notes_template``; the rest apply to product rows.
    """

    category: str = "imported"
    marketplace: str = "imported"
    money: str = "0.00"
    current_stock: int = 0
    reorder_point: int = 10
    lead_time: int = 7
    supplier_name: str = "Unknown"
    supplier_contact: str = ""
    location: str = "Default"
    notes_template: str = "Imported from CSV row {row_number}"

    def notes_for_row(self, row_number: int) -> str:
        return self.notes_template.format(row_number=row_number)


@dataclass(frozen=True)
class CSVImportSettings:
    """
    Runtime settings for CSV import.
    """

    log_row_errors: bool = True
    max_upload_bytes: int = 5 * 1024 * 1024


@lru_cache(maxsize=1)
def get_import_defaults() -> ImportDefaults:
    """
    Return cached import defaults, allowing env overrides per deployment.
    """

    base = ImportDefaults()
    return ImportDefaults(
        category=_get_str_env("IMPORT_DEFAULT_CATEGORY", base.category),
        marketplace=_get_str_env("IMPORT_DEFAULT_MARKETPLACE", base.marketplace),
        money=base.money,
        current_stock=base.current_stock,
        reorder_point=max(0, _get_int_env("IMPORT_DEFAULT_REORDER_POINT", base.reorder_point)),
        lead_time=max(0, _get_int_env("IMPORT_DEFAULT_LEAD_TIME_DAYS", base.lead_time)),
        supplier_name=_get_str_env("IMPORT_DEFAULT_SUPPLIER_NAME", base.supplier_name),
        supplier_contact=base.supplier_contact,
        location=_get_str_env("IMPORT_DEFAULT_LOCATION", base.location),
        notes_template=base.notes_template,
    )


@lru_cache(maxsize=1)
def get_csv_import_settings() -> CSVImportSettings:
    """
    Return cached CSV import settings from environment variables.
    """

    return CSVImportSettings(
        log_row_errors=_get_bool_env("CSV_IMPORT_LOG_ROW_ERRORS", True),
        max_upload_bytes=max(1024, _get_int_env("CSV_IMPORT_MAX_UPLOAD_BYTES", 5 * 1024 * 1024)),
    )

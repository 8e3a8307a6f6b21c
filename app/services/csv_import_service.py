"""
app/services/csv_import_service.py

Batch parsing of uploaded or pasted CSV text into sales and product records.

The parser never raises: whole-file problems (empty input, unreadable CSV,
unrecognised header row) come back as a single error with no records, and
row problems come back as ``Row N: message`` entries next to every row
that did parse. Row numbers match what a spreadsheet editor shows (the
header is line 1).
"""

from __future__ import annotations

import csv
import io
import logging
from functools import lru_cache

from app.config import get_csv_import_settings, get_import_defaults
from app.domain.commerce_import import (
    CSVType,
    ParseResult,
    ProductRecord,
    RawRow,
    RowParseError,
    SalesRecord,
)
from app.mappers.type_classifier import classify_headers
from app.parsers.product_parser import ProductRowParser
from app.parsers.sales_parser import SalesRowParser

logger = logging.getLogger(__name__)

EMPTY_CSV_MESSAGE = "CSV file is empty or has no valid data rows"
UNDETERMINED_TYPE_MESSAGE = "Unable to determine CSV type. Please ensure headers match expected format."

_SALES_TYPES = {CSVType.SALES, CSVType.MIXED}
_PRODUCT_TYPES = {CSVType.PRODUCTS, CSVType.MIXED}


class CSVImportParser:
    """
    Coordinates tokenizing, type detection, and per-row record parsing.
    """

    def __init__(
        self,
        *,
        log_row_errors: bool = True,
        sales_parser: SalesRowParser | None = None,
        product_parser: ProductRowParser | None = None,
    ) -> None:
        self._log_row_errors = log_row_errors
        self._sales_parser = sales_parser or SalesRowParser()
        self._product_parser = product_parser or ProductRowParser()

    def parse_csv(self, text: str) -> ParseResult:
        """
        Parse CSV text into a fresh ``ParseResult``.
        """

        try:
            headers, rows = self._tokenize(text or "")
        except csv.Error as exc:
            logger.warning("CSV import rejected: tokenizer failed: %s", exc)
            return ParseResult.fatal(f"CSV parsing error: {exc}")

        if not rows:
            logger.info("CSV import rejected: no data rows")
            return ParseResult.fatal(EMPTY_CSV_MESSAGE)

        csv_type = classify_headers(headers)
        if csv_type is CSVType.UNDETERMINED:
            logger.info("CSV import rejected: undetermined type headers=%r", headers)
            return ParseResult.fatal(UNDETERMINED_TYPE_MESSAGE)

        sales: list[SalesRecord] = []
        products: list[ProductRecord] = []
        errors: list[str] = []

        for index, row in enumerate(rows):
            row_number = index + 2
            if csv_type in _SALES_TYPES:
                try:
                    sales.append(self._sales_parser.parse(row, row_number))
                except RowParseError as exc:
                    self._record_error(errors, exc)
            if csv_type in _PRODUCT_TYPES:
                try:
                    products.append(self._product_parser.parse(row, row_number))
                except RowParseError as exc:
                    self._record_error(errors, exc)

        logger.info(
            "CSV import parsed type=%s rows=%d sales=%d products=%d errors=%d",
            csv_type.value,
            len(rows),
            len(sales),
            len(products),
            len(errors),
        )
        return ParseResult(
            csv_type=csv_type,
            sales_data=tuple(sales),
            products_data=tuple(products),
            errors=tuple(errors),
        )

    @staticmethod
    def _tokenize(text: str) -> tuple[list[str], list[RawRow]]:
        stream = io.StringIO(text.lstrip("\ufeff").lstrip(), newline="")
        reader = csv.DictReader(stream, skipinitialspace=True)
        if not reader.fieldnames:
            return [], []
        reader.fieldnames = [name.strip() for name in reader.fieldnames]

        rows: list[RawRow] = []
        for raw_row in reader:
            row = {
                key: value.strip() if isinstance(value, str) else None
                for key, value in raw_row.items()
                if key is not None
            }
            if all(not value for value in row.values()):
                continue
            rows.append(row)
        return list(reader.fieldnames), rows

    def _record_error(self, errors: list[str], error: RowParseError) -> None:
        if self._log_row_errors:
            logger.warning(
                "CSV import row error row=%s field=%s message=%s",
                error.row_number,
                error.field,
                error.message,
            )
        errors.append(f"Row {error.row_number}: {error.message}")


@lru_cache(maxsize=1)
def get_csv_import_parser() -> CSVImportParser:
    """
    Build and cache the import parser with env-driven settings.
    """

    settings = get_csv_import_settings()
    defaults = get_import_defaults()
    return CSVImportParser(
        log_row_errors=settings.log_row_errors,
        sales_parser=SalesRowParser(defaults=defaults),
        product_parser=ProductRowParser(defaults=defaults),
    )


def parse_csv(text: str) -> ParseResult:
    """
    Parse CSV text with the default import parser.
    """

    return get_csv_import_parser().parse_csv(text)

"""
app/api/routers/csv_import.py

Sales/product CSV import HTTP endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_csv_text
from app.schemas.csv_import import (
    BulkSalesImportRequest,
    CSVParseResultResponse,
    ImportSummaryResponse,
    RecordValidationRequest,
    RecordValidationResponse,
)
from app.services.csv_import_service import CSVImportParser, get_csv_import_parser
from app.services.csv_template_service import UnknownTemplateError, build_csv_template
from app.services.import_persistence_service import (
    ImportPersistenceError,
    ImportPersistenceService,
    ImportValidationError,
    get_import_persistence_service,
)
from app.validators.record_validator import validate_records
from db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["csv-import"])


def _persistence_failed(exc: ImportPersistenceError) -> HTTPException:
    logger.error("Import persistence failed: %s", exc.__cause__ or exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Unable to persist imported records.",
    )


@router.post("/sales/csv-preview", response_model=CSVParseResultResponse)
def preview_csv(
    csv_text: str = Depends(get_csv_text),
    parser: CSVImportParser = Depends(get_csv_import_parser),
) -> CSVParseResultResponse:
    """
    Parse CSV text and return records and errors without persisting anything.
    """

    return CSVParseResultResponse.from_result(parser.parse_csv(csv_text))


@router.post("/sales/csv-import", response_model=ImportSummaryResponse)
def import_csv(
    csv_text: str = Depends(get_csv_text),
    db: Session = Depends(get_db),
    parser: CSVImportParser = Depends(get_csv_import_parser),
    persistence_service: ImportPersistenceService = Depends(get_import_persistence_service),
) -> ImportSummaryResponse:
    """
    Parse CSV text and persist it when every row is clean.
    """

    result = parser.parse_csv(csv_text)
    try:
        summary = persistence_service.import_parse_result(result=result, db=db)
    except ImportValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.to_dict(),
        ) from exc
    except ImportPersistenceError as exc:
        raise _persistence_failed(exc) from exc

    return ImportSummaryResponse.from_summary(summary)


@router.post("/sales/bulk-import", response_model=ImportSummaryResponse)
def bulk_import_sales(
    payload: BulkSalesImportRequest,
    db: Session = Depends(get_db),
    persistence_service: ImportPersistenceService = Depends(get_import_persistence_service),
) -> ImportSummaryResponse:
    """
    Persist sales records that were previewed and possibly edited by the user.
    """

    records = [record.model_dump() for record in payload.sales_data]
    try:
        summary = persistence_service.import_sales(records=records, db=db)
    except ImportValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.to_dict(),
        ) from exc
    except ImportPersistenceError as exc:
        raise _persistence_failed(exc) from exc

    return ImportSummaryResponse.from_summary(summary)


@router.post("/records/validate", response_model=RecordValidationResponse)
def validate_import_records(payload: RecordValidationRequest) -> RecordValidationResponse:
    errors = validate_records(payload.records, payload.kind)
    return RecordValidationResponse(valid=not errors, errors=errors)


@router.get("/csv-templates/{kind}")
def download_csv_template(kind: str) -> Response:
    """
    Download a CSV template with canonical headers and example rows.
    """

    try:
        content = build_csv_template(kind)
    except UnknownTemplateError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{kind.strip().lower()}_template.csv"'},
    )

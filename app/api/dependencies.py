"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from fastapi import File, Form, HTTPException, UploadFile, status

from app.config import get_csv_import_settings

CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
    "text/plain",
}


def _check_csv_upload(file: UploadFile) -> None:
    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    is_csv_filename = filename.endswith(".csv")
    is_csv_content_type = content_type in CSV_CONTENT_TYPES

    if not is_csv_filename and not is_csv_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV files are allowed.",
        )


def _too_large(limit: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        detail=f"CSV content exceeds the {limit} byte limit.",
    )


def get_csv_text(
    csv_file: UploadFile | None = File(default=None),
    csv_content: str | None = Form(default=None),
) -> str:
    """
    Return CSV text from an uploaded ``csv_file`` or a pasted ``csv_content`` field.

    An upload wins when both are sent.
    """

    limit = get_csv_import_settings().max_upload_bytes

    if csv_file is not None:
        _check_csv_upload(csv_file)
        try:
            raw = csv_file.file.read(limit + 1)
        finally:
            csv_file.file.close()
        if len(raw) > limit:
            raise _too_large(limit)
        try:
            return raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="CSV file must be UTF-8 encoded.",
            ) from exc

    if csv_content is not None:
        if len(csv_content.encode("utf-8")) > limit:
            raise _too_large(limit)
        return csv_content

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="No CSV data provided.",
    )

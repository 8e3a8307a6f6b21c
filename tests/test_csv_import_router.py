"""
tests/test_csv_import_router.py

HTTP tests for the CSV import router, using FastAPI's TestClient with the
database dependency pointed at an in-memory SQLite session.
"""

from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.routers.csv_import import router
from db.models.sale import Sale
from db.session import get_db

SALES_CSV = "SKU,Date,Quantity,Price\nA1,2024-01-05,2,9.99\n"
BROKEN_CSV = "SKU,Date,Quantity,Price\nA1,2024-01-05,2,9.99\n,2024-01-05,1,1.00\n"


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    application = FastAPI()
    application.include_router(router)

    def _override_get_db() -> Generator[Session, None, None]:
        yield db_session

    application.dependency_overrides[get_db] = _override_get_db
    with TestClient(application) as test_client:
        yield test_client


# ---------------------------------------------------------------------------
# Preview
# ---------------------------------------------------------------------------


class TestPreview:
    def test_preview_from_pasted_text(self, client: TestClient, db_session: Session) -> None:
        response = client.post("/api/sales/csv-preview", data={"csv_content": SALES_CSV})

        assert response.status_code == 200
        body = response.json()
        assert body["type"] == "sales"
        assert body["errors"] == []
        assert body["sales_data"][0]["sale_date"] == "2024-01-05"
        assert body["sales_data"][0]["unit_price"] == "9.99"
        assert db_session.execute(select(Sale)).scalars().all() == []

    def test_preview_from_upload(self, client: TestClient) -> None:
        response = client.post(
            "/api/sales/csv-preview",
            files={"csv_file": ("sales.csv", SALES_CSV.encode("utf-8"), "text/csv")},
        )

        assert response.status_code == 200
        assert response.json()["sales_data"][0]["sku"] == "A1"

    def test_preview_reports_row_errors(self, client: TestClient) -> None:
        response = client.post("/api/sales/csv-preview", data={"csv_content": BROKEN_CSV})

        assert response.status_code == 200
        assert response.json()["errors"] == ["Row 3: SKU is required for sales records"]

    def test_preview_reports_fatal_errors(self, client: TestClient) -> None:
        response = client.post("/api/sales/csv-preview", data={"csv_content": "foo,bar\n1,2\n"})

        assert response.status_code == 200
        assert response.json()["type"] is None
        assert len(response.json()["errors"]) == 1

    def test_rejects_non_csv_upload(self, client: TestClient) -> None:
        response = client.post(
            "/api/sales/csv-preview",
            files={"csv_file": ("report.pdf", b"%PDF-1.4", "application/pdf")},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Only CSV files are allowed."

    def test_rejects_non_utf8_upload(self, client: TestClient) -> None:
        response = client.post(
            "/api/sales/csv-preview",
            files={"csv_file": ("sales.csv", b"SKU\n\xff\xfe\n", "text/csv")},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "CSV file must be UTF-8 encoded."

    def test_requires_some_input(self, client: TestClient) -> None:
        response = client.post("/api/sales/csv-preview", data={})

        assert response.status_code == 400
        assert response.json()["detail"] == "No CSV data provided."


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------


class TestImport:
    def test_import_persists_clean_file(self, client: TestClient, db_session: Session) -> None:
        response = client.post("/api/sales/csv-import", data={"csv_content": SALES_CSV})

        assert response.status_code == 200
        body = response.json()
        assert body["imported_sales"] == 1
        assert body["imported_products"] == 0
        assert body["type"] == "sales"
        assert body["batch_id"].startswith("csv_")
        assert body["message"] == "Successfully imported 1 sales records and 0 products"
        assert len(db_session.execute(select(Sale)).scalars().all()) == 1

    def test_import_refuses_file_with_errors(self, client: TestClient, db_session: Session) -> None:
        response = client.post("/api/sales/csv-import", data={"csv_content": BROKEN_CSV})

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["message"] == "CSV parsing errors"
        assert detail["errors"] == ["Row 3: SKU is required for sales records"]
        assert db_session.execute(select(Sale)).scalars().all() == []

    def test_bulk_import_of_edited_records(self, client: TestClient) -> None:
        payload = {
            "sales_data": [
                {"sku": "A1", "quantity": 2, "unit_price": "4.50", "sale_date": "2024-01-05", "marketplace": "etsy"},
            ]
        }

        response = client.post("/api/sales/bulk-import", json=payload)

        assert response.status_code == 200
        assert response.json()["imported_sales"] == 1

    def test_bulk_import_reports_validation_errors(self, client: TestClient) -> None:
        payload = {"sales_data": [{"sku": "", "quantity": 1, "unit_price": 1, "sale_date": "2024-01-05"}]}

        response = client.post("/api/sales/bulk-import", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"] == {
            "message": "Sales data validation failed",
            "errors": ["Row 1: SKU is required"],
        }

    def test_bulk_import_rejects_out_of_range_price(self, client: TestClient) -> None:
        payload = {"sales_data": [{"sku": "A1", "quantity": 1, "unit_price": 10**15, "sale_date": "2024-01-05"}]}

        response = client.post("/api/sales/bulk-import", json=payload)

        assert response.status_code == 400
        assert response.json()["detail"]["errors"] == ["Row 1: Valid price is required"]

    def test_bulk_import_needs_records(self, client: TestClient) -> None:
        response = client.post("/api/sales/bulk-import", json={"sales_data": []})

        assert response.status_code == 422


# ---------------------------------------------------------------------------
# Validation and templates
# ---------------------------------------------------------------------------


class TestValidateAndTemplates:
    def test_validate_records(self, client: TestClient) -> None:
        payload = {"kind": "products", "records": [{"name": "Widget", "sku": "W1", "current_stock": -1}]}

        response = client.post("/api/records/validate", json=payload)

        assert response.status_code == 200
        assert response.json() == {"valid": False, "errors": ["Row 1: Stock cannot be negative"]}

    def test_download_template(self, client: TestClient) -> None:
        response = client.get("/api/csv-templates/products")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="products_template.csv"' in response.headers["content-disposition"]
        assert response.text.splitlines()[0].startswith("name,sku,category")

    def test_unknown_template(self, client: TestClient) -> None:
        response = client.get("/api/csv-templates/orders")

        assert response.status_code == 404

"""End-to-end tests for the HTTP interface."""

from datetime import date
from decimal import Decimal

from fastapi.testclient import TestClient

from iar_uploader.core.config import get_settings
from iar_uploader.infrastructure.db.connection import get_database_manager
from iar_uploader.main import create_application

HEADER = (
    "purchase_order_no,date_of_delivery,date_of_preparation_of_iar,prepared_by,iar_no,"
    "particulars,iar_amount,timeline_10wd,supplier_name,delivery_status"
)


def _csv(*lines: str) -> bytes:
    return ("\n".join((HEADER,) + lines) + "\n").encode("utf-8")


def _upload(client, content: bytes, file_name: str = "iar.csv"):
    return client.post("/api/upload-iar", files={"file": (file_name, content, "text/csv")})


class TestDbStatus:
    def test_connected(self, client):
        response = client.get("/api/db-status")
        assert response.status_code == 200
        assert response.json() == {"ok": True, "message": "Database connection successful."}

    def test_unreachable(self, unreachable_client):
        response = unreachable_client.get("/api/db-status")
        assert response.status_code == 500
        body = response.json()
        assert body["ok"] is False
        assert body["error"]


class TestUploadIar:
    def test_currency_amount_inserted(self, client, fetch_rows):
        content = _csv(
            'PO-2025-001,2025-01-15,2025-01-16,J. Cruz,IAR-001,"Bond paper, A4",'
            '"₱1,250.50",Within,Acme Trading,Delivered'
        )

        response = _upload(client, content)

        assert response.status_code == 200
        assert response.json() == {"ok": True, "inserted": 1}
        rows = fetch_rows()
        assert len(rows) == 1
        assert rows[0]["iar_amount"] == Decimal("1250.50")
        assert rows[0]["particulars"] == "Bond paper, A4"
        assert rows[0]["date_of_delivery"] == date(2025, 1, 15)

    def test_blank_amount_inserted_as_null(self, client, fetch_rows):
        response = _upload(client, _csv("PO-1,,,,IAR-1,,,,,"))

        assert response.status_code == 200
        assert response.json()["inserted"] == 1
        row = fetch_rows()[0]
        assert row["iar_amount"] is None
        assert row["date_of_delivery"] is None
        assert row["prepared_by"] == ""

    def test_header_only_rejected(self, client, fetch_rows):
        response = _upload(client, _csv())
        assert response.status_code == 400
        assert response.json() == {"error": "CSV has no rows"}
        assert fetch_rows() == []

    def test_no_file(self, client):
        response = client.post("/api/upload-iar")
        assert response.status_code == 400
        assert response.json() == {"error": "No file uploaded"}

    def test_invalid_date_inserts_nothing(self, client, fetch_rows):
        content = _csv(
            "PO-1,2025-01-15,,,IAR-1,,100,,,",
            "PO-2,someday,,,IAR-2,,200,,,",
        )

        response = _upload(client, content)

        assert response.status_code == 500
        assert "Row 2" in response.json()["error"]
        assert fetch_rows() == []

    def test_unreachable_database(self, unreachable_client):
        response = _upload(unreachable_client, _csv("PO-1,,,,IAR-1,,,,,"))
        assert response.status_code == 500
        assert response.json()["error"]

    def test_too_large(self, monkeypatch, db_manager):
        monkeypatch.setenv("MAX_UPLOAD_SIZE", "16")
        get_settings.cache_clear()
        app = create_application(get_settings())
        app.dependency_overrides[get_database_manager] = lambda: db_manager

        with TestClient(app) as client:
            response = _upload(client, _csv("PO-1,,,,IAR-1,,,,,"))

        assert response.status_code == 413
        assert "too large" in response.json()["error"]

    def test_very_long_particulars(self, client, fetch_rows):
        particulars = "Supplies " * 25_000
        content = _csv(f'PO-1,,,,IAR-1,"{particulars}",100,,,')

        response = _upload(client, content)

        assert response.status_code == 200
        assert response.json()["inserted"] == 1
        assert fetch_rows()[0]["particulars"] == particulars.strip()

    def test_quoted_value_after_space_stays_in_its_column(self, client, fetch_rows):
        response = _upload(client, _csv('PO-1,,,J. Cruz,IAR-1, "Bond paper, A4",100,,Acme,'))

        assert response.status_code == 200
        row = fetch_rows()[0]
        assert row["particulars"] == "Bond paper, A4"
        assert row["iar_amount"] == Decimal("100")
        assert row["supplier_name"] == "Acme"

    def test_multiple_rows_one_batch(self, client, fetch_rows):
        lines = [f"PO-{i},,,,IAR-{i},,{i}.25,,," for i in range(1, 51)]
        response = _upload(client, _csv(*lines))
        assert response.json() == {"ok": True, "inserted": 50}
        assert len(fetch_rows()) == 50


class TestPreviewCsv:
    def test_preview(self, client, fetch_rows):
        content = b"\xef\xbb\xbfpurchase_order_no,,iar_amount\r\nPO-1,x,\"1,000\"\r\n\r\nPO-2\r\n"

        response = client.post("/api/preview-csv", files={"file": ("iar.csv", content, "text/csv")})

        assert response.status_code == 200
        assert response.json() == {
            "file_name": "iar.csv",
            "headers": ["purchase_order_no", "column_2", "iar_amount"],
            "rows": [
                {"purchase_order_no": "PO-1", "column_2": "x", "iar_amount": "1,000"},
                {"purchase_order_no": "PO-2", "column_2": "", "iar_amount": ""},
            ],
            "total_rows": 2,
        }
        assert fetch_rows() == []

    def test_very_long_cell(self, client):
        particulars = "x" * 200_000
        content = f"iar_no,particulars\nIAR-1,{particulars}\n".encode("utf-8")

        response = client.post("/api/preview-csv", files={"file": ("iar.csv", content, "text/csv")})

        assert response.status_code == 200
        assert response.json()["rows"][0]["particulars"] == particulars

    def test_empty_file(self, client):
        response = client.post("/api/preview-csv", files={"file": ("empty.csv", b"", "text/csv")})
        assert response.status_code == 200
        assert response.json()["headers"] == []
        assert response.json()["total_rows"] == 0


class TestPages:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_index(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "iar_2025_monitoring" in response.text
        assert "/static/uploader.js" in response.text

    def test_static_script(self, client):
        response = client.get("/static/uploader.js")
        assert response.status_code == 200
        assert "/api/upload-iar" in response.text

    def test_script_ignores_stale_preview_responses(self, client):
        script = client.get("/static/uploader.js").text
        assert "const requestId = ++state.previewRequest;" in script
        assert "if (requestId !== state.previewRequest) {" in script

    def test_request_id_header(self, client):
        response = client.get("/api/db-status")
        assert response.headers["X-Request-ID"]

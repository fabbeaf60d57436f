"""
API tests for the conversion, PDF and email endpoints.

Requests go through the FastAPI app with TestClient. The PDF renderer is
mocked; .docx and image uploads are real files built in memory.
"""

import io

import pytest
from unittest.mock import AsyncMock, patch

from docx import Document
from fastapi.testclient import TestClient
from PIL import Image

from docx2email.services.pdf_renderer import PdfRenderError

DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


@pytest.fixture()
def client():
    from docx2email.main import app
    return TestClient(app)


def _docx_bytes(*paragraphs) -> bytes:
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


def _png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), (10, 20, 30)).save(buf, format="PNG")
    return buf.getvalue()


# ---------------------------------------------------------------------------
# Root and health
# ---------------------------------------------------------------------------

class TestRoot:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["message"] == "Docx2Email API"

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


# ---------------------------------------------------------------------------
# POST /api/convert
# ---------------------------------------------------------------------------

class TestConvertEndpoint:
    """Upload a .docx, get HTML plus messages."""

    def test_converts_docx(self, client):
        response = client.post(
            "/api/convert",
            files={"file": ("report.docx", _docx_bytes("Hello", "World"), DOCX_TYPE)},
        )
        assert response.status_code == 200
        assert response.json() == {"html": "<p>Hello</p><p>World</p>", "messages": []}

    def test_no_file(self, client):
        response = client.post("/api/convert")
        assert response.status_code == 400
        assert response.json()["detail"] == "No file uploaded"

    def test_wrong_extension(self, client):
        response = client.post(
            "/api/convert",
            files={"file": ("report.doc", b"old binary format", "application/msword")},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Please upload a valid .docx file"

    def test_too_large(self, client):
        with patch("docx2email.routers.convert.MAX_UPLOAD_BYTES", 10):
            response = client.post(
                "/api/convert",
                files={"file": ("report.docx", _docx_bytes("Hello"), DOCX_TYPE)},
            )
        assert response.status_code == 400
        assert response.json()["detail"] == "File too large"

    def test_corrupt_docx(self, client):
        response = client.post(
            "/api/convert",
            files={"file": ("report.docx", b"not really a docx", DOCX_TYPE)},
        )
        assert response.status_code == 500
        assert response.json()["detail"] == "Conversion failed"


# ---------------------------------------------------------------------------
# POST /api/pdf
# ---------------------------------------------------------------------------

class TestPdfEndpoint:
    """HTML to PDF via the (mocked) renderer."""

    def test_returns_pdf(self, client):
        with patch(
            "docx2email.routers.pdf.render_pdf",
            new=AsyncMock(return_value=b"%PDF-1.4 data"),
        ) as mock_render:
            response = client.post("/api/pdf", json={"html": "<p>Hi</p>"})

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content == b"%PDF-1.4 data"
        mock_render.assert_awaited_once_with("<p>Hi</p>")

    @pytest.mark.parametrize("payload", [{}, {"html": ""}, {"html": None}])
    def test_missing_html(self, client, payload):
        response = client.post("/api/pdf", json=payload)
        assert response.status_code == 400
        assert response.json()["detail"] == "No HTML content provided"

    def test_render_failure(self, client):
        with patch(
            "docx2email.routers.pdf.render_pdf",
            new=AsyncMock(side_effect=PdfRenderError()),
        ):
            response = client.post("/api/pdf", json={"html": "<p>Hi</p>"})

        assert response.status_code == 500
        assert response.json()["detail"] == "PDF generation failed"


# ---------------------------------------------------------------------------
# /api/email/*
# ---------------------------------------------------------------------------

class TestExportEndpoint:
    """Full document download."""

    def test_responsive_export(self, client):
        response = client.post(
            "/api/email/export",
            json={"body_html": "<p>Hi</p>", "file_name": "report.docx"},
        )
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert response.headers["content-disposition"] == 'attachment; filename="report.html"'
        assert '<div class="email-content">' in response.text

    def test_legacy_export(self, client):
        response = client.post(
            "/api/email/export",
            json={"body_html": "<p>Hi</p>", "file_name": "report.docx", "legacy_mode": True},
        )
        assert response.headers["content-disposition"] == 'attachment; filename="report-outlook.html"'
        assert "<!--[if mso]>" in response.text

    def test_default_filename(self, client):
        response = client.post("/api/email/export", json={"body_html": "<p>Hi</p>"})
        assert response.headers["content-disposition"] == 'attachment; filename="email-template.html"'

    def test_non_ascii_filename(self, client):
        response = client.post(
            "/api/email/export",
            json={"body_html": "<p>Hi</p>", "file_name": "Bản tin.docx"},
        )
        assert response.status_code == 200
        assert response.headers["content-disposition"] == (
            "attachment; filename*=UTF-8''B%E1%BA%A3n%20tin.html"
        )

    def test_width_is_clamped(self, client):
        response = client.post(
            "/api/email/export",
            json={"body_html": "<p>Hi</p>", "max_width": 5000, "legacy_mode": True},
        )
        assert 'width="1200"' in response.text

    def test_blank_font_uses_default(self, client):
        response = client.post(
            "/api/email/export",
            json={"body_html": "<p>Hi</p>", "font_family": "  "},
        )
        assert "font-family: Arial, sans-serif" in response.text


class TestImageEndpoint:
    """Header/footer image upload."""

    def test_png_to_data_uri(self, client):
        response = client.post(
            "/api/email/images",
            files={"file": ("banner.png", _png_bytes(), "image/png")},
        )
        assert response.status_code == 200
        assert response.json()["data_uri"].startswith("data:image/png;base64,")

    def test_non_image_type(self, client):
        response = client.post(
            "/api/email/images",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Please upload a valid image file"

    def test_unreadable_image(self, client):
        response = client.post(
            "/api/email/images",
            files={"file": ("broken.png", b"not a png", "image/png")},
        )
        assert response.status_code == 422
        assert response.json()["detail"] == "Failed to load image."


class TestOptionsEndpoint:

    def test_options(self, client):
        body = client.get("/api/email/options").json()
        assert body["min_width"] == 300
        assert body["max_width"] == 1200
        assert {"value": "Arial, Helvetica, sans-serif", "label": "Arial"} in body["fonts"]

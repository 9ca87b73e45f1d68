"""Tests for upload format detection and upstream conversion failures."""

import pytest
from fastapi.testclient import TestClient

from resume_builder.core.config import Settings
from resume_builder.core.document_text import detect_format, extract_text
from resume_builder.core.errors import DocumentExtractionError, UnsupportedFormatError
from resume_builder.main import app

client = TestClient(app)


class TestDetectFormat:

    def test_by_extension(self):
        assert detect_format("Resume.PDF", "") == "pdf"
        assert detect_format("cv.docx", "application/octet-stream") == "docx"
        assert detect_format("notes.md", "") == "text"

    def test_by_content_type(self):
        assert detect_format("", "application/pdf") == "pdf"
        assert detect_format("upload", "text/plain") == "text"

    def test_unsupported(self):
        with pytest.raises(UnsupportedFormatError):
            detect_format("photo.png", "image/png")


def test_text_decoding_replaces_bad_bytes():
    fmt, text = extract_text("Jane Doe\n\xff".encode("latin-1"), "resume.txt", "text/plain")
    assert fmt == "text"
    assert text.startswith("Jane Doe\n")


def test_bad_pdf_raises_extraction_error():
    with pytest.raises(DocumentExtractionError) as exc:
        extract_text(b"this is not a pdf", "resume.pdf", "application/pdf")
    assert exc.value.format == "pdf"


def test_empty_upload():
    r = client.post("/parse", files={"file": ("resume.txt", b"", "text/plain")})
    assert r.status_code == 400


def test_unsupported_upload():
    r = client.post("/parse", files={"file": ("photo.png", b"\x89PNG", "image/png")})
    assert r.status_code == 415


def test_bad_pdf_upload():
    r = client.post("/parse", files={"file": ("resume.pdf", b"this is not a pdf", "application/pdf")})
    assert r.status_code == 422
    assert r.json()["detail"].startswith("Failed to parse PDF file")


def test_oversized_upload(monkeypatch):
    monkeypatch.setattr(
        "resume_builder.api.routes.parse.get_settings",
        lambda: Settings(max_upload_bytes=8),
    )
    r = client.post("/parse", files={"file": ("resume.txt", b"Jane Doe\nlong enough", "text/plain")})
    assert r.status_code == 413

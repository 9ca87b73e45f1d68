from io import BytesIO
from docx import Document
from fastapi.testclient import TestClient

from resume_builder.core.docx_extractor import extract_docx_paragraphs, extract_docx_text
from resume_builder.main import app

client = TestClient(app)

DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _docx_bytes(*paragraphs: str) -> bytes:
    doc = Document()
    for p in paragraphs:
        doc.add_paragraph(p)
    buf = BytesIO()
    doc.save(buf)
    return buf.getvalue()


def test_docx_text_skips_empty_paragraphs():
    raw = _docx_bytes("Jane Doe", "", "   ", "jane.doe@example.com")
    assert [t for _, t in extract_docx_paragraphs(raw)] == ["Jane Doe", "jane.doe@example.com"]
    assert extract_docx_text(raw) == "Jane Doe\njane.doe@example.com"


def test_parse_docx_extracts_record():
    raw = _docx_bytes(
        "Jane Doe",
        "jane.doe@example.com",
        "EXPERIENCE",
        "Engineer, Acme Corp, NYC | 2022 - Present",
        "• Built the thing",
    )
    files = {"file": ("resume.docx", raw, DOCX_TYPE)}
    r = client.post("/parse", files=files)
    assert r.status_code == 200
    data = r.json()

    assert data["source"] == "docx"
    assert data["record"]["personal"]["email"] == "jane.doe@example.com"
    assert data["record"]["experience"][0]["company"] == "Acme Corp"
    assert data["record"]["experience"][0]["bullets"] == ["Built the thing"]


def test_corrupt_docx_is_rejected():
    files = {"file": ("resume.docx", b"definitely not a zip archive", DOCX_TYPE)}
    r = client.post("/parse", files=files)
    assert r.status_code == 422
    assert r.json()["detail"].startswith("Failed to parse DOCX file")

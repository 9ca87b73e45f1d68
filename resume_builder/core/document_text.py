"""
Upstream document-to-text conversion.

Picks a converter from the upload's filename / content type and returns plain
text for the structure extractor. Conversion failures surface here, before
the extractor is ever invoked.
"""

from typing import Tuple
import logging

from resume_builder.core.docx_extractor import extract_docx_text
from resume_builder.core.errors import UnsupportedFormatError
from resume_builder.core.pdf_extractor import extract_pdf_text
from resume_builder.core.schemas import DocumentSource

logger = logging.getLogger(__name__)

DOCX_CONTENT_TYPES = {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
PDF_CONTENT_TYPES = {"application/pdf"}
TEXT_CONTENT_TYPES = {"text/plain", "text/markdown"}
TEXT_SUFFIXES = (".txt", ".md")


def detect_format(filename: str, content_type: str) -> DocumentSource:
    filename = (filename or "").lower()
    content_type = (content_type or "").lower()

    if filename.endswith(".docx") or content_type in DOCX_CONTENT_TYPES:
        return "docx"
    if filename.endswith(".pdf") or content_type in PDF_CONTENT_TYPES:
        return "pdf"
    if filename.endswith(TEXT_SUFFIXES) or content_type in TEXT_CONTENT_TYPES:
        return "text"

    raise UnsupportedFormatError(f"Unsupported content type: {content_type or filename or 'unknown'}")


def extract_text(raw: bytes, filename: str, content_type: str) -> Tuple[DocumentSource, str]:
    """Returns (format, text). Raises DocumentExtractionError / UnsupportedFormatError."""
    fmt = detect_format(filename, content_type)
    logger.debug(f"Extracting text from {filename or '<upload>'} as {fmt} ({len(raw)} bytes)")

    if fmt == "docx":
        return fmt, extract_docx_text(raw)
    if fmt == "pdf":
        return fmt, extract_pdf_text(raw)
    return fmt, raw.decode("utf-8-sig", errors="replace")

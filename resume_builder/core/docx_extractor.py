from io import BytesIO
from typing import List, Tuple
import logging

from docx import Document

from resume_builder.core.errors import DocumentExtractionError

logger = logging.getLogger(__name__)


def extract_docx_paragraphs(docx_bytes: bytes) -> List[Tuple[int, str]]:
    """
    Deterministically extract non-empty paragraph text from a DOCX.
    Returns list of (paragraph_index, text).
    """
    try:
        doc = Document(BytesIO(docx_bytes))
    except Exception as e:
        logger.warning(f"DOCX text extraction failed: {e}")
        raise DocumentExtractionError("docx", f"Failed to parse DOCX file: {e}") from e

    out: List[Tuple[int, str]] = []
    for i, p in enumerate(doc.paragraphs):
        t = (p.text or "").strip()
        if t:
            out.append((i, t))
    return out


def extract_docx_text(docx_bytes: bytes) -> str:
    return "\n".join(text for _, text in extract_docx_paragraphs(docx_bytes))

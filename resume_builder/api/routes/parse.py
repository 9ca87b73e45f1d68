from typing import Optional
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from resume_builder.api.dependencies import get_variant_store
from resume_builder.core.config import get_settings
from resume_builder.core.document_text import extract_text
from resume_builder.core.errors import (
    DocumentExtractionError,
    InvalidVariantNameError,
    UnsupportedFormatError,
)
from resume_builder.core.schemas import ParseResponse, ParseTextRequest
from resume_builder.core.text_parser import parse_text_to_response
from resume_builder.core.variant_store import VariantStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["parse"])


def _store_if_requested(resp: ParseResponse, variant: Optional[str], store: VariantStore) -> ParseResponse:
    if not variant:
        return resp
    try:
        resp.variant = store.upsert(variant, resp.record)
    except InvalidVariantNameError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return resp


@router.post(
    "/parse",
    response_model=ParseResponse,
    summary="Parse Resume",
    description="Extract a structured resume record from an uploaded DOCX, PDF, or TXT file. The result is a best-effort draft meant for human review.",
    responses={
        200: {
            "description": "Successfully parsed resume",
            "content": {
                "application/json": {
                    "example": {
                        "record": {
                            "personal": {"name": "Jane Doe", "email": "jane@example.com", "linkedin": "", "github": "", "portfolio": ""},
                            "education": [{"institution": "MIT University", "degree": "B.S. Computer Science", "location": "", "period": "2018 - 2022"}],
                            "skills": {"programmingLanguages": "Python, Go", "mlSkills": "", "cloudTech": "", "frameworks": ""},
                            "experience": [
                                {
                                    "title": "Engineer",
                                    "company": "Acme Corp",
                                    "location": "NYC",
                                    "period": "2022 - Present",
                                    "bullets": ["Built the thing"]
                                }
                            ],
                            "projects": [],
                            "achievements": []
                        },
                        "source": "text",
                        "line_count": 9,
                        "sections_found": ["education", "experience"],
                        "warnings": [],
                        "variant": ""
                    }
                }
            }
        },
        400: {"description": "Empty file uploaded"},
        413: {"description": "File too large"},
        415: {"description": "Unsupported file format"},
        422: {"description": "File could not be converted to text"}
    }
)
async def parse_resume(
    file: UploadFile = File(..., description="Resume file (DOCX, PDF, or TXT format)"),
    variant: Optional[str] = Form(None, description="Store the result under this variant name"),
    store: VariantStore = Depends(get_variant_store),
):
    """
    Parse a resume file into a structured record.

    **Supported formats:**
    - DOCX (.docx)
    - PDF (.pdf) - Text-layer extraction only, OCR not supported
    - TXT (.txt, .md)

    **Returns:**
    - **record**: personal, education, skills, experience, projects, achievements
    - **sections_found**: section headers recognized in the text
    - **warnings**: fields the heuristics could not find
    """
    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")

    max_bytes = get_settings().max_upload_bytes
    if len(raw) > max_bytes:
        raise HTTPException(status_code=413, detail=f"File exceeds {max_bytes} bytes.")

    try:
        fmt, text = extract_text(raw, file.filename or "", file.content_type or "")
    except UnsupportedFormatError as e:
        raise HTTPException(status_code=415, detail=str(e))
    except DocumentExtractionError as e:
        raise HTTPException(status_code=422, detail=str(e))

    if fmt == "pdf" and not text.strip():
        raise HTTPException(
            status_code=422,
            detail="PDF appears to have no extractable text. OCR is not supported."
        )

    resp = parse_text_to_response(text, source=fmt)
    logger.info(f"Parsed {file.filename or '<upload>'} ({fmt}): {resp.line_count} lines, sections={resp.sections_found}")
    return _store_if_requested(resp, variant, store)


@router.post(
    "/parse/text",
    response_model=ParseResponse,
    summary="Parse Resume Text",
    description="Extract a structured resume record from already-extracted plain text.",
)
def parse_resume_text(
    body: ParseTextRequest,
    variant: Optional[str] = None,
    store: VariantStore = Depends(get_variant_store),
):
    resp = parse_text_to_response(body.text, source="text")
    return _store_if_requested(resp, variant, store)

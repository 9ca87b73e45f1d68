import logging
from typing import List

from resume_builder.core.line_parser import (
    extract_achievements,
    extract_education,
    extract_experience,
    extract_personal,
    extract_projects,
    extract_skills,
)
from resume_builder.core.schemas import DocumentSource, Line, ParseResponse, ResumeRecord
from resume_builder.core.sections import sections_present
from resume_builder.core.text_normalization import line_texts, normalize_lines

logger = logging.getLogger(__name__)


def assemble_record(lines: List[Line]) -> ResumeRecord:
    """
    Run every section scanner over the same line sequence. Each scanner finds
    its own section boundaries, so the order they run in does not matter.
    """
    return ResumeRecord(
        personal=extract_personal(lines),
        education=extract_education(lines),
        skills=extract_skills(lines),
        experience=extract_experience(lines),
        projects=extract_projects(lines),
        achievements=extract_achievements(lines),
    )


def extract_resume_record(text: str) -> ResumeRecord:
    """Plain text in, fully populated record out. Never raises on any string."""
    return assemble_record(normalize_lines(text or ""))


def parse_text_to_response(text: str, source: DocumentSource = "text") -> ParseResponse:
    """
    Parse extracted document text and wrap the record with diagnostics.
    TXT, DOCX and PDF uploads all end up here once converted to text.
    """
    lines = normalize_lines(text or "")
    record = assemble_record(lines)
    found = [s.value for s in sections_present(line_texts(lines))]

    warnings: List[str] = []
    if not lines:
        warnings.append("Document has no extractable text.")
    else:
        if not found:
            warnings.append("No recognizable section headers found.")
        if not record.personal.name:
            warnings.append("Could not extract candidate name. Review needed.")
        if not record.personal.email:
            warnings.append("Could not extract email. Review needed.")

    logger.debug(
        f"Parsed {len(lines)} lines from {source}: sections={found}, "
        f"education={len(record.education)}, experience={len(record.experience)}, "
        f"projects={len(record.projects)}, achievements={len(record.achievements)}"
    )

    return ParseResponse(
        record=record,
        source=source,
        line_count=len(lines),
        sections_found=found,
        warnings=warnings,
    )

"""
Line normalization for extracted document text.

Every heuristic downstream operates on the output of normalize_lines(): an
ordered sequence of trimmed, non-empty lines. Positions are indices into that
sequence, not into the raw text.
"""

import re
from typing import List

from resume_builder.core.schemas import Line


# ============================================================================
# Line splitting
# ============================================================================

LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def split_raw_lines(text: str) -> List[str]:
    """
    Split on any line break convention (PDF text from Windows tools often
    carries bare \\r).
    """
    if not text:
        return []
    return LINE_BREAK_RE.split(text)


def normalize_lines(text: str) -> List[Line]:
    """
    Trim each line and drop the ones that end up empty.

    Examples:
    - "  Jane Doe \\n\\n jane@example.com" -> [Line(0, "Jane Doe"), Line(1, "jane@example.com")]
    - "" -> []
    """
    out: List[Line] = []
    for raw in split_raw_lines(text):
        t = raw.strip()
        if t:
            out.append(Line(index=len(out), text=t))
    return out


def line_texts(lines: List[Line]) -> List[str]:
    return [ln.text for ln in lines]

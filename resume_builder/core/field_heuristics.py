"""
Line-level field heuristics.

Stateless predicates and extractors over a single (already trimmed) line.
The section scanners in line_parser combine these; nothing here knows which
section a line belongs to.
"""

import re
from typing import Dict, Optional, Tuple


EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
URL_RE = re.compile(r"https?://\S+")

YEAR_RE = re.compile(r"[0-9]{4}")
MONTH_RE = re.compile(r"(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)", re.IGNORECASE)
ONGOING_RE = re.compile(r"Present|Current", re.IGNORECASE)

# Bullet markers seen in DOCX/PDF exports: glyph + space, or "1. "
BULLET_GLYPH_RE = re.compile(r"^[•\-*▪▫]\s")
NUMBERED_RE = re.compile(r"^[0-9]+\.\s")
BULLET_GLYPH_STRIP_RE = re.compile(r"^[•\-*▪▫]\s*")
NUMBERED_STRIP_RE = re.compile(r"^[0-9]+\.\s*")

# Single-line job header separators: "Title, Company, Location | Period" or "Title • Company • ..."
JOB_LINE_SPLIT_RE = re.compile(r"[,|•]")

UPPER_START_RE = re.compile(r"^[A-Z]")


def find_email(line: str) -> Optional[str]:
    m = EMAIL_RE.search(line)
    return m.group(0) if m else None


def find_url(line: str) -> Optional[str]:
    m = URL_RE.search(line)
    return m.group(0) if m else None


def starts_uppercase(line: str) -> bool:
    return bool(UPPER_START_RE.match(line))


def looks_like_name(line: str) -> bool:
    """
    Candidate-name heuristic: 2-4 words, capitalized, no email or link.

    Examples:
    - "Jane Doe" -> True
    - "Mary Ann van Dyke" -> True
    - "jane doe" -> False
    - "Jane Doe jane@example.com" -> False
    """
    words = line.split()
    return (
        2 <= len(words) <= 4
        and starts_uppercase(line)
        and "@" not in line
        and "http" not in line
    )


def looks_like_period(line: str) -> bool:
    """
    Date-ish text: "Jan 2020 - Dec 2022", "2020-2022", "Present".

    Month abbreviations match anywhere in the line, so words like "Mayor"
    also count; callers only use this as one signal among several.
    """
    return bool(
        YEAR_RE.search(line)
        or MONTH_RE.search(line)
        or ONGOING_RE.search(line)
    )


def looks_like_bullet(line: str) -> bool:
    return bool(
        BULLET_GLYPH_RE.match(line)
        or NUMBERED_RE.match(line)
        or line.strip().startswith("-")
    )


def clean_bullet(line: str) -> str:
    """
    Strip one leading bullet glyph, then a numbered-list marker.

    Examples:
    - "• Built the thing" -> "Built the thing"
    - "3. Shipped it" -> "Shipped it"
    - "-Tight dash" -> "Tight dash"
    """
    t = BULLET_GLYPH_STRIP_RE.sub("", line)
    t = NUMBERED_STRIP_RE.sub("", t)
    return t.strip()


def looks_like_job_title(line: str) -> bool:
    """
    A single line packing title/company/location/period:
    has a comma or bullet separator AND (has a date or is long).
    """
    return ("," in line or "•" in line) and (looks_like_period(line) or len(line) > 30)


def parse_job_line(line: str) -> Dict[str, str]:
    """
    Parse a one-line job header into title, company, location, period.

    Examples:
      "Engineer, Acme Corp, NYC | 2022 - Present"
        -> title="Engineer", company="Acme Corp", location="NYC", period="2022 - Present"
      "Analyst • Initech • Austin"
        -> title="Analyst", company="Initech", location="Austin", period=""
      "Consultant, Globex | 2019"
        -> title="Consultant", company="Globex", location="", period="2019"
    """
    result = {"title": "", "company": "", "location": "", "period": ""}
    parts = [p.strip() for p in JOB_LINE_SPLIT_RE.split(line)]
    parts = [p for p in parts if p]

    if len(parts) < 2:
        return result

    result["title"] = parts[0]
    result["company"] = parts[1]

    # Trailing token is usually the period
    if len(parts) >= 3 and looks_like_period(parts[-1]):
        result["period"] = parts[-1]
        if len(parts) >= 4:
            result["location"] = parts[-2]
    elif len(parts) >= 3:
        result["location"] = parts[2]

    if len(parts) >= 4 and looks_like_period(parts[3]):
        result["period"] = parts[3]

    return result


def split_label_value(line: str) -> Tuple[str, str]:
    """
    "Label: value" splitter. The value stops at a second colon, if any.

    Examples:
    - "Cloud: AWS, GCP" -> ("Cloud", "AWS, GCP")
    - "No colon here" -> ("No colon here", "")
    """
    pieces = line.split(":")
    if len(pieces) < 2:
        return line.strip(), ""
    return pieces[0].strip(), pieces[1].strip()


def skill_list(line: str) -> str:
    """Skills text after the colon if there is one, else the whole line."""
    if ":" in line:
        return split_label_value(line)[1]
    return line.strip()

"""
Section vocabulary and header classification.

Keywords are case-sensitive substrings: "Education" and "EDUCATION" both open
the education block, "education" in running prose does not.
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple


class Section(str, Enum):
    EDUCATION = "education"
    SKILLS = "skills"
    EXPERIENCE = "experience"
    PROJECTS = "projects"
    ACHIEVEMENTS = "achievements"


SECTION_KEYWORDS: Dict[Section, Tuple[str, ...]] = {
    Section.EDUCATION: ("EDUCATION", "Education", "EDUCATIONAL BACKGROUND"),
    Section.SKILLS: ("SKILLS", "Skills", "TECHNICAL SKILLS", "CERTIFICATIONS"),
    Section.EXPERIENCE: ("EXPERIENCE", "Experience", "WORK EXPERIENCE", "EMPLOYMENT"),
    Section.PROJECTS: ("PROJECTS", "Projects", "PROJECT"),
    Section.ACHIEVEMENTS: ("ACHIEVEMENT", "Achievement", "AWARDS", "PUBLICATIONS", "Publications"),
}

# Matched against the upper-cased line when deciding whether a line ends a block
HEADER_KEYWORDS = ("EDUCATION", "EXPERIENCE", "PROJECTS", "SKILLS", "ACHIEVEMENT")

MAX_HEADER_LENGTH = 30


def opens_section(line: str, section: Section) -> bool:
    return any(k in line for k in SECTION_KEYWORDS[section])


def is_section_header(line: str) -> bool:
    """
    Short line that is ALL CAPS or names a known section.

    str.isupper() needs at least one cased character, so a bare year range
    like "2018 - 2022" is not a header.

    Examples:
    - "EDUCATION" -> True
    - "Work Experience" -> True
    - "HONORS" -> True
    - "2018 - 2022" -> False
    - "Engineer, Acme Corp, NYC | 2022 - Present" -> False (too long)
    """
    if len(line) >= MAX_HEADER_LENGTH:
        return False
    upper = line.upper()
    return line.isupper() or any(k in upper for k in HEADER_KEYWORDS)


def ends_section(line: str, section: Section) -> bool:
    """A header for some other block terminates `section`."""
    return is_section_header(line) and not opens_section(line, section)


def classify_header(line: str) -> Optional[Section]:
    """First section whose keywords the line contains, or None."""
    for section in Section:
        if opens_section(line, section):
            return section
    return None


def sections_present(lines: List[str]) -> List[Section]:
    """Sections named by some line in the text, in vocabulary order."""
    found = {classify_header(ln) for ln in lines}
    return [s for s in Section if s in found]

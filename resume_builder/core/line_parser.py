from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple, Union
import re
import logging

from resume_builder.core.field_heuristics import (
    clean_bullet,
    find_email,
    find_url,
    looks_like_bullet,
    looks_like_job_title,
    looks_like_name,
    looks_like_period,
    parse_job_line,
    skill_list,
    split_label_value,
    starts_uppercase,
)
from resume_builder.core.schemas import (
    AchievementEntry,
    EducationEntry,
    ExperienceEntry,
    Line,
    PersonalInfo,
    ProjectEntry,
    SkillsProfile,
)
from resume_builder.core.sections import Section, ends_section, opens_section


logger = logging.getLogger(__name__)


INSTITUTION_RE = re.compile(r"\b(University|College|Institute|School|Univ\.?)\b", re.IGNORECASE)

# Skill categories in priority order: first category whose keyword appears wins the line
SKILL_CATEGORIES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("programming_languages", ("Programming", "Languages", "Python", "Java", "JavaScript", "C++", "C#")),
    ("ml_skills", ("Machine Learning", "ML", "Data Science", "Deep Learning", "NLP", "Computer Vision")),
    ("cloud_tech", ("AWS", "Azure", "GCP", "Cloud", "Docker", "Kubernetes")),
    ("frameworks", ("Framework", "TensorFlow", "PyTorch", "React", "Angular")),
)

# Education field limits
DEGREE_MAX_LEN = 80
LOCATION_MAX_LEN = 50

# Unmarked experience lines in this length window are kept as continuation bullets
CONTINUATION_MIN_LEN = 20
CONTINUATION_MAX_LEN = 200

# Project titles: standalone capitalized lines in this (exclusive) length window
PROJECT_TITLE_MIN_LEN = 10
PROJECT_TITLE_MAX_LEN = 80

ACHIEVEMENT_MIN_LEN = 10


Entry = Union[EducationEntry, ExperienceEntry, ProjectEntry]


class Phase(str, Enum):
    OUTSIDE = "outside"
    INSIDE = "inside"
    DONE = "done"


@dataclass
class ScanState:
    """
    Per-extractor scan state. One instance per scan; never shared.

    `entry` is the open (uncommitted) entry, `bullets` the lines collected for
    it so far, `committed` the finished entries in source order.
    """
    section: Section
    phase: Phase = Phase.OUTSIDE
    entry: Optional[Entry] = None
    bullets: List[str] = field(default_factory=list)
    committed: List[Entry] = field(default_factory=list)

    def open_entry(self, entry: Entry) -> None:
        self.commit()
        self.entry = entry
        self.bullets = []

    def add_bullet(self, text: str) -> None:
        if self.entry is None or not text:
            return
        self.bullets.append(text)

    def commit(self) -> None:
        """Append the open entry (with its bullets) exactly once."""
        if self.entry is None:
            return
        if isinstance(self.entry, (ExperienceEntry, ProjectEntry)):
            self.entry.bullets = list(self.bullets)
        self.committed.append(self.entry)
        logger.debug(f"{self.section.value}: committed entry #{len(self.committed)}")
        self.entry = None
        self.bullets = []


LineHandler = Callable[[ScanState, str], None]


def scan_section(lines: List[Line], section: Section, handle: LineHandler) -> ScanState:
    """
    Drive one linear pass over `lines` for a single section.

    - OUTSIDE: a line carrying one of the section's keywords opens the block
      (the header itself is consumed).
    - INSIDE: a header for any other block ends it; everything else goes to
      `handle`.
    - The first block only: once DONE the scan stops, even if the section's
      keyword shows up again later.

    The open entry is committed when the block ends or input runs out.
    """
    state = ScanState(section=section)

    for line in lines:
        text = line.text

        if opens_section(text, section):
            if state.phase == Phase.OUTSIDE:
                logger.debug(f"{section.value}: block opens at line {line.index}: '{text}'")
            state.phase = Phase.INSIDE
            continue

        if state.phase != Phase.INSIDE:
            continue

        if ends_section(text, section):
            logger.debug(f"{section.value}: block ends at line {line.index}: '{text}'")
            state.phase = Phase.DONE
            break

        handle(state, text)

    state.commit()
    return state


# ===== PERSONAL =====

def extract_personal(lines: List[Line]) -> PersonalInfo:
    """
    Contact block from the whole document, regardless of section.
    First match wins for every field.
    """
    personal = PersonalInfo()

    for line in lines:
        text = line.text

        if not personal.name and looks_like_name(text):
            personal.name = text

        if not personal.email:
            email = find_email(text)
            if email:
                personal.email = email

        url = find_url(text)
        if url is None:
            continue

        if "linkedin.com" in text and not personal.linkedin:
            personal.linkedin = url
        if "github.com" in text and not personal.github:
            personal.github = url
        if not personal.portfolio and (
            "portfolio" in text
            or "website" in text
            or ("http" in text and "linkedin" not in text and "github" not in text)
        ):
            personal.portfolio = url

    return personal


# ===== EDUCATION =====

def _education_line(state: ScanState, text: str) -> None:
    if INSTITUTION_RE.search(text):
        state.open_entry(EducationEntry(institution=text))
        return

    entry = state.entry
    if entry is None:
        return

    # First empty slot wins; filled slots are never overwritten
    if not entry.degree and len(text) < DEGREE_MAX_LEN:
        entry.degree = text
    elif not entry.period and looks_like_period(text):
        entry.period = text
    elif not entry.location and len(text) < LOCATION_MAX_LEN:
        entry.location = text


def extract_education(lines: List[Line]) -> List[EducationEntry]:
    return scan_section(lines, Section.EDUCATION, _education_line).committed


# ===== SKILLS =====

def _skill_category(text: str) -> Optional[str]:
    for attr, keywords in SKILL_CATEGORIES:
        if any(k in text for k in keywords):
            return attr
    return None


def extract_skills(lines: List[Line]) -> SkillsProfile:
    """
    Route each line of the skills block to one category. A later line for
    the same category overwrites the earlier value.
    """
    skills = SkillsProfile()

    def _skills_line(state: ScanState, text: str) -> None:
        attr = _skill_category(text)
        if attr is not None:
            setattr(skills, attr, skill_list(text))
            return

        if ":" in text:
            label, value = split_label_value(text)
            attr = _skill_category(label)
            if attr is not None:
                setattr(skills, attr, value)

    scan_section(lines, Section.SKILLS, _skills_line)
    return skills


# ===== EXPERIENCE =====

def _experience_line(state: ScanState, text: str) -> None:
    if looks_like_job_title(text):
        state.open_entry(ExperienceEntry(**parse_job_line(text)))
        return

    if state.entry is None:
        return

    if looks_like_bullet(text):
        state.add_bullet(clean_bullet(text))
    elif CONTINUATION_MIN_LEN < len(text) < CONTINUATION_MAX_LEN:
        # Bullet exported without a marker
        state.add_bullet(text)


def extract_experience(lines: List[Line]) -> List[ExperienceEntry]:
    return scan_section(lines, Section.EXPERIENCE, _experience_line).committed


# ===== PROJECTS =====

def _looks_like_project_title(text: str) -> bool:
    return (
        PROJECT_TITLE_MIN_LEN < len(text) < PROJECT_TITLE_MAX_LEN
        and starts_uppercase(text)
        and "•" not in text
        and "-" not in text
    )


def _project_line(state: ScanState, text: str) -> None:
    if _looks_like_project_title(text):
        state.open_entry(ProjectEntry(title=text))
    elif state.entry is not None and looks_like_bullet(text):
        state.add_bullet(clean_bullet(text))


def extract_projects(lines: List[Line]) -> List[ProjectEntry]:
    return scan_section(lines, Section.PROJECTS, _project_line).committed


# ===== ACHIEVEMENTS =====

def extract_achievements(lines: List[Line]) -> List[AchievementEntry]:
    achievements: List[AchievementEntry] = []

    def _achievement_line(state: ScanState, text: str) -> None:
        if looks_like_bullet(text) or len(text) > ACHIEVEMENT_MIN_LEN:
            cleaned = clean_bullet(text)
            if len(cleaned) > ACHIEVEMENT_MIN_LEN:
                achievements.append(AchievementEntry(text=cleaned))

    scan_section(lines, Section.ACHIEVEMENTS, _achievement_line)
    return achievements

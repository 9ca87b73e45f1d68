"""Tests for the per-section scanners and their scan state."""

import pytest

from resume_builder.core.line_parser import (
    Phase,
    ScanState,
    extract_achievements,
    extract_education,
    extract_experience,
    extract_personal,
    extract_projects,
    extract_skills,
    scan_section,
)
from resume_builder.core.schemas import (
    AchievementEntry,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    SkillsProfile,
)
from resume_builder.core.sections import Section
from resume_builder.core.text_normalization import normalize_lines


def lines_of(text: str):
    return normalize_lines(text)


# ===== scan state =====

class TestScanState:

    def test_open_entry_commits_previous(self):
        state = ScanState(section=Section.EXPERIENCE)
        state.open_entry(ExperienceEntry(title="First"))
        state.add_bullet("one")
        state.open_entry(ExperienceEntry(title="Second"))

        assert [e.title for e in state.committed] == ["First"]
        assert state.committed[0].bullets == ["one"]
        assert state.bullets == []

    def test_commit_is_idempotent(self):
        state = ScanState(section=Section.PROJECTS)
        state.open_entry(ProjectEntry(title="Tool"))
        state.commit()
        state.commit()
        assert len(state.committed) == 1
        assert state.entry is None

    def test_bullet_without_open_entry_is_dropped(self):
        state = ScanState(section=Section.EXPERIENCE)
        state.add_bullet("orphan")
        state.commit()
        assert state.committed == []
        assert state.bullets == []

    def test_empty_bullet_is_dropped(self):
        state = ScanState(section=Section.EXPERIENCE)
        state.open_entry(ExperienceEntry(title="Engineer"))
        state.add_bullet("")
        state.commit()
        assert state.committed[0].bullets == []


def test_scan_section_phases():
    seen = []
    state = scan_section(
        lines_of("intro\nPROJECTS\nalpha\nbeta\nSKILLS\ngamma"),
        Section.PROJECTS,
        lambda st, text: seen.append(text),
    )
    assert seen == ["alpha", "beta"]
    assert state.phase == Phase.DONE


def test_scan_section_runs_to_end_of_input():
    state = scan_section(lines_of("PROJECTS\nalpha"), Section.PROJECTS, lambda st, text: None)
    assert state.phase == Phase.INSIDE


# ===== personal =====

def test_personal_first_match_wins():
    lines = lines_of(
        "Resume\n"
        "Jane Doe\n"
        "John Smith\n"
        "https://www.linkedin.com/in/janedoe\n"
        "https://www.linkedin.com/in/someone-else\n"
        "GitHub: https://github.com/janedoe\n"
        "Portfolio: https://janedoe.dev\n"
        "https://second.example.com\n"
        "jane@example.com\n"
        "john@example.com\n"
    )
    personal = extract_personal(lines)

    assert personal.name == "Jane Doe"
    assert personal.email == "jane@example.com"
    assert personal.linkedin == "https://www.linkedin.com/in/janedoe"
    assert personal.github == "https://github.com/janedoe"
    assert personal.portfolio == "https://janedoe.dev"


def test_personal_links_need_a_scheme():
    personal = extract_personal(lines_of("Jane Doe\nlinkedin.com/in/janedoe\ngithub.com/janedoe"))
    assert personal.linkedin == ""
    assert personal.github == ""
    assert personal.portfolio == ""


def test_personal_scans_every_section():
    personal = extract_personal(lines_of("EXPERIENCE\nEngineer, Acme, 2020\nContact: jane@example.com"))
    assert personal.email == "jane@example.com"


# ===== education =====

def test_education_fills_first_empty_slot():
    lines = lines_of(
        "EDUCATION\n"
        "MIT University\n"
        "B.S. Computer Science\n"
        "2018 - 2022\n"
        "Cambridge, MA\n"
        "Dean's list\n"
    )
    assert extract_education(lines) == [
        EducationEntry(
            institution="MIT University",
            degree="B.S. Computer Science",
            period="2018 - 2022",
            location="Cambridge, MA",
        )
    ]


def test_education_back_to_back_institutions():
    lines = lines_of("EDUCATION\nStanford University\nMIT University\nB.S. Physics")
    assert extract_education(lines) == [
        EducationEntry(institution="Stanford University"),
        EducationEntry(institution="MIT University", degree="B.S. Physics"),
    ]


def test_education_ignores_lines_before_first_institution():
    lines = lines_of("Education\nGraduated with honors\nState College\nB.A. History")
    assert extract_education(lines) == [EducationEntry(institution="State College", degree="B.A. History")]


def test_education_preserves_source_order():
    lines = lines_of("EDUCATION\nAlpha University\nBeta College\nGamma Institute\nEXPERIENCE")
    assert [e.institution for e in extract_education(lines)] == [
        "Alpha University", "Beta College", "Gamma Institute",
    ]


def test_education_without_section_is_empty():
    assert extract_education(lines_of("Jane Doe\nMIT University\nB.S. Physics")) == []


# ===== skills =====

def test_skills_categories():
    lines = lines_of(
        "TECHNICAL SKILLS\n"
        "Programming Languages: Python, Java, C++\n"
        "Machine Learning: NLP, Computer Vision\n"
        "Cloud: AWS, Docker\n"
        "Frameworks: React, PyTorch\n"
        "EXPERIENCE\n"
        "Languages: COBOL\n"
    )
    assert extract_skills(lines) == SkillsProfile(
        programming_languages="Python, Java, C++",
        ml_skills="NLP, Computer Vision",
        cloud_tech="AWS, Docker",
        frameworks="React, PyTorch",
    )


def test_skills_later_line_overwrites_category():
    skills = extract_skills(lines_of("Skills\nPython, Go\nLanguages: Rust"))
    assert skills.programming_languages == "Rust"


def test_skills_unknown_label_is_ignored():
    assert extract_skills(lines_of("SKILLS\nTools: Figma, Jira")) == SkillsProfile()


# ===== experience =====

def test_experience_entries_and_bullets():
    lines = lines_of(
        "EXPERIENCE\n"
        "- Orphan bullet before any job\n"
        "Engineer, Acme Corp, NYC | 2022 - Present\n"
        "Owned the billing pipeline end to end\n"
        "short line\n"
        "Analyst, Initech, Austin | 2019 - 2021\n"
        "• Wrote TPS reports\n"
    )
    assert extract_experience(lines) == [
        ExperienceEntry(
            title="Engineer",
            company="Acme Corp",
            location="NYC",
            period="2022 - Present",
            bullets=["Owned the billing pipeline end to end"],
        ),
        ExperienceEntry(
            title="Analyst",
            company="Initech",
            location="Austin",
            period="2019 - 2021",
            bullets=["Wrote TPS reports"],
        ),
    ]


def test_experience_first_block_only():
    lines = lines_of(
        "EXPERIENCE\n"
        "Engineer, Acme Corp, NYC | 2022 - Present\n"
        "- Built the thing\n"
        "EDUCATION\n"
        "MIT University\n"
        "EXPERIENCE\n"
        "Manager, Globex, Boston | 2023 - Present\n"
    )
    experience = extract_experience(lines)
    assert [e.company for e in experience] == ["Acme Corp"]
    assert experience[0].bullets == ["Built the thing"]


def test_experience_unmarked_line_length_window():
    lines = lines_of(
        "EXPERIENCE\n"
        "Engineer, Acme Corp, NYC | 2022 - Present\n"
        + "x" * 20 + "\n"
        + "y" * 21 + "\n"
        + "z" * 200 + "\n"
    )
    assert extract_experience(lines)[0].bullets == ["y" * 21]


# ===== projects =====

def test_projects_titles_and_bullets():
    lines = lines_of(
        "PROJECTS\n"
        "Resume Parser Tool\n"
        "- Parsed resumes with heuristics\n"
        "• Shipped a FastAPI service\n"
        "short\n"
        "Compiler Frontend\n"
        "1. Wrote a lexer\n"
        "ACHIEVEMENTS\n"
        "Unrelated Title Line\n"
    )
    assert extract_projects(lines) == [
        ProjectEntry(
            title="Resume Parser Tool",
            bullets=["Parsed resumes with heuristics", "Shipped a FastAPI service"],
        ),
        ProjectEntry(title="Compiler Frontend", bullets=["Wrote a lexer"]),
    ]


def test_project_title_rejects_dashes_and_lowercase():
    lines = lines_of("Projects\nreal-time chat app\nlowercase title here\nChat App - v2 release")
    assert extract_projects(lines) == []


# ===== achievements =====

def test_achievements():
    lines = lines_of(
        "ACHIEVEMENTS\n"
        "• Won the national hackathon 2021\n"
        "- Short\n"
        "Published a paper on heuristics at ACL\n"
        "ok\n"
        "SKILLS\n"
        "Placed first in a long contest\n"
    )
    assert extract_achievements(lines) == [
        AchievementEntry(text="Won the national hackathon 2021"),
        AchievementEntry(text="Published a paper on heuristics at ACL"),
    ]


# ===== totality =====

@pytest.mark.parametrize("text", [
    "",
    "\n\n   \n",
    "EDUCATION",
    "EXPERIENCE\n-\n- \n•",
    "PROJECTS\n" + "x" * 5000,
    "•••\n▪\n▫ ▫\n1.",
    "EDUCATION\nEXPERIENCE\nSKILLS\nPROJECTS\nACHIEVEMENTS",
    "Skills\n:::\nLanguages:\n:",
])
def test_scanners_are_total(text):
    lines = lines_of(text)
    extract_personal(lines)
    assert isinstance(extract_education(lines), list)
    assert isinstance(extract_skills(lines), SkillsProfile)
    assert isinstance(extract_experience(lines), list)
    assert isinstance(extract_projects(lines), list)
    assert isinstance(extract_achievements(lines), list)

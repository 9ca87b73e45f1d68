"""
Deterministic LaTeX emission for a ResumeRecord.

Pure field substitution into a fixed article template: no heuristics, the
same record always renders to the same string. Sections with no content are
left out entirely.
"""

from typing import List
import re

from resume_builder.core.schemas import (
    AchievementEntry,
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ProjectEntry,
    ResumeRecord,
    SkillsProfile,
)


LATEX_SPECIALS = {
    "\\": r"\textbackslash{}",
    "{": r"\{",
    "}": r"\}",
    "$": r"\$",
    "&": r"\&",
    "%": r"\%",
    "#": r"\#",
    "^": r"\textasciicircum{}",
    "_": r"\_",
    "~": r"\textasciitilde{}",
}
LATEX_SPECIALS_RE = re.compile("|".join(re.escape(c) for c in LATEX_SPECIALS))

# hyperref reads \href targets verbatim apart from these two
URL_SPECIALS_RE = re.compile(r"[%#]")

PREAMBLE = r"""\documentclass[10pt,a4]{article}

\usepackage[a4paper, portrait, margin=1cm]{geometry}
\usepackage{setspace}
\usepackage{tabu}
\usepackage{multirow}
\usepackage{color}
\usepackage{hyphenat}
\usepackage[hidelinks]{hyperref}
\usepackage{textcomp}
\usepackage{enumitem}
\usepackage{tabto}
\usepackage{gensymb}

\renewcommand{\labelitemi}{\textendash}

\def\hrulefill{\leavevmode\leaders\hrule height 1pt\hfill\kern0pt}

\usepackage[T1]{fontenc}
\usepackage{mathptmx}
\setlist{nosep}

\begin{document}
{\fontfamily{ptm}\selectfont
	\renewcommand{\familydefault}{\sfdefault}
	\pagenumbering{gobble}
"""

CLOSING = "}\n\t\n\\end{document}"

# Column width for the links row, keyed by number of links
LINK_COLUMN_WIDTHS = {1: r"0.4\textwidth", 2: r"0.3\textwidth", 3: r"0.2\textwidth"}

SKILL_LABELS = (
    ("programming_languages", r"\textbf{Programming Languages:}"),
    ("ml_skills", r"\textbf{Machine Learning and Data Science:}"),
    ("cloud_tech", r"\textbf{Cloud Technologies}"),
    ("frameworks", r"\textbf{Frameworks and Tools:}"),
)


def escape_latex(text: str) -> str:
    """
    Escape LaTeX special characters in one pass, so the braces introduced
    for backslash are not escaped again.

    Examples:
    - "R&D 100%" -> "R\\&D 100\\%"
    - "a_b" -> "a\\_b"
    """
    if not text:
        return ""
    return LATEX_SPECIALS_RE.sub(lambda m: LATEX_SPECIALS[m.group(0)], str(text))


def escape_url(url: str) -> str:
    """Escape a link target for \\href; only % and # need a backslash."""
    if not url:
        return ""
    return URL_SPECIALS_RE.sub(lambda m: "\\" + m.group(0), url)


def render_bullets(bullets: List[str]) -> str:
    if not bullets:
        return ""
    items = "\n".join(f"        \\item {escape_latex(b)}" for b in bullets)
    return f"\\begin{{itemize}}\n{items}\n    \\end{{itemize}}"


def render_personal(personal: PersonalInfo) -> str:
    if not personal.name:
        return ""

    email = ""
    if personal.email:
        e = escape_latex(personal.email)
        email = f"\\textcolor{{blue}} {{\\href{{mailto:{escape_url(personal.email)}}}{{{e}}}}}"

    links: List[str] = []
    if personal.linkedin:
        links.append(f"\\raggedright\\href{{{escape_url(personal.linkedin)}}}{{\\textcolor{{blue}}{{Linkedin}}}}")
    if personal.github:
        links.append(f"\\centering\\href{{{escape_url(personal.github)}}}{{\\textcolor{{blue}}{{Github}}}}")
    if personal.portfolio:
        links.append(f"\\raggedleft\\href{{{escape_url(personal.portfolio)}}}{{\\textcolor{{blue}}{{Portfolio}}}}")

    links_row = ""
    if links:
        width = LINK_COLUMN_WIDTHS[len(links)]
        col_defs = "@{\\hspace{5pt}}".join([f"p{{{width}}}"] * len(links))
        joined = " &\n        ".join(links)
        links_row = (
            "\n    \\hspace*{85pt}"
            f"\n    \\begin{{tabular}}{{@{{}}{col_defs}@{{}}}}"
            f"\n        {joined}"
            "\n    \\end{tabular}"
            "\n    \\hspace*{50pt}"
        )

    email_cell = f"{email}\\\\" if email else ""
    return (
        "\n% Personal Details\n"
        "\t\\noindent\n"
        "\t\\begin{tabu} to \\textwidth {X[l] X[c] X[r]}\n"
        f"\t\t  &  \\multirow{{2}}{{*}}{{{{\\textbf{{\\Large {escape_latex(personal.name)}}}}}}}  &   \t\t\\\\\n"
        f"\t\t &\t&   {email_cell}\n"
        "\t\\end{tabu}\n"
        f"{links_row}\n"
        "\t\\vspace{-2mm}\n"
    )


def _education_line(edu: EducationEntry) -> str:
    location = f", {escape_latex(edu.location)}" if edu.location else ""
    return (
        f"    \\hspace{{1.5mm}} \\textbf{{\\large {escape_latex(edu.institution)}}}, "
        f"\\textit{{{escape_latex(edu.degree)}}}{location}  \\hfill \\textit{{{escape_latex(edu.period)}}}\t\\\\"
    )


def render_education(education: List[EducationEntry]) -> str:
    if not education:
        return ""
    entries = "\n\n".join(_education_line(e) for e in education)
    return (
        "\n% Education\n"
        "\\vspace{0.25mm}\n"
        "\\begin{flushleft}\n"
        "\t{\\Large \\textbf{EDUCATION}}\n"
        "    \n"
        f"{entries}\n"
        "\n"
        "\\end{flushleft}\n"
    )


def render_skills(skills: SkillsProfile) -> str:
    rows = [
        f"            \\hspace{{0.5cm}}  {label} {escape_latex(getattr(skills, attr))}. \\\\"
        for attr, label in SKILL_LABELS
        if getattr(skills, attr)
    ]
    if not rows:
        return ""
    body = "\n".join(rows)
    return (
        "\n\\begin{flushleft}\n"
        "    {\\Large \\textbf {SKILLS AND CERTIFICATIONS}}\n"
        "    \n"
        "        \\vspace{1mm}\n"
        f"{body}\n"
        "        \n"
        "\\end{flushleft}\n"
    )


def _experience_block(exp: ExperienceEntry) -> str:
    return (
        f"    \\hspace{{1.5mm}} \\textbf{{\\large {escape_latex(exp.title)}, {escape_latex(exp.company)}}},  "
        f"{escape_latex(exp.location)} \\hfill \\textit{{\\large {escape_latex(exp.period)}}}\t\\\\\n"
        f"    {render_bullets(exp.bullets)}"
    )


def render_experience(experience: List[ExperienceEntry]) -> str:
    if not experience:
        return ""
    entries = "\n\n    \\vspace{0.5mm}\n".join(_experience_block(e) for e in experience)
    return (
        "\n% Work Experience\n"
        "\\begin{flushleft}\n"
        "    {\\Large \\textbf{WORK EXPERIENCE}}\n"
        "\n"
        "    \\vspace{1.5mm}\n"
        f"{entries}\n"
        "\n"
        "\\end{flushleft}\n"
    )


def _project_block(project: ProjectEntry) -> str:
    return (
        f"        \\item \\hspace{{1.5mm}} \\textbf{{\\large {escape_latex(project.title)}}}\n"
        f"        {render_bullets(project.bullets)}"
    )


def render_projects(projects: List[ProjectEntry]) -> str:
    if not projects:
        return ""
    entries = "\n\n".join(_project_block(p) for p in projects)
    return (
        "\n\\begin{flushleft}\n"
        "    {\\Large \\textbf{PROJECTS}}\n"
        "        \\vspace{0.5mm}\n"
        f"{entries}\n"
        "\n"
        "\\end{flushleft}\n"
    )


def _achievement_item(achievement: AchievementEntry) -> str:
    citation = f" \\hfill \\textit{{{escape_latex(achievement.citation)}}}" if achievement.citation else ""
    return f"            \\item \\textbf{{{escape_latex(achievement.text)}}}{citation}"


def render_achievements(achievements: List[AchievementEntry]) -> str:
    if not achievements:
        return ""
    items = "\n".join(_achievement_item(a) for a in achievements)
    return (
        "\n\\begin{flushleft}\n"
        "    {\\Large \\textbf{ACHIEVEMENTS AND PUBLICATIONS}}\n"
        "      \\vspace{1.0mm}\n"
        "      \\begin{itemize}\n"
        f"{items}\n"
        "      \\end{itemize}\n"
        "\\end{flushleft}\n"
    )


def render_latex(record: ResumeRecord) -> str:
    """Full LaTeX document for `record`."""
    return "".join([
        PREAMBLE,
        render_personal(record.personal),
        render_education(record.education),
        render_skills(record.skills),
        render_experience(record.experience),
        render_projects(record.projects),
        render_achievements(record.achievements),
        CLOSING,
    ])

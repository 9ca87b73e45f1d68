from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


DocumentSource = Literal["docx", "pdf", "text"]


class Line(BaseModel):
    """A trimmed, non-empty line and its position in the normalized sequence."""
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    text: str


class PersonalInfo(BaseModel):
    name: str = ""
    email: str = ""
    linkedin: str = ""
    github: str = ""
    portfolio: str = ""


class EducationEntry(BaseModel):
    """Education entry, in source order."""
    institution: str = ""
    degree: str = ""
    location: str = ""
    period: str = ""  # e.g. "2018 - 2022"


class SkillsProfile(BaseModel):
    """Raw comma/semicolon separated skill blobs per category (not tokenized)."""
    model_config = ConfigDict(populate_by_name=True)

    programming_languages: str = Field(default="", alias="programmingLanguages")
    ml_skills: str = Field(default="", alias="mlSkills")
    cloud_tech: str = Field(default="", alias="cloudTech")
    frameworks: str = Field(default="", alias="frameworks")


class ExperienceEntry(BaseModel):
    title: str = ""
    company: str = ""
    location: str = ""
    period: str = ""
    bullets: List[str] = Field(default_factory=list)


class ProjectEntry(BaseModel):
    title: str = ""
    bullets: List[str] = Field(default_factory=list)


class AchievementEntry(BaseModel):
    text: str = ""
    citation: str = ""


class ResumeRecord(BaseModel):
    """Structured professional profile. Every field defaults to empty, never absent."""
    personal: PersonalInfo = Field(default_factory=PersonalInfo)
    education: List[EducationEntry] = Field(default_factory=list)
    skills: SkillsProfile = Field(default_factory=SkillsProfile)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    projects: List[ProjectEntry] = Field(default_factory=list)
    achievements: List[AchievementEntry] = Field(default_factory=list)


class ParseResponse(BaseModel):
    record: ResumeRecord
    source: DocumentSource
    line_count: int = Field(..., description="Number of non-empty lines the heuristics ran over")
    sections_found: List[str] = Field(default_factory=list, description="Section headers seen anywhere in the text")
    warnings: List[str] = Field(default_factory=list)
    variant: str = Field(default="", description="Variant the record was stored under, if any")


class ParseTextRequest(BaseModel):
    text: str


class VariantCreateRequest(BaseModel):
    name: str


class VariantList(BaseModel):
    variants: List[str]
    current: str = ""


class VariantExport(BaseModel):
    """JSON export envelope for one named variant."""
    model_config = ConfigDict(populate_by_name=True)

    variant: str
    data: ResumeRecord
    exported_at: datetime = Field(alias="exportedAt")

"""Canonical resume document.

Attributes are snake_case in Python and camelCase on the wire, matching the
JSON the Gemini response schema asks for.
"""

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        validate_assignment=True,
    )


class ContactInfo(DocumentModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str | None = None
    portfolio: str | None = None


class WorkItem(DocumentModel):
    job_title: str
    company: str
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    description: list[str] = Field(default_factory=list)


class EducationItem(DocumentModel):
    degree: str = ""
    institution: str = ""
    location: str = ""
    graduation_date: str = ""


class ProjectItem(DocumentModel):
    project_name: str = ""
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    link: str | None = None


class ResumeDocument(DocumentModel):
    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    summary: str = ""
    qualifications: list[str] | None = None
    work_experience: list[WorkItem] = Field(default_factory=list)
    education: list[EducationItem] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    portfolio_projects: list[ProjectItem] | None = None

    def to_wire(self) -> dict[str, Any]:
        """Dump with camelCase keys; absent optional values are left out."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Section(StrEnum):
    QUALIFICATIONS = "qualifications"
    WORK_EXPERIENCE = "workExperience"
    EDUCATION = "education"
    SKILLS = "skills"
    PORTFOLIO_PROJECTS = "portfolioProjects"

    @property
    def attribute(self) -> str:
        return SECTION_ATTRIBUTES[self]

    @property
    def item_model(self) -> type[DocumentModel] | None:
        """Model of one element, or None for sections of plain text lines."""
        return SECTION_ITEM_MODELS.get(self)

    @property
    def is_optional(self) -> bool:
        return self in OPTIONAL_SECTIONS


SECTION_ATTRIBUTES: dict[Section, str] = {
    Section.QUALIFICATIONS: "qualifications",
    Section.WORK_EXPERIENCE: "work_experience",
    Section.EDUCATION: "education",
    Section.SKILLS: "skills",
    Section.PORTFOLIO_PROJECTS: "portfolio_projects",
}

SECTION_ITEM_MODELS: dict[Section, type[DocumentModel]] = {
    Section.WORK_EXPERIENCE: WorkItem,
    Section.EDUCATION: EducationItem,
    Section.PORTFOLIO_PROJECTS: ProjectItem,
}

# Present-or-absent sections. ``skills`` is required but may be empty.
OPTIONAL_SECTIONS = frozenset({Section.QUALIFICATIONS, Section.PORTFOLIO_PROJECTS})

WORK_ITEM_REQUIRED_KEYS = ("jobTitle", "company", "description")


def is_valid_work_item(item: Any) -> bool:
    """Return True if ``item`` is a record shaped like a work experience entry.

    Accepts raw mappings with camelCase keys (model output, fixtures). The
    entry needs a job title, a company and a description that is a list.
    """
    if not isinstance(item, Mapping):
        return False
    if any(key not in item for key in WORK_ITEM_REQUIRED_KEYS):
        return False
    return isinstance(item["description"], list)

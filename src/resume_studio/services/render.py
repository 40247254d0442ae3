from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from resume_studio.schemas.document import ResumeDocument, is_valid_work_item

SKILL_SEPARATOR = " • "


class ContactLink(BaseModel):
    label: str
    url: str


class ContactView(BaseModel):
    name: str
    details: list[str] = Field(default_factory=list)
    links: list[ContactLink] = Field(default_factory=list)


class WorkView(BaseModel):
    job_title: str
    company: str
    location: str
    dates: str
    bullets: list[str]


class EducationView(BaseModel):
    degree: str
    graduation_date: str
    institution_line: str


class ProjectView(BaseModel):
    project_name: str
    description: str
    technologies: list[str]
    link: str | None = None


class RenderedResume(BaseModel):
    contact: ContactView
    summary: str
    qualifications: list[str] | None = None
    work_experience: list[WorkView]
    education: list[EducationView]
    skills: list[str]
    skills_line: str
    portfolio_projects: list[ProjectView] | None = None


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _lines(values: Any) -> list[str]:
    if not isinstance(values, list):
        return []
    return [value for value in values if isinstance(value, str) and value.strip()]


def _records(values: Any) -> list[Any]:
    return values if isinstance(values, list) else []


def _contact(raw: Any) -> ContactView:
    raw = raw if isinstance(raw, Mapping) else {}
    details = [_text(raw.get(name)) for name in ("location", "phone", "email")]
    links = [
        ContactLink(label=label, url=raw[key])
        for key, label in (("linkedin", "LinkedIn"), ("portfolio", "Portfolio"))
        if raw.get(key)
    ]
    return ContactView(
        name=_text(raw.get("name")),
        details=[detail for detail in details if detail],
        links=links,
    )


def _work(raw: Mapping[str, Any]) -> WorkView:
    start, end = _text(raw.get("startDate")), _text(raw.get("endDate"))
    return WorkView(
        job_title=_text(raw["jobTitle"]),
        company=_text(raw["company"]),
        location=_text(raw.get("location")),
        dates=" – ".join(part for part in (start, end) if part),
        bullets=_lines(raw["description"]),
    )


def _education(raw: Any) -> EducationView | None:
    if not isinstance(raw, Mapping):
        return None
    place = [_text(raw.get("institution")), _text(raw.get("location"))]
    return EducationView(
        degree=_text(raw.get("degree")),
        graduation_date=_text(raw.get("graduationDate")),
        institution_line=", ".join(part for part in place if part),
    )


def _project(raw: Any) -> ProjectView | None:
    if not isinstance(raw, Mapping):
        return None
    return ProjectView(
        project_name=_text(raw.get("projectName")),
        description=_text(raw.get("description")),
        technologies=_lines(raw.get("technologies")),
        link=_text(raw.get("link")) or None,
    )


def render_resume(
    document: ResumeDocument | Mapping[str, Any], editing: bool = False
) -> RenderedResume:
    """Project a document onto what gets displayed.

    Accepts raw camelCase mappings as well, so a fixture that never went
    through the parser still renders safely. ``editing`` shows optional
    sections even when absent or empty so they can be filled in.
    """
    data = document.to_wire() if isinstance(document, ResumeDocument) else document

    qualifications = _lines(data.get("qualifications"))
    projects = [
        view
        for view in (_project(item) for item in _records(data.get("portfolioProjects")))
        if view is not None
    ]
    skills = _lines(data.get("skills"))

    return RenderedResume(
        contact=_contact(data.get("contactInfo")),
        summary=_text(data.get("summary")),
        qualifications=qualifications if editing or qualifications else None,
        work_experience=[
            _work(item) for item in _records(data.get("workExperience")) if is_valid_work_item(item)
        ],
        education=[
            view
            for view in (_education(item) for item in _records(data.get("education")))
            if view is not None
        ],
        skills=skills,
        skills_line=SKILL_SEPARATOR.join(skills),
        portfolio_projects=projects if editing or projects else None,
    )


def export_filename(document: ResumeDocument) -> str:
    words = document.contact_info.name.split()
    if not words:
        return "Resume.pdf"
    return f"{'_'.join(words)}_Resume.pdf"

"""Turn model output into a trusted :class:`ResumeDocument`.

Gemini is asked for JSON matching the resume schema, but what comes back may
be wrapped in prose or markdown, may carry fencing debris inside string
values, and may contain stray strings or half-built records inside the
collections. Everything is cleaned here so nothing downstream has to check
again.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from resume_studio.core.exceptions import ItemShapeError, MalformedJsonError
from resume_studio.schemas.document import (
    ContactInfo,
    DocumentModel,
    ResumeDocument,
    Section,
    WorkItem,
    is_valid_work_item,
)
from resume_studio.services.json_extraction import extract_json_span

logger = logging.getLogger(__name__)

# Structural punctuation that fencing and list syntax leave on string edges.
_EDGE_PUNCTUATION = frozenset(":{}[]`\"'.,;*")

REQUIRED_CONTACT_FIELDS = ("name", "email", "phone", "location")
REQUIRED_FIELDS = ("contactInfo", "summary", "workExperience", "education", "skills")


# ── cleaning ─────────────────────────────────────────────────────────────


def _is_noise(char: str) -> bool:
    return char.isspace() or char in _EDGE_PUNCTUATION


def clean_text(text: str) -> str:
    """Strip structural punctuation and whitespace from both ends of ``text``."""
    start, end = 0, len(text)
    while start < end and _is_noise(text[start]):
        start += 1
    while end > start and _is_noise(text[end - 1]):
        end -= 1
    return text[start:end]


def clean_value(value: Any, key: str | None = None) -> Any:
    if isinstance(value, str):
        return clean_text(value)
    if isinstance(value, list):
        return clean_list(value, key)
    if isinstance(value, Mapping):
        return clean_record(value)
    return value


def clean_list(items: list[Any], key: str | None = None) -> list[Any]:
    """Clean every element, then drop empty text and nulls, keeping order.

    Elements of ``workExperience`` must additionally look like a work item.
    """
    cleaned = [clean_value(item) for item in items]
    kept = [item for item in cleaned if item is not None and item != ""]
    if key == Section.WORK_EXPERIENCE:
        valid = [item for item in kept if is_valid_work_item(item)]
        if len(valid) != len(kept):
            logger.debug("Dropped %d malformed work experience entries", len(kept) - len(valid))
        return valid
    return kept


def clean_record(record: Mapping[str, Any]) -> dict[str, Any]:
    return {name: clean_value(value, name) for name, value in record.items()}


# ── reassembly ───────────────────────────────────────────────────────────


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, int | float):
        return str(value)
    return ""


def _optional_text(value: Any) -> str | None:
    return _text(value) or None


def _text_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value] if value else []
    if not isinstance(value, list):
        return []
    return [text for text in (_text(item) for item in value) if text]


def _build_contact(raw: Any) -> ContactInfo:
    raw = raw if isinstance(raw, Mapping) else {}
    return ContactInfo(
        name=_text(raw.get("name")),
        email=_text(raw.get("email")),
        phone=_text(raw.get("phone")),
        location=_text(raw.get("location")),
        linkedin=_optional_text(raw.get("linkedin")),
        portfolio=_optional_text(raw.get("portfolio")),
    )


def _build_work_item(raw: Mapping[str, Any]) -> WorkItem:
    return WorkItem(
        job_title=_text(raw["jobTitle"]),
        company=_text(raw["company"]),
        location=_text(raw.get("location")),
        start_date=_text(raw.get("startDate")),
        end_date=_text(raw.get("endDate")),
        description=_text_list(raw["description"]),
    )


def _build_item(section: Section, raw: Any) -> DocumentModel:
    if section == Section.WORK_EXPERIENCE:
        if not is_valid_work_item(raw):
            raise ItemShapeError(f"{section}: not a work experience record")
        return _build_work_item(raw)

    model = section.item_model
    if model is None or not isinstance(raw, Mapping):
        raise ItemShapeError(f"{section}: expected a record, got {type(raw).__name__}")

    values: dict[str, Any] = {}
    for name, field in model.model_fields.items():
        value = raw.get(field.alias or name)
        if field.annotation == list[str]:
            values[name] = _text_list(value)
        elif field.annotation == str | None:
            values[name] = _optional_text(value)
        else:
            values[name] = _text(value)
    try:
        return model.model_validate(values)
    except ValidationError as e:
        raise ItemShapeError(f"{section}: {e}") from e


def _build_items(section: Section, raw: Any) -> list[Any]:
    if not isinstance(raw, list):
        return []
    items = []
    for position, element in enumerate(raw):
        try:
            items.append(_build_item(section, element))
        except ItemShapeError as e:
            logger.warning("Dropping %s entry %d: %s", section, position, e)
    return items


def _missing_required(data: Mapping[str, Any]) -> list[str]:
    missing = [name for name in REQUIRED_FIELDS if data.get(name) in (None, "")]
    contact = data.get("contactInfo")
    if isinstance(contact, Mapping):
        missing.extend(
            f"contactInfo.{name}"
            for name in REQUIRED_CONTACT_FIELDS
            if contact.get(name) in (None, "")
        )
    return missing


def sanitize_document(data: Any) -> ResumeDocument:
    """Clean a decoded JSON payload and reassemble it into a ResumeDocument.

    Missing required fields are filled with empty defaults rather than
    rejecting the whole resume; they are reported in the log.
    """
    if not isinstance(data, Mapping):
        raise MalformedJsonError(
            text=json.dumps(data, ensure_ascii=False),
            message=f"Expected a JSON object, got {type(data).__name__}",
        )

    cleaned = clean_record(data)

    missing = _missing_required(cleaned)
    if missing:
        logger.warning("Model output is missing required fields: %s", ", ".join(missing))

    qualifications = cleaned.get(Section.QUALIFICATIONS)
    projects = cleaned.get(Section.PORTFOLIO_PROJECTS)

    return ResumeDocument(
        contact_info=_build_contact(cleaned.get("contactInfo")),
        summary=_text(cleaned.get("summary")),
        qualifications=None if qualifications is None else _text_list(qualifications),
        work_experience=_build_items(Section.WORK_EXPERIENCE, cleaned.get(Section.WORK_EXPERIENCE)),
        education=_build_items(Section.EDUCATION, cleaned.get(Section.EDUCATION)),
        skills=_text_list(cleaned.get(Section.SKILLS)),
        portfolio_projects=(
            None if projects is None else _build_items(Section.PORTFOLIO_PROJECTS, projects)
        ),
    )


def parse_document(text: str) -> ResumeDocument:
    """Extract, decode and sanitize a resume document from raw model output."""
    span = extract_json_span(text)
    try:
        data = json.loads(span)
    except json.JSONDecodeError as e:
        logger.error("Model output is not valid JSON: %s", e)
        raise MalformedJsonError(text=span, message=f"Invalid JSON in model output: {e}") from e
    return sanitize_document(data)

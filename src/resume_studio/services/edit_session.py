"""Isolated editing of a resume document.

An :class:`EditSession` owns the canonical document. ``begin`` deep-copies it
into a working copy; every mutation touches only that copy until ``commit``
replaces the canonical document wholesale or ``cancel`` throws the copy away.
"""

import logging
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ValidationError

from resume_studio.core.exceptions import SessionStateError, UnknownFieldError
from resume_studio.schemas.document import (
    DocumentModel,
    EducationItem,
    ProjectItem,
    ResumeDocument,
    Section,
    WorkItem,
)

logger = logging.getLogger(__name__)

# Fields edited as one entry per line; every other list field is comma separated.
LINE_SEPARATED_FIELDS = frozenset({"qualifications", "description"})

# Contact fields that are absent rather than blank when cleared.
OPTIONAL_CONTACT_FIELDS = frozenset({"linkedin", "portfolio"})


class SessionState(StrEnum):
    IDLE = "idle"
    EDITING = "editing"


def _placeholder(section: Section) -> DocumentModel | str:
    if section == Section.WORK_EXPERIENCE:
        return WorkItem(
            job_title="Job Title",
            company="Company Name",
            location="City, State",
            start_date="Start Date",
            end_date="End Date",
            description=["Describe an accomplishment or responsibility."],
        )
    if section == Section.EDUCATION:
        return EducationItem(
            degree="Degree",
            institution="Institution",
            location="City, State",
            graduation_date="Graduation Date",
        )
    if section == Section.PORTFOLIO_PROJECTS:
        return ProjectItem(
            project_name="Project Name",
            description="Briefly describe the project and your role.",
            technologies=["Technology"],
        )
    if section == Section.QUALIFICATIONS:
        return "New qualification"
    return "New skill"


def split_delimited(field: str, raw: str | list[str]) -> list[str]:
    """Turn user-edited text into a list for ``field``.

    Line-separated fields keep one entry per line, blank lines included;
    comma-separated fields are trimmed and lose empty entries.
    """
    if isinstance(raw, list):
        return [str(value) for value in raw]
    if field in LINE_SEPARATED_FIELDS:
        return raw.split("\n")
    return [part.strip() for part in raw.split(",") if part.strip()]


def _section(section: Section | str) -> Section:
    try:
        return Section(section)
    except ValueError as e:
        raise UnknownFieldError(f"Unknown section: {section}") from e


def _attribute_for(model: BaseModel, name: str) -> str:
    """Map a camelCase wire name (or the attribute name) onto an attribute."""
    for attribute, field in type(model).model_fields.items():
        if name in (attribute, field.alias):
            return attribute
    raise UnknownFieldError(f"{type(model).__name__} has no field '{name}'")


def _assign(model: BaseModel, attribute: str, value: Any) -> None:
    try:
        setattr(model, attribute, value)
    except ValidationError as e:
        raise UnknownFieldError(f"Invalid value for '{attribute}': {e}") from e


class EditSession:
    """Single-owner Idle/Editing state machine over one resume document."""

    def __init__(self, document: ResumeDocument) -> None:
        self._document = document
        self._working: ResumeDocument | None = None
        self.state = SessionState.IDLE

    @property
    def document(self) -> ResumeDocument:
        return self._document

    @property
    def is_editing(self) -> bool:
        return self.state == SessionState.EDITING

    @property
    def working_copy(self) -> ResumeDocument:
        return self._require_editing()

    def _require_editing(self) -> ResumeDocument:
        if self._working is None:
            raise SessionStateError("No edit session is open")
        return self._working

    # ── lifecycle ────────────────────────────────────────────────────────

    def begin(self) -> ResumeDocument:
        if self.is_editing:
            raise SessionStateError("An edit session is already open")
        self._working = self._document.model_copy(deep=True)
        self.state = SessionState.EDITING
        return self._working

    def commit(self) -> ResumeDocument:
        working = self._require_editing()
        self._document = working.model_copy(deep=True)
        self._end()
        logger.debug("Edit session committed")
        return self._document

    def cancel(self) -> ResumeDocument:
        self._require_editing()
        self._end()
        logger.debug("Edit session cancelled")
        return self._document

    def _end(self) -> None:
        self._working = None
        self.state = SessionState.IDLE

    # ── scalar and list fields ───────────────────────────────────────────

    def set_scalar_field(self, path: str, value: str) -> None:
        """Replace a text leaf addressed by a dotted path such as ``contactInfo.name``."""
        working = self._require_editing()
        *parents, leaf = path.split(".")
        target: BaseModel = working
        for name in parents:
            target = getattr(target, _attribute_for(target, name))
            if not isinstance(target, BaseModel):
                raise UnknownFieldError(f"'{path}' does not address a text field")
        attribute = _attribute_for(target, leaf)
        if attribute in OPTIONAL_CONTACT_FIELDS and not value:
            _assign(target, attribute, None)
        else:
            _assign(target, attribute, value)

    def set_list_field(self, path: str, values: str | list[str]) -> None:
        """Replace a top-level list of text (``skills``, ``qualifications``)."""
        working = self._require_editing()
        section = _section(path)
        if section.item_model is not None:
            raise UnknownFieldError(f"'{path}' holds records, not text lines")
        _assign(working, section.attribute, split_delimited(section, values))

    # ── items ────────────────────────────────────────────────────────────

    def _items(self, section: Section) -> list[Any] | None:
        return getattr(self._require_editing(), section.attribute)

    def set_item_field(
        self, section: Section | str, index: int, field: str, value: str | list[str]
    ) -> None:
        section = _section(section)
        if section.item_model is None:
            raise UnknownFieldError(f"'{section}' has no item fields")
        items = self._items(section)
        if not items or not 0 <= index < len(items):
            logger.debug("Ignoring edit of %s[%d]: out of range", section, index)
            return

        item = items[index]
        attribute = _attribute_for(item, field)
        annotation = type(item).model_fields[attribute].annotation
        if annotation == list[str]:
            _assign(item, attribute, split_delimited(field, value))
        elif isinstance(value, list):
            raise UnknownFieldError(f"'{field}' holds text, not a list")
        elif annotation == str | None and not value:
            _assign(item, attribute, None)
        else:
            _assign(item, attribute, value)

    def add_item(self, section: Section | str) -> None:
        """Append the section's placeholder entry, creating an absent section."""
        section = _section(section)
        working = self._require_editing()
        items = getattr(working, section.attribute)
        if items is None:
            items = []
        _assign(working, section.attribute, [*items, _placeholder(section)])

    def delete_item(self, section: Section | str, index: int) -> None:
        section = _section(section)
        working = self._require_editing()
        items = getattr(working, section.attribute)
        if not items or not 0 <= index < len(items):
            logger.debug("Ignoring delete of %s[%d]: out of range", section, index)
            return
        _assign(working, section.attribute, items[:index] + items[index + 1 :])

    def delete_section(self, section: Section | str) -> None:
        """Remove an optional section; required sections are emptied instead."""
        section = _section(section)
        working = self._require_editing()
        _assign(working, section.attribute, None if section.is_optional else [])

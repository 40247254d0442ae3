import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from resume_studio.schemas.document import Section
from resume_studio.services.edit_session import SessionState
from resume_studio.services.render import RenderedResume
from resume_studio.storage.base import Workspace


class WorkspaceRead(BaseModel):
    id: uuid.UUID
    original_filename: str
    media_type: str
    page_count: int
    session_state: SessionState
    document: dict[str, Any]
    created_at: datetime

    @classmethod
    def from_workspace(cls, workspace: Workspace) -> "WorkspaceRead":
        return cls(
            id=workspace.id,
            original_filename=workspace.original_filename,
            media_type=workspace.media_type,
            page_count=workspace.page_count,
            session_state=workspace.session.state,
            document=workspace.session.document.to_wire(),
            created_at=workspace.created_at,
        )


class SessionRead(BaseModel):
    state: SessionState
    working_copy: dict[str, Any]


class ScalarFieldUpdate(BaseModel):
    path: str = Field(..., min_length=1, examples=["contactInfo.name"])
    value: str


class ListFieldUpdate(BaseModel):
    path: str = Field(..., min_length=1, examples=["skills"])
    values: str | list[str]


class ItemFieldUpdate(BaseModel):
    section: Section
    index: int
    field: str = Field(..., min_length=1)
    value: str | list[str]


class ExportResponse(BaseModel):
    filename: str
    resume: RenderedResume

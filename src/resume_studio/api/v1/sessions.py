"""Edit session endpoints.

Mutations apply to the session's working copy only; the saved resume changes
on commit. Requests made with no open session answer 409.
"""

from collections.abc import Callable

from fastapi import APIRouter, Depends, status

from resume_studio.api.v1.resumes import load_workspace
from resume_studio.core.exceptions import (
    ConflictError,
    EditValidationError,
    SessionStateError,
    UnknownFieldError,
)
from resume_studio.schemas.document import Section
from resume_studio.schemas.workspace import (
    ItemFieldUpdate,
    ListFieldUpdate,
    ScalarFieldUpdate,
    SessionRead,
    WorkspaceRead,
)
from resume_studio.storage.base import Workspace

router = APIRouter(prefix="/resumes/{workspace_id}/session", tags=["sessions"])


def _apply(workspace: Workspace, operation: Callable[[], object]) -> SessionRead:
    try:
        operation()
    except SessionStateError as e:
        raise ConflictError(str(e)) from e
    except UnknownFieldError as e:
        raise EditValidationError(str(e)) from e
    return _session_read(workspace)


def _session_read(workspace: Workspace) -> SessionRead:
    session = workspace.session
    try:
        working = session.working_copy
    except SessionStateError as e:
        raise ConflictError(str(e)) from e
    return SessionRead(state=session.state, working_copy=working.to_wire())


@router.post("", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
async def begin_session(workspace: Workspace = Depends(load_workspace)) -> SessionRead:
    return _apply(workspace, workspace.session.begin)


@router.get("", response_model=SessionRead)
async def get_session(workspace: Workspace = Depends(load_workspace)) -> SessionRead:
    return _session_read(workspace)


@router.post("/commit", response_model=WorkspaceRead)
async def commit_session(workspace: Workspace = Depends(load_workspace)) -> WorkspaceRead:
    try:
        workspace.session.commit()
    except SessionStateError as e:
        raise ConflictError(str(e)) from e
    return WorkspaceRead.from_workspace(workspace)


@router.post("/cancel", response_model=WorkspaceRead)
async def cancel_session(workspace: Workspace = Depends(load_workspace)) -> WorkspaceRead:
    try:
        workspace.session.cancel()
    except SessionStateError as e:
        raise ConflictError(str(e)) from e
    return WorkspaceRead.from_workspace(workspace)


@router.patch("/fields", response_model=SessionRead)
async def set_scalar_field(
    data: ScalarFieldUpdate,
    workspace: Workspace = Depends(load_workspace),
) -> SessionRead:
    return _apply(workspace, lambda: workspace.session.set_scalar_field(data.path, data.value))


@router.put("/lists", response_model=SessionRead)
async def set_list_field(
    data: ListFieldUpdate,
    workspace: Workspace = Depends(load_workspace),
) -> SessionRead:
    return _apply(workspace, lambda: workspace.session.set_list_field(data.path, data.values))


@router.patch("/items", response_model=SessionRead)
async def set_item_field(
    data: ItemFieldUpdate,
    workspace: Workspace = Depends(load_workspace),
) -> SessionRead:
    return _apply(
        workspace,
        lambda: workspace.session.set_item_field(data.section, data.index, data.field, data.value),
    )


@router.post("/sections/{section}/items", response_model=SessionRead)
async def add_item(
    section: Section,
    workspace: Workspace = Depends(load_workspace),
) -> SessionRead:
    return _apply(workspace, lambda: workspace.session.add_item(section))


@router.delete("/sections/{section}/items/{index}", response_model=SessionRead)
async def delete_item(
    section: Section,
    index: int,
    workspace: Workspace = Depends(load_workspace),
) -> SessionRead:
    return _apply(workspace, lambda: workspace.session.delete_item(section, index))


@router.delete("/sections/{section}", response_model=SessionRead)
async def delete_section(
    section: Section,
    workspace: Workspace = Depends(load_workspace),
) -> SessionRead:
    return _apply(workspace, lambda: workspace.session.delete_section(section))

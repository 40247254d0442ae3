import logging
import uuid

from resume_studio.core.exceptions import ExportBlockedError
from resume_studio.schemas.document import ResumeDocument
from resume_studio.services.edit_session import EditSession
from resume_studio.services.render import RenderedResume, export_filename, render_resume
from resume_studio.storage.base import Workspace, WorkspaceStore

logger = logging.getLogger(__name__)


async def create_workspace(
    store: WorkspaceStore,
    document: ResumeDocument,
    original_filename: str,
    media_type: str,
    page_count: int,
) -> Workspace:
    workspace = Workspace(
        session=EditSession(document),
        original_filename=original_filename,
        media_type=media_type,
        page_count=page_count,
    )
    await store.save(workspace)
    logger.info("Created workspace %s from %s", workspace.id, original_filename)
    return workspace


async def get_workspace(store: WorkspaceStore, workspace_id: uuid.UUID) -> Workspace | None:
    return await store.get(workspace_id)


async def delete_workspace(store: WorkspaceStore, workspace: Workspace) -> None:
    await store.delete(workspace.id)


def render_workspace(workspace: Workspace) -> RenderedResume:
    """Render the working copy while editing, otherwise the canonical document."""
    session = workspace.session
    if session.is_editing:
        return render_resume(session.working_copy, editing=True)
    return render_resume(session.document)


def export_workspace(workspace: Workspace) -> tuple[str, RenderedResume]:
    """Return the export file name and the projection handed to the exporter."""
    session = workspace.session
    if session.is_editing:
        raise ExportBlockedError("Save or cancel your edits before exporting")
    return export_filename(session.document), render_resume(session.document)

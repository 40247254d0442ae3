import logging
import uuid

from fastapi import APIRouter, Depends, Form, UploadFile, status
from google import genai

from resume_studio.api.deps import get_llm_client, get_workspace_store
from resume_studio.core.config import get_settings
from resume_studio.core.exceptions import (
    AIServiceError,
    ConflictError,
    ExportBlockedError,
    FileValidationError,
    NotFoundError,
    ResumeGenerationError,
    TransportError,
    UnsupportedMediaError,
    UnsupportedMediaTypeError,
)
from resume_studio.schemas.workspace import ExportResponse, WorkspaceRead
from resume_studio.services import workspace_service
from resume_studio.services.generation import generate_resume, validate_media_type
from resume_studio.services.render import RenderedResume
from resume_studio.storage.base import Workspace, WorkspaceStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resumes", tags=["resumes"])


async def load_workspace(
    workspace_id: uuid.UUID,
    store: WorkspaceStore = Depends(get_workspace_store),
) -> Workspace:
    workspace = await workspace_service.get_workspace(store, workspace_id)
    if not workspace:
        raise NotFoundError("Resume", str(workspace_id))
    return workspace


def _validate_page_count(page_count: int | None) -> int:
    settings = get_settings()
    if page_count is None:
        return settings.default_page_count
    if not 1 <= page_count <= settings.max_page_count:
        raise FileValidationError(
            f"Target page count must be between 1 and {settings.max_page_count}"
        )
    return page_count


@router.post("/", response_model=WorkspaceRead, status_code=status.HTTP_201_CREATED)
async def create_resume(
    file: UploadFile,
    page_count: int | None = Form(None),
    store: WorkspaceStore = Depends(get_workspace_store),
    llm_client: genai.Client = Depends(get_llm_client),
) -> WorkspaceRead:
    settings = get_settings()
    target_pages = _validate_page_count(page_count)

    # 1. Reject unsupported documents before touching the AI
    try:
        media_type = validate_media_type(file.content_type or "")
    except UnsupportedMediaTypeError as e:
        raise UnsupportedMediaError(e.user_message) from e

    # 2. Read content and check size
    content = await file.read()
    if not content:
        raise FileValidationError("Please upload a CV file first.")
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise FileValidationError(f"File size exceeds maximum of {settings.max_upload_size_mb}MB")

    # 3. Generate and normalize
    try:
        document = await generate_resume(
            llm_client,
            content,
            media_type,
            target_pages,
            settings.gemini_model,
            settings.generation_temperature,
        )
    except TransportError as e:
        raise AIServiceError(str(e)) from e
    except ResumeGenerationError as e:
        logger.warning("Resume generation for %s failed: %s", file.filename, e)
        raise AIServiceError(e.user_message) from e

    # 4. Keep it in memory for editing and export
    workspace = await workspace_service.create_workspace(
        store,
        document,
        original_filename=file.filename or "unknown",
        media_type=media_type,
        page_count=target_pages,
    )
    return WorkspaceRead.from_workspace(workspace)


@router.get("/{workspace_id}", response_model=WorkspaceRead)
async def get_resume(workspace: Workspace = Depends(load_workspace)) -> WorkspaceRead:
    return WorkspaceRead.from_workspace(workspace)


@router.get("/{workspace_id}/render", response_model=RenderedResume)
async def render_resume(workspace: Workspace = Depends(load_workspace)) -> RenderedResume:
    """Display projection: the working copy while editing, else the saved resume."""
    return workspace_service.render_workspace(workspace)


@router.get("/{workspace_id}/export", response_model=ExportResponse)
async def export_resume(workspace: Workspace = Depends(load_workspace)) -> ExportResponse:
    try:
        filename, resume = workspace_service.export_workspace(workspace)
    except ExportBlockedError as e:
        raise ConflictError(str(e)) from e
    return ExportResponse(filename=filename, resume=resume)


@router.delete("/{workspace_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resume(
    workspace: Workspace = Depends(load_workspace),
    store: WorkspaceStore = Depends(get_workspace_store),
) -> None:
    await workspace_service.delete_workspace(store, workspace)

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime

from resume_studio.services.edit_session import EditSession


@dataclass
class Workspace:
    """One generated resume and the edit session that guards it."""

    session: EditSession
    original_filename: str
    media_type: str
    page_count: int
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class WorkspaceStore(ABC):
    @abstractmethod
    async def save(self, workspace: Workspace) -> None:
        """Store or replace a workspace."""
        ...

    @abstractmethod
    async def get(self, workspace_id: uuid.UUID) -> Workspace | None:
        """Return the workspace, or None if it does not exist."""
        ...

    @abstractmethod
    async def delete(self, workspace_id: uuid.UUID) -> None:
        """Forget a workspace. Unknown ids are ignored."""
        ...

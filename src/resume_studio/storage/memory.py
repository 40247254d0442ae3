"""Process-memory workspace store; nothing outlives the process."""

import logging
import uuid

from resume_studio.storage.base import Workspace, WorkspaceStore

logger = logging.getLogger(__name__)


class InMemoryWorkspaceStore(WorkspaceStore):
    """Dict-backed store holding at most ``max_workspaces`` entries.

    Once full, saving a new workspace evicts the oldest one.
    """

    def __init__(self, max_workspaces: int | None = None) -> None:
        self._workspaces: dict[uuid.UUID, Workspace] = {}
        self._max_workspaces = max_workspaces

    async def save(self, workspace: Workspace) -> None:
        if workspace.id not in self._workspaces:
            self._evict_for_new_entry()
        self._workspaces[workspace.id] = workspace

    async def get(self, workspace_id: uuid.UUID) -> Workspace | None:
        return self._workspaces.get(workspace_id)

    async def delete(self, workspace_id: uuid.UUID) -> None:
        self._workspaces.pop(workspace_id, None)

    def _evict_for_new_entry(self) -> None:
        if self._max_workspaces is None:
            return
        while self._workspaces and len(self._workspaces) >= self._max_workspaces:
            oldest = min(self._workspaces.values(), key=lambda ws: ws.created_at)
            del self._workspaces[oldest.id]
            logger.info("Evicted workspace %s created at %s", oldest.id, oldest.created_at)

    def __len__(self) -> int:
        return len(self._workspaces)

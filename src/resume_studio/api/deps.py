from functools import lru_cache

from google import genai

from resume_studio.core.config import get_settings
from resume_studio.core.llm import get_gemini_client
from resume_studio.storage.base import WorkspaceStore
from resume_studio.storage.memory import InMemoryWorkspaceStore

__all__ = ["get_llm_client", "get_workspace_store"]


@lru_cache
def get_workspace_store() -> WorkspaceStore:
    return InMemoryWorkspaceStore(max_workspaces=get_settings().max_workspaces)


def get_llm_client() -> genai.Client:
    return get_gemini_client()

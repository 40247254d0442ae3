from fastapi import APIRouter

from resume_studio.core.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/status")
async def liveness() -> dict[str, str]:
    settings = get_settings()
    return {"status": "ok", "version": settings.app_version}

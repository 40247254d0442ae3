from fastapi import FastAPI

from resume_studio.api.v1.router import api_v1_router
from resume_studio.core.config import get_settings


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
    )
    app.include_router(api_v1_router, prefix="/api/v1")
    return app

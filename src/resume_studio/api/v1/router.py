from fastapi import APIRouter

from resume_studio.api.v1 import health, resumes, sessions

api_v1_router = APIRouter()
api_v1_router.include_router(health.router)
api_v1_router.include_router(resumes.router)
api_v1_router.include_router(sessions.router)

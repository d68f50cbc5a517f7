from fastapi import APIRouter

from . import admin, auth, join_requests, me, projects
from .faculty import router as faculty_router
from .hackathons import router as hackathons_router

api_router = APIRouter()
api_router.include_router(faculty_router, prefix="/faculty", tags=["faculty"])
api_router.include_router(hackathons_router, prefix="/hackathons", tags=["hackathons"])

__all__ = [
    "api_router",
    "faculty_router",
    "hackathons_router",
    "admin",
    "auth",
    "join_requests",
    "me",
    "projects",
]

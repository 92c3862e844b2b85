"""API router - mounts every endpoint module."""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth,
    health,
    providers,
    questions,
    responses,
    sections,
    stats,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="", tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(providers.router, prefix="/providers", tags=["Insurance Providers"])
api_router.include_router(sections.router, prefix="/sections", tags=["Sections"])
api_router.include_router(questions.router, prefix="/questions", tags=["Questions"])
api_router.include_router(responses.router, prefix="/responses", tags=["Responses"])
api_router.include_router(stats.router, prefix="/stats", tags=["Stats"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])

from __future__ import annotations

from fastapi import APIRouter

from .endpoints import entries, health, tag_extraction, trash, views

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(tag_extraction.router, prefix="/tag-extraction", tags=["tags"])
api_router.include_router(entries.router, prefix="/entries", tags=["entries"])
api_router.include_router(trash.router, prefix="/trash", tags=["trash"])
api_router.include_router(views.router, prefix="/views", tags=["views"])

from __future__ import annotations

import asyncio

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from smart_todo.config import settings
from smart_todo.db.base import get_supabase_client
from smart_todo.utils.logging import get_logger
from smart_todo.utils.openai_client import is_openai_configured

logger = get_logger(__name__)

router = APIRouter()


@router.get("/")
async def health_check():
    """Health check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "service": "smart-todo-api",
            "version": "0.1.0"
        }
    )


@router.get("/ready")
async def readiness_check():
    """Readiness check endpoint."""
    db_status = "connected"
    try:
        client = get_supabase_client()
        await asyncio.to_thread(
            lambda: client.table(settings.todos_table).select("id").limit(1).execute()
        )
    except Exception as e:
        logger.warning("Readiness database probe failed: %s", e)
        db_status = "error"

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready",
            "database": db_status,
            "ai_service": "configured" if is_openai_configured() else "unconfigured",
            "api_prefix": settings.api_prefix
        }
    )

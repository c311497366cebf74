"""Centralized FastAPI dependency definitions for the API layer.

Routers should import dependencies from here instead of directly from
their underlying implementation modules, so tests can override them via
``app.dependency_overrides[deps.get_thread_service]`` and friends.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from threadline.core.auth import get_auth_user_id
from threadline.core.config import Settings, get_settings
from threadline.db.session import get_db
from threadline.repositories import ThreadRepository, UploadRepository, UserRepository
from threadline.services.thread import ThreadService


def get_thread_service(
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ThreadService:
    return ThreadService(
        threads=ThreadRepository(session),
        users=UserRepository(session),
        uploads=UploadRepository(session),
        page_size=settings.threads_page_size,
    )


__all__ = ["get_db", "get_auth_user_id", "get_settings", "get_thread_service"]

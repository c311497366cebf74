"""Thread service.

``ThreadService`` holds the thread use-cases. It depends only on the
repository protocols below, so tests can hand it in-memory fakes while the
API wires in the SQLAlchemy repositories. Expected failures come back as
:class:`~threadline.core.errors.ServiceResult` errors; store errors raise.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any, Optional, Protocol, Sequence

from threadline.core.errors import ServiceResult, bad_request, not_found
from threadline.core.validation import is_uuid_v4
from threadline.schemas.thread import ThreadDetail, ThreadListItem, list_item_from_row

logger = logging.getLogger(__name__)

__all__ = [
    "UserStore",
    "ThreadStore",
    "UploadStore",
    "ThreadService",
    "DEFAULT_PAGE_SIZE",
]

DEFAULT_PAGE_SIZE = 10
# Largest OFFSET a signed 64-bit driver parameter can carry.
MAX_OFFSET = 2**63 - 1


class UserStore(Protocol):
    async def get_by_id(self, user_id: uuid.UUID) -> Optional[Any]: ...


class ThreadStore(Protocol):
    async def create(
        self, *, id: uuid.UUID, user_id: uuid.UUID, content: str, image: str | None = None
    ) -> Any: ...

    async def list_page(self, *, offset: int, limit: int) -> Sequence[tuple[Any, int]]: ...

    async def get_detail(self, thread_id: uuid.UUID) -> Optional[Any]: ...

    async def update_content(self, thread_id: uuid.UUID, content: str) -> int: ...

    async def delete(self, thread_id: uuid.UUID) -> int: ...


class UploadStore(Protocol):
    async def delete(self, upload_id: uuid.UUID) -> int: ...


def _invalid_id() -> ServiceResult:
    return bad_request("The sent ID is not a valid UUID format", "UUID Error")


def _thread_not_found(thread_id: str) -> ServiceResult:
    return not_found(f"Thread with ID {thread_id} not found", "Thread Not Found")


class ThreadService:

    def __init__(
        self,
        threads: ThreadStore,
        users: UserStore,
        uploads: UploadStore,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.threads = threads
        self.users = users
        self.uploads = uploads
        self.page_size = page_size

    async def add(
        self,
        auth_user_id: uuid.UUID,
        *,
        content: str,
        image: str | None = None,
        upload_id: uuid.UUID | None = None,
    ) -> ServiceResult[uuid.UUID]:
        """Create a thread owned by ``auth_user_id`` and consume its upload.

        The upload is deleted after the thread is committed. A failing delete
        is logged and leaves an orphaned upload row; the thread is kept.
        """
        user = await self.users.get_by_id(auth_user_id)
        if user is None:
            return not_found(f"User with ID {auth_user_id} not found", "User Not Found")

        thread_id = uuid.uuid4()
        await self.threads.create(
            id=thread_id,
            user_id=user.id,
            content=content,
            image=image or None,
        )
        logger.info("thread created", extra={"thread_id": thread_id, "user_id": user.id})

        if upload_id:
            try:
                await self.uploads.delete(upload_id)
            except Exception:
                logger.warning(
                    "upload cleanup failed",
                    extra={"thread_id": thread_id, "upload_id": upload_id},
                    exc_info=True,
                )
        return ServiceResult.success(thread_id)

    async def find_all(self, page: int = 1) -> ServiceResult[list[ThreadListItem]]:
        page = page if page > 1 else 1
        offset = (page - 1) * self.page_size
        if offset > MAX_OFFSET:
            return ServiceResult.success([])
        rows = await self.threads.list_page(offset=offset, limit=self.page_size)
        return ServiceResult.success([list_item_from_row(t, count) for t, count in rows])

    async def find_one(self, thread_id: str) -> ServiceResult[ThreadDetail]:
        if not is_uuid_v4(thread_id):
            return _invalid_id()
        thread = await self.threads.get_detail(uuid.UUID(thread_id))
        if thread is None:
            return _thread_not_found(thread_id)
        return ServiceResult.success(ThreadDetail.model_validate(thread))

    async def update_one(self, thread_id: str, *, content: str) -> ServiceResult[None]:
        # Any authenticated caller may edit; ownership is not checked.
        if not is_uuid_v4(thread_id):
            return _invalid_id()
        if not await self.threads.update_content(uuid.UUID(thread_id), content):
            return _thread_not_found(thread_id)
        logger.info("thread updated", extra={"thread_id": thread_id})
        return ServiceResult.success()

    async def delete_one(self, thread_id: str) -> ServiceResult[None]:
        if not is_uuid_v4(thread_id):
            return _invalid_id()
        if not await self.threads.delete(uuid.UUID(thread_id)):
            return _thread_not_found(thread_id)
        logger.info("thread deleted", extra={"thread_id": thread_id})
        return ServiceResult.success()

"""Repository for the Thread model.

Write methods commit their own unit of work: thread creation and upload
consumption are deliberately separate transactions, so the thread survives
a failing upload delete.
"""

import uuid
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func
from sqlalchemy.orm import selectinload

from threadline.models.like import Like
from threadline.models.reply import Reply
from threadline.models.thread import Thread

__all__ = ["ThreadRepository"]


class ThreadRepository:

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        *,
        id: uuid.UUID,
        user_id: uuid.UUID,
        content: str,
        image: str | None = None,
    ) -> Thread:
        thread = Thread(id=id, user_id=user_id, content=content, image=image)
        self.session.add(thread)
        await self.session.commit()
        return thread

    async def list_page(self, *, offset: int, limit: int) -> list[tuple[Thread, int]]:
        """Return ``(thread, reply_count)`` pairs, newest first.

        Owner and likes (with their owners) are eager-loaded; replies are only
        counted in SQL.
        """
        reply_count = (
            select(func.count(Reply.id))
            .where(Reply.thread_id == Thread.id)
            .correlate(Thread)
            .scalar_subquery()
        )
        stmt = (
            select(Thread, reply_count.label("reply_count"))
            .options(
                selectinload(Thread.user),
                selectinload(Thread.likes).selectinload(Like.user),
            )
            .order_by(Thread.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        res = await self.session.execute(stmt)
        return [(thread, count) for thread, count in res.all()]

    async def get_detail(self, thread_id: uuid.UUID) -> Optional[Thread]:
        """Return a thread with owner, likes and replies loaded, or None."""
        # Replies come back in store order; no ORDER BY is applied to them.
        stmt = (
            select(Thread)
            .where(Thread.id == thread_id)
            .options(
                selectinload(Thread.user),
                selectinload(Thread.likes).selectinload(Like.user),
                selectinload(Thread.replies).selectinload(Reply.user),
            )
        )
        res = await self.session.execute(stmt)
        return res.scalar_one_or_none()

    async def update_content(self, thread_id: uuid.UUID, content: str) -> int:
        """Overwrite the content of one thread; returns the affected row count."""
        res = await self.session.execute(
            update(Thread).where(Thread.id == thread_id).values(content=content)
        )
        await self.session.commit()
        return res.rowcount or 0

    async def delete(self, thread_id: uuid.UUID) -> int:
        res = await self.session.execute(delete(Thread).where(Thread.id == thread_id))
        await self.session.commit()
        return res.rowcount or 0

import uuid
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from .base import ORMBase
from .like import LikeRead
from .reply import ReplyRead
from .user import UserSummary

class ThreadCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: str
    image: str | None = None
    # Staged upload consumed by this thread; accepted as ``uploadId`` on the wire.
    upload_id: uuid.UUID | None = Field(default=None, alias="uploadId")


class ThreadUpdate(BaseModel):
    content: str


class _ThreadBase(ORMBase):
    id: uuid.UUID
    content: str
    image: str | None = None
    created_at: datetime
    updated_at: datetime
    user: UserSummary
    likes: list[LikeRead] = []


class ThreadListItem(_ThreadBase):
    """Thread as returned by the list endpoint: replies collapsed to a count."""
    replies: int


class ThreadDetail(_ThreadBase):
    replies: list[ReplyRead] = []


def list_item_from_row(thread, reply_count: int) -> ThreadListItem:
    """Build a list item from a thread whose replies were counted in SQL.

    ``thread.replies`` is never touched here: it is not loaded for list
    queries and a lazy load would fail on an async session.
    """
    return ThreadListItem(
        id=thread.id,
        content=thread.content,
        image=thread.image,
        created_at=thread.created_at,
        updated_at=thread.updated_at,
        user=UserSummary.model_validate(thread.user),
        likes=[LikeRead.model_validate(like) for like in thread.likes],
        replies=int(reply_count or 0),
    )

import uuid
from datetime import datetime
from .base import ORMBase
from .user import UserSummary

class ReplyRead(ORMBase):
    id: uuid.UUID
    content: str
    image: str | None = None
    created_at: datetime
    updated_at: datetime
    user: UserSummary

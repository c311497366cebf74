import uuid
from datetime import datetime
from .base import ORMBase
from .user import UserSummary

class LikeRead(ORMBase):
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    user: UserSummary

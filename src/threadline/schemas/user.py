import uuid
from .base import ORMBase

class UserSummary(ORMBase):
    """Author fields embedded in thread, like and reply payloads."""
    id: uuid.UUID
    username: str
    fullname: str
    profile_picture: str | None = None

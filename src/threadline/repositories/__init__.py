from .user import UserRepository
from .thread import ThreadRepository
from .upload import UploadRepository

__all__ = ["UserRepository", "ThreadRepository", "UploadRepository"]

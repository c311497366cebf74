# Re-export primary service layer entry points for convenience.
from .thread import (
    ThreadService,
    ThreadStore,
    UserStore,
    UploadStore,
)
from .health import check_db

__all__ = [
    "ThreadService",
    "ThreadStore",
    "UserStore",
    "UploadStore",
    "check_db",
]

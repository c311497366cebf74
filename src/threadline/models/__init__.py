# Import every model so Base.metadata is complete for create_all.
from .user import User
from .thread import Thread
from .like import Like
from .reply import Reply
from .upload import Upload

__all__ = ["User", "Thread", "Like", "Reply", "Upload"]

from .database import SQLiteDocumentDB
from .profile import ProfileAggregator
from .user_store import UserStore

__all__ = [
    "ProfileAggregator",
    "SQLiteDocumentDB",
    "UserStore",
]

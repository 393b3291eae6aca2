from . import chat, users

__all__ = ["chat", "users"]

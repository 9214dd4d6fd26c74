from .session import SessionManager
from .pages import AuthPages

__all__ = ["SessionManager", "AuthPages"]

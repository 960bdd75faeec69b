"""Services backing the web API."""

from .session_store import SessionStore, SessionNotFound

__all__ = ["SessionStore", "SessionNotFound"]

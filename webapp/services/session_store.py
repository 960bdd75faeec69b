"""In-memory registry of editing sessions for the web API."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple
from uuid import uuid4

from nhxedit.config import EditorConfig
from nhxedit.session import TreeSession

logger = logging.getLogger(__name__)


class SessionNotFound(KeyError):
    """Raised when a session id is unknown or has been evicted."""


class SessionStore:
    """
    Holds one TreeSession per client session id.

    Every session carries its own lock; ``checkout`` holds it for the duration
    of one request so that a session never has two edits in flight.
    """

    def __init__(self, config: Optional[EditorConfig] = None, max_sessions: int = 256):
        self.config = config or EditorConfig()
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, Tuple[TreeSession, threading.Lock]]" = (
            OrderedDict()
        )
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, text: str) -> Tuple[str, TreeSession]:
        session = TreeSession(self.config, text)
        session_id = uuid4().hex
        with self._lock:
            self._sessions[session_id] = (session, threading.Lock())
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Evicted editing session %s", evicted)
        return session_id, session

    @contextmanager
    def checkout(self, session_id: str) -> Iterator[TreeSession]:
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                raise SessionNotFound(session_id)
            self._sessions.move_to_end(session_id)
        session, lock = entry
        with lock:
            yield session

    def delete(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFound(session_id)

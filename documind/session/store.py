"""In-memory registry of document sessions."""

import logging
import os
import time
from collections.abc import Callable

from cachetools import TTLCache

from documind.agent.document_agent import get_agent_service
from documind.session.state import DocumentAnalyzer, SessionError, SessionState

logger = logging.getLogger(__name__)

# Defaults
DEFAULT_SESSION_TTL_SECONDS = 3600
DEFAULT_MAX_SESSIONS = 100


class SessionNotFoundError(SessionError):
    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id


class SessionStore:
    """Keeps SessionState objects by id while they are in use.

    A session expires after ``ttl_seconds`` without a lookup, and once
    ``max_sessions`` are held the least recently used one is dropped.

    The agent service is resolved on the first session creation so the
    store can be built before an API key is configured.
    """

    def __init__(
        self,
        agent_factory: Callable[[], DocumentAnalyzer],
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        ttl_seconds: float = DEFAULT_SESSION_TTL_SECONDS,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._agent_factory = agent_factory
        self._sessions: TTLCache[str, SessionState] = TTLCache(
            maxsize=max_sessions, ttl=ttl_seconds, timer=timer
        )

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> SessionState:
        session = SessionState(self._agent_factory())
        self._sessions[session.session_id] = session
        logger.info(f"Created session {session.session_id}")
        return session

    def get(self, session_id: str) -> SessionState:
        try:
            session = self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None
        # Re-inserting restarts the idle timer
        self._sessions[session_id] = session
        return session

    def delete(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)
        logger.info(f"Deleted session {session_id}")


# Module-level singleton instance
_session_store: SessionStore | None = None


def get_session_store() -> SessionStore:
    """Get or create the global session store."""
    global _session_store
    if _session_store is None:
        _session_store = SessionStore(
            get_agent_service,
            max_sessions=int(os.getenv("MAX_SESSIONS", str(DEFAULT_MAX_SESSIONS))),
            ttl_seconds=float(
                os.getenv("SESSION_TTL_SECONDS", str(DEFAULT_SESSION_TTL_SECONDS))
            ),
        )
    return _session_store

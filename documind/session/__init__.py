"""Session state for one loaded document and its conversation.

Responsibilities:
    - Upload -> analysis -> ready lifecycle
    - Append-only chat transcript with a guaranteed closing model message
    - Follow-up suggestions with fallback to the analysis suggestions
    - Atomic reset and fencing of replies for replaced documents
"""

from documind.session.state import (
    CHAT_ERROR_MESSAGE,
    ChatInFlightError,
    DocumentAnalyzer,
    PreferencesLockedError,
    SessionError,
    SessionNotReadyError,
    SessionState,
)
from documind.session.store import SessionNotFoundError, SessionStore, get_session_store

__all__ = [
    "CHAT_ERROR_MESSAGE",
    "ChatInFlightError",
    "DocumentAnalyzer",
    "PreferencesLockedError",
    "SessionError",
    "SessionNotFoundError",
    "SessionNotReadyError",
    "SessionState",
    "SessionStore",
    "get_session_store",
]

"""Session endpoints: preferences, upload, chat, reset.

Upload and analysis failures are session state, so they come back inside
the snapshot with status 200. Operations the session refuses map to 409,
unknown sessions to 404.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from documind.models.schemas import ChatRequest, Preferences, SessionSnapshot
from documind.session.state import SessionError, SessionState
from documind.session.store import SessionNotFoundError, SessionStore, get_session_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])

StoreDep = Annotated[SessionStore, Depends(get_session_store)]


def _get_session(session_id: str, store: StoreDep) -> SessionState:
    """Resolve a session id or fail with 404."""
    try:
        return store.get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e


SessionDep = Annotated[SessionState, Depends(_get_session)]


def _conflict(e: SessionError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post("", response_model=SessionSnapshot, status_code=status.HTTP_201_CREATED)
async def create_session(store: StoreDep) -> SessionSnapshot:
    """Start an empty session."""
    return store.create().snapshot()


@router.get("/{session_id}", response_model=SessionSnapshot)
async def get_session(session: SessionDep) -> SessionSnapshot:
    """Return the current session state."""
    return session.snapshot()


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session: SessionDep, store: StoreDep) -> None:
    """Forget a session."""
    store.delete(session.session_id)


@router.put("/{session_id}/preferences", response_model=SessionSnapshot)
async def set_preferences(preferences: Preferences, session: SessionDep) -> SessionSnapshot:
    """Set summary length and style.

    Raises:
        409: Analysis already started for this session.
    """
    try:
        session.set_preferences(preferences.length, preferences.style)
    except SessionError as e:
        raise _conflict(e) from e
    return session.snapshot()


@router.post("/{session_id}/upload", response_model=SessionSnapshot)
async def upload_document(file: UploadFile, session: SessionDep) -> SessionSnapshot:
    """Upload a PDF and run the analysis.

    Args:
        file: The PDF (multipart/form-data field ``file``).

    Returns:
        Snapshot after the analysis finished or failed. Check ``error``.
    """
    logger.info(f"Session {session.session_id}: upload {file.filename!r} ({file.content_type})")
    await session.upload(file)
    return session.snapshot()


@router.post("/{session_id}/chat", response_model=SessionSnapshot)
async def send_message(request: ChatRequest, session: SessionDep) -> SessionSnapshot:
    """Ask a question about the loaded document.

    Raises:
        409: No analyzed document yet, or a question is still being answered.
    """
    try:
        await session.send_message(request.message)
    except SessionError as e:
        raise _conflict(e) from e
    return session.snapshot()


@router.post("/{session_id}/reset", response_model=SessionSnapshot)
async def reset_session(session: SessionDep) -> SessionSnapshot:
    """Clear the document, analysis, transcript and suggestions."""
    session.reset()
    return session.snapshot()

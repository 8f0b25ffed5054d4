"""Document session state machine.

One SessionState holds the current document, its analysis, the chat
transcript, and the follow-up suggestions.

States:
    empty -> analyzing -> ready, with an independent chatting flag once ready.
    reset() returns to empty from anywhere.

All mutation happens on the event loop between awaits, so no locking is
needed. Uploads and resets bump a generation counter; a model reply that
resolves after the generation moved on belongs to a document that is no
longer loaded and is discarded.
"""

import logging
import uuid
from collections.abc import Sequence
from typing import Protocol

from documind.errors import DocuMindError
from documind.models.schemas import (
    AnalysisResult,
    ChatMessage,
    ChatReply,
    ChatRole,
    ChatTurn,
    Document,
    DocumentInfo,
    Preferences,
    SessionSnapshot,
    SessionStatus,
    SummaryLength,
    SummaryStyle,
)
from documind.parsing.pdf_upload import (
    PDFUpload,
    UploadError,
    UploadValidationError,
    read_pdf_upload,
    validate_pdf_upload,
)

logger = logging.getLogger(__name__)

CHAT_ERROR_MESSAGE = "I'm sorry, I encountered an error while answering. Please try again."
ANALYSIS_ERROR_MESSAGE = "Something went wrong during analysis."


class SessionError(DocuMindError):
    """Raised when an operation is not allowed in the current state."""

    pass


class PreferencesLockedError(SessionError):
    def __init__(self) -> None:
        super().__init__("Preferences can only be changed before analysis starts.")


class SessionNotReadyError(SessionError):
    def __init__(self) -> None:
        super().__init__("Upload and analyze a document before asking questions.")


class ChatInFlightError(SessionError):
    def __init__(self) -> None:
        super().__init__("A question is already being answered.")


class DocumentAnalyzer(Protocol):
    """What the session needs from the model layer."""

    async def analyze_pdf(
        self,
        base64_data: str,
        length: SummaryLength = ...,
        style: SummaryStyle = ...,
    ) -> AnalysisResult: ...

    async def chat_with_pdf(
        self,
        base64_data: str,
        message: str,
        history: Sequence[ChatTurn] = ...,
    ) -> ChatReply: ...


class SessionState:
    """State of one user's document session.

    Attributes:
        session_id: Unique session identifier.
        preferences: Summary length and style for the next analysis.
        document: The loaded PDF, if any.
        analysis: The analysis of the loaded PDF, once ready.
        messages: Chat transcript for the loaded PDF.
        dynamic_suggestions: Follow-ups from the last successful chat turn.
        status: Where the session is in its lifecycle.
        is_chatting: Whether a chat turn is in flight.
        error: Last upload or analysis error shown to the user.
    """

    def __init__(self, agent: DocumentAnalyzer, session_id: str | None = None) -> None:
        self.session_id: str = session_id or str(uuid.uuid4())
        self.preferences = Preferences()
        self._agent = agent
        self._generation = 0
        self._clear_document()
        self.error: str | None = None

    def _clear_document(self) -> None:
        # Document-scoped state always changes together.
        self.document: Document | None = None
        self.analysis: AnalysisResult | None = None
        self.messages: list[ChatMessage] = []
        self.dynamic_suggestions: list[str] | None = None
        self.status = SessionStatus.EMPTY
        self.is_chatting = False

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            logger.warning(f"Session {self.session_id}: discarding reply for a replaced document")
            return True
        return False

    @property
    def suggestions(self) -> list[str]:
        """Dynamic suggestions if a chat turn produced any, else the analysis ones."""
        if self.dynamic_suggestions is not None:
            return list(self.dynamic_suggestions)
        if self.analysis is not None:
            return list(self.analysis.suggested_questions)
        return []

    def set_preferences(
        self,
        length: SummaryLength | None = None,
        style: SummaryStyle | None = None,
    ) -> Preferences:
        """Change summary preferences.

        Raises:
            PreferencesLockedError: If analysis has started or finished.
        """
        if self.status is not SessionStatus.EMPTY:
            raise PreferencesLockedError()
        self.preferences = Preferences(
            length=length or self.preferences.length,
            style=style or self.preferences.style,
        )
        return self.preferences

    async def upload(self, file: PDFUpload) -> None:
        """Load a new PDF and analyze it.

        A non-PDF only sets the validation error. Anything else replaces the
        document-scoped state wholesale before the first await. Failures are
        reported through ``error`` and leave the session in ``empty``.

        Args:
            file: The uploaded file.
        """
        try:
            validate_pdf_upload(file.content_type, file.filename)
        except UploadValidationError as e:
            self.error = str(e)
            return

        self._generation += 1
        generation = self._generation
        self._clear_document()
        self.status = SessionStatus.ANALYZING
        self.error = None

        try:
            document = await read_pdf_upload(file)
        except UploadError as e:
            if not self._is_stale(generation):
                self.status = SessionStatus.EMPTY
                self.error = str(e)
            return

        if self._is_stale(generation):
            return
        self.document = document

        try:
            analysis = await self._agent.analyze_pdf(
                document.base64_data,
                self.preferences.length,
                self.preferences.style,
            )
        except Exception as e:
            if not self._is_stale(generation):
                logger.error(f"Session {self.session_id}: analysis of {document.name} failed: {e!r}")
                self.status = SessionStatus.EMPTY
                self.error = str(e) or ANALYSIS_ERROR_MESSAGE
            return

        if self._is_stale(generation):
            return
        self.analysis = analysis
        self.messages = []
        self.dynamic_suggestions = None
        self.status = SessionStatus.READY
        self.error = None
        logger.info(f"Session {self.session_id}: analysis ready for {document.name}")

    async def send_message(self, content: str) -> ChatMessage | None:
        """Ask one question about the loaded document.

        The transcript always gains the user message and one model message.
        Any failure becomes a fixed apology in the transcript and leaves the
        suggestions untouched.

        Args:
            content: The user's question.

        Returns:
            The model message appended, or None if the document was replaced
            while the turn was in flight.

        Raises:
            SessionNotReadyError: If no analyzed document is loaded.
            ChatInFlightError: If another turn is still outstanding.
        """
        if self.status is not SessionStatus.READY or self.document is None:
            raise SessionNotReadyError()
        if self.is_chatting:
            raise ChatInFlightError()

        generation = self._generation
        history = [message.to_turn() for message in self.messages]
        self.messages.append(ChatMessage(role=ChatRole.USER, content=content))
        self.is_chatting = True

        try:
            reply = await self._agent.chat_with_pdf(self.document.base64_data, content, history)
        except Exception as e:
            if self._is_stale(generation):
                return None
            logger.error(f"Session {self.session_id}: chat turn failed: {e}")
            answer = ChatMessage(role=ChatRole.MODEL, content=CHAT_ERROR_MESSAGE)
        else:
            if self._is_stale(generation):
                return None
            answer = ChatMessage(role=ChatRole.MODEL, content=reply.answer)
            self.dynamic_suggestions = list(reply.follow_up_questions)

        self.messages.append(answer)
        self.is_chatting = False
        return answer

    def reset(self) -> None:
        """Drop the document and everything scoped to it."""
        self._generation += 1
        self._clear_document()
        self.error = None
        logger.info(f"Session {self.session_id}: reset")

    def snapshot(self) -> SessionSnapshot:
        """Read model of the session for the presentation layer."""
        document = None
        if self.document is not None:
            document = DocumentInfo(
                name=self.document.name,
                size=self.document.size,
                pages=self.document.pages,
            )
        return SessionSnapshot(
            session_id=self.session_id,
            status=self.status,
            is_chatting=self.is_chatting,
            error=self.error,
            preferences=self.preferences,
            document=document,
            analysis=self.analysis,
            messages=list(self.messages),
            suggestions=self.suggestions,
            suggestions_are_dynamic=self.dynamic_suggestions is not None,
        )

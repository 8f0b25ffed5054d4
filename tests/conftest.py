"""Pytest fixtures and shared test configuration.

Fixtures:
    - pdf_bytes: A one-page PDF generated with pypdf
    - analysis_result / chat_reply: Canned model replies
    - fake_agent: In-memory stand-in for DocumentAgentService
    - session: SessionState wired to fake_agent
    - async_client: HTTPX client for API testing against a fresh store
"""

import asyncio
import io
from collections.abc import AsyncGenerator, Sequence
from dataclasses import dataclass, field

import pytest
from httpx import ASGITransport, AsyncClient
from pypdf import PdfWriter

from documind.api.app import create_app
from documind.models.schemas import (
    AnalysisResult,
    ChatReply,
    ChatTurn,
    SummaryLength,
    SummaryStyle,
)
from documind.session.state import SessionState
from documind.session.store import SessionStore, get_session_store

ANALYSIS_PAYLOAD = {
    "summary": "A services agreement between Acme and Globex.",
    "keyPoints": ["Term is 24 months", "Either party may terminate with notice"],
    "entities": [
        {"name": "Acme Corp", "type": "Organization", "significance": "Service provider"},
        {"name": "Globex", "type": "Organization", "significance": "Client"},
    ],
    "sentiment": {"score": 55, "label": "Neutral", "description": "Formal contractual tone."},
    "complexity": "Moderate",
    "suggestedQuestions": [
        "What are the payment terms?",
        "Who owns the deliverables?",
        "How can the contract be renewed?",
    ],
}

CHAT_PAYLOAD = {
    "answer": "Either party may terminate with **30 days** written notice.",
    "followUpQuestions": [
        "Is there a termination fee?",
        "What counts as written notice?",
        "What happens to unpaid invoices on termination?",
    ],
}


@dataclass
class FakeUpload:
    """Minimal stand-in for fastapi.UploadFile."""

    content: bytes
    filename: str | None = "report.pdf"
    content_type: str | None = "application/pdf"
    read_error: Exception | None = None

    async def read(self) -> bytes:
        if self.read_error is not None:
            raise self.read_error
        return self.content


@dataclass
class FakeAgentService:
    """Records calls and returns canned replies.

    Set ``analysis_error`` / ``chat_error`` to make the next calls fail, or
    ``gate`` to hold replies until the event is set.
    """

    analysis: AnalysisResult
    reply: ChatReply
    analysis_error: Exception | None = None
    chat_error: Exception | None = None
    gate: asyncio.Event | None = None
    analysis_calls: list[tuple[str, SummaryLength, SummaryStyle]] = field(default_factory=list)
    chat_calls: list[tuple[str, str, list[ChatTurn]]] = field(default_factory=list)

    async def analyze_pdf(
        self,
        base64_data: str,
        length: SummaryLength = SummaryLength.BRIEF,
        style: SummaryStyle = SummaryStyle.PARAGRAPH,
    ) -> AnalysisResult:
        self.analysis_calls.append((base64_data, length, style))
        if self.gate is not None:
            await self.gate.wait()
        if self.analysis_error is not None:
            raise self.analysis_error
        return self.analysis

    async def chat_with_pdf(
        self,
        base64_data: str,
        message: str,
        history: Sequence[ChatTurn] = (),
    ) -> ChatReply:
        self.chat_calls.append((base64_data, message, list(history)))
        if self.gate is not None:
            await self.gate.wait()
        if self.chat_error is not None:
            raise self.chat_error
        return self.reply


@pytest.fixture
def pdf_bytes() -> bytes:
    """Return a valid one-page PDF."""
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def analysis_result() -> AnalysisResult:
    return AnalysisResult.model_validate(ANALYSIS_PAYLOAD)


@pytest.fixture
def chat_reply() -> ChatReply:
    return ChatReply.model_validate(CHAT_PAYLOAD)


@pytest.fixture
def fake_agent(analysis_result: AnalysisResult, chat_reply: ChatReply) -> FakeAgentService:
    return FakeAgentService(analysis=analysis_result, reply=chat_reply)


@pytest.fixture
def session(fake_agent: FakeAgentService) -> SessionState:
    return SessionState(fake_agent, session_id="test-session-12345")


@pytest.fixture
def pdf_upload(pdf_bytes: bytes) -> FakeUpload:
    return FakeUpload(content=pdf_bytes)


@pytest.fixture
async def ready_session(session: SessionState, pdf_upload: FakeUpload) -> SessionState:
    """Session with an analyzed document loaded."""
    await session.upload(pdf_upload)
    return session


@pytest.fixture
def session_store(fake_agent: FakeAgentService) -> SessionStore:
    return SessionStore(lambda: fake_agent)


@pytest.fixture
async def async_client(session_store: SessionStore) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient bound to an app whose sessions use the fake agent.
    """
    app = create_app()
    app.dependency_overrides[get_session_store] = lambda: session_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

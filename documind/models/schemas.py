from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SummaryLength(str, Enum):
    """How long the analysis summary should be."""

    BRIEF = "brief"
    DETAILED = "detailed"


class SummaryStyle(str, Enum):
    """How the analysis summary should be laid out."""

    PARAGRAPH = "paragraph"
    BULLETS = "bullets"


class ChatRole(str, Enum):
    """Speaker of a transcript entry."""

    USER = "user"
    MODEL = "model"


class SessionStatus(str, Enum):
    """Lifecycle of a document session."""

    EMPTY = "empty"
    ANALYZING = "analyzing"
    READY = "ready"


class Entity(BaseModel):
    """A named entity found in the document."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    significance: str


class Sentiment(BaseModel):
    """Overall tone of the document.

    Attributes:
        score: 0 (very negative) to 100 (very positive).
        label: Short label such as "Neutral".
        description: One or two sentences explaining the score.
    """

    model_config = ConfigDict(frozen=True)

    score: float = Field(
        ...,
        ge=0,
        le=100,
        description="Sentiment score from 0 (very negative) to 100 (very positive).",
    )
    label: str
    description: str


class AnalysisResult(BaseModel):
    """Structured report produced once per document.

    Field names on the wire are camelCase; attributes are snake_case.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    summary: str = Field(
        ...,
        description=(
            "The requested executive summary of the document based on the "
            "user's preferred length and style."
        ),
    )
    key_points: list[str] = Field(
        ...,
        alias="keyPoints",
        description="List of 5-8 most critical points found in the document.",
    )
    entities: list[Entity]
    sentiment: Sentiment
    complexity: str = Field(..., description="Technical complexity level of the document.")
    suggested_questions: list[str] = Field(
        ...,
        alias="suggestedQuestions",
        description="3 intelligent follow-up questions the user might want to ask.",
    )


class ChatReply(BaseModel):
    """Answer to one chat question plus follow-up suggestions."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    answer: str = Field(
        ...,
        description="The direct answer to the user's question based on the PDF content.",
    )
    follow_up_questions: list[str] = Field(
        ...,
        alias="followUpQuestions",
        description=(
            "3 intelligent, context-aware follow-up questions related specifically "
            "to the user's last question and the provided answer."
        ),
    )


class ChatTurn(BaseModel):
    """A transcript entry without its timestamp, as sent to the model."""

    role: ChatRole
    content: str


class ChatMessage(ChatTurn):
    """A single entry in the session transcript.

    Attributes:
        role: Who said it (user or model).
        content: The message text (Markdown for model answers).
        timestamp: When the entry was appended.
    """

    timestamp: datetime = Field(default_factory=datetime.now)

    def to_turn(self) -> ChatTurn:
        return ChatTurn(role=self.role, content=self.content)


class Document(BaseModel):
    """The currently loaded PDF.

    Attributes:
        name: Original filename.
        content_type: MIME type reported by the client.
        size: Size in bytes.
        base64_data: Standard base64 of the raw file bytes.
        pages: Page count when pypdf could read the file.
    """

    name: str
    content_type: str
    size: int = Field(ge=0)
    base64_data: str = Field(repr=False)
    pages: int | None = None


class Preferences(BaseModel):
    """Summary preferences, fixed once analysis starts."""

    length: SummaryLength = SummaryLength.BRIEF
    style: SummaryStyle = SummaryStyle.PARAGRAPH


# === API payloads ===


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        message: The user's question.
    """

    message: str = Field(..., min_length=1)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class DocumentInfo(BaseModel):
    """Document metadata returned to clients (no payload)."""

    name: str
    size: int
    pages: int | None = None


class SessionSnapshot(BaseModel):
    """Everything the presentation layer needs to render a session."""

    session_id: str
    status: SessionStatus
    is_chatting: bool
    error: str | None = None
    preferences: Preferences
    document: DocumentInfo | None = None
    analysis: AnalysisResult | None = None
    messages: list[ChatMessage] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    suggestions_are_dynamic: bool = False

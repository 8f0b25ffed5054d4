"""Pydantic models for the document session and its API.

Provides type safety, validation of model output, and automatic OpenAPI
documentation.

Models:
    - AnalysisResult: Structured report for one document
    - ChatReply: Answer plus follow-up questions for one chat turn
    - ChatMessage: Transcript entry
    - Document: The loaded PDF and its base64 payload
    - SessionSnapshot: Read model returned by the API
"""

from documind.models.schemas import (
    AnalysisResult,
    ChatMessage,
    ChatReply,
    ChatRequest,
    ChatRole,
    ChatTurn,
    Document,
    DocumentInfo,
    Entity,
    Preferences,
    Sentiment,
    SessionSnapshot,
    SessionStatus,
    SummaryLength,
    SummaryStyle,
)

__all__ = [
    "AnalysisResult",
    "ChatMessage",
    "ChatReply",
    "ChatRequest",
    "ChatRole",
    "ChatTurn",
    "Document",
    "DocumentInfo",
    "Entity",
    "Preferences",
    "Sentiment",
    "SessionSnapshot",
    "SessionStatus",
    "SummaryLength",
    "SummaryStyle",
]

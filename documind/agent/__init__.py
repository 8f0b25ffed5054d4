"""Agno agents for document intelligence.

Responsibilities:
    - Gemini model setup from environment configuration
    - Structured analysis of an uploaded PDF
    - Follow-up question answering over the same PDF
    - Validation of schema-constrained JSON replies

Maintains clean separation from the HTTP layer and from session state.
"""

from documind.agent.config import AgentConfig, get_agent_config
from documind.agent.document_agent import (
    AnalysisMalformedError,
    ChatMalformedError,
    DocumentAgentService,
    ModelResponseError,
    ModelServiceError,
    get_agent_service,
)

__all__ = [
    "AgentConfig",
    "AnalysisMalformedError",
    "ChatMalformedError",
    "DocumentAgentService",
    "ModelResponseError",
    "ModelServiceError",
    "get_agent_config",
    "get_agent_service",
]

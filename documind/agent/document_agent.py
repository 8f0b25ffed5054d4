"""Agno agents for document analysis and document chat.

Both requests send the whole PDF inline to Gemini and ask for JSON that
matches a Pydantic schema. Agno passes the schema to Gemini as the response
schema; the reply is still validated here because JSON mode is best effort.

Architecture Decisions:

1. **Two agents** - Analysis and chat need different output schemas and
   instructions. Building each once avoids re-creating the model client on
   every request.

2. **No agent storage** - The session owns the transcript. Earlier turns are
   rendered into the chat prompt, so the agents stay stateless and a reset
   only needs to clear the session.

3. **Typed failures** - Transport problems raise ModelServiceError, replies
   that do not match the schema raise AnalysisMalformedError or
   ChatMalformedError. Callers decide how each is surfaced.
"""

import base64
import logging
from collections.abc import Sequence
from typing import Any, TypeVar

from agno.agent import Agent
from agno.media import File
from agno.models.google import Gemini
from pydantic import BaseModel, ValidationError

from documind.agent.config import AgentConfig, get_agent_config
from documind.agent.prompts import (
    ANALYSIS_DESCRIPTION,
    CHAT_SYSTEM_INSTRUCTION,
    build_analysis_prompt,
    build_chat_prompt,
)
from documind.errors import DocuMindError
from documind.models.schemas import (
    AnalysisResult,
    ChatReply,
    ChatTurn,
    SummaryLength,
    SummaryStyle,
)
from documind.parsing.pdf_upload import PDF_MIME_TYPE

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class ModelServiceError(DocuMindError):
    """Raised when the model request itself fails."""

    pass


class ModelResponseError(DocuMindError):
    """Raised when the model reply does not match the expected schema."""

    pass


class AnalysisMalformedError(ModelResponseError):
    def __init__(self, message: str = "Analysis failed. The AI response was malformed.") -> None:
        super().__init__(message)


class ChatMalformedError(ModelResponseError):
    def __init__(self, message: str = "Chat response malformed.") -> None:
        super().__init__(message)


def _pdf_file(base64_data: str) -> File:
    return File(content=base64.b64decode(base64_data), mime_type=PDF_MIME_TYPE)


def _is_error_run(response: Any) -> bool:
    status = getattr(response, "status", None)
    return str(getattr(status, "value", status)).lower() == "error"


def _parse_reply(
    content: Any,
    schema: type[SchemaT],
    error: type[ModelResponseError],
) -> SchemaT:
    """Validate the agent's content against schema.

    Agno hands back a schema instance when it parsed the reply itself,
    otherwise the raw text.
    """
    if isinstance(content, schema):
        return content
    try:
        if isinstance(content, str | bytes):
            return schema.model_validate_json(content or "{}")
        if isinstance(content, BaseModel):
            content = content.model_dump(by_alias=True)
        return schema.model_validate(content)
    except ValidationError as e:
        logger.error(f"Model reply does not match {schema.__name__}: {e}")
        raise error() from e


class DocumentAgentService:
    """Service wrapping the Gemini-backed analysis and chat agents."""

    def __init__(self, config: AgentConfig | None = None) -> None:
        """Initialize the agent service.

        Args:
            config: Optional agent configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_agent_config()
        self._analysis_agent = self._create_agent(
            output_schema=AnalysisResult,
            description=ANALYSIS_DESCRIPTION,
        )
        self._chat_agent = self._create_agent(
            output_schema=ChatReply,
            instructions=CHAT_SYSTEM_INSTRUCTION,
            markdown=True,
        )

    def _create_model(self) -> Gemini:
        return Gemini(
            id=self._config.model_name,
            api_key=self._config.api_key,
            temperature=self._config.temperature,
            max_output_tokens=self._config.max_output_tokens,
        )

    def _create_agent(self, output_schema: type[BaseModel], **kwargs: Any) -> Agent:
        """Create an Agno agent that answers in output_schema JSON.

        Args:
            output_schema: Pydantic model used as Gemini's response schema.
            **kwargs: Extra Agent options (description, instructions, markdown).

        Returns:
            Configured Agent.
        """
        return Agent(
            model=self._create_model(),
            output_schema=output_schema,
            **kwargs,
        )

    async def _run(self, agent: Agent, prompt: str, base64_data: str) -> Any:
        try:
            response = await agent.arun(prompt, files=[_pdf_file(base64_data)])
        except Exception as e:
            logger.error(f"Model request failed: {e}")
            raise ModelServiceError(str(e) or "Model request failed.") from e

        if _is_error_run(response):
            logger.error(f"Model run ended with an error: {response.content}")
            raise ModelServiceError(str(response.content or "Model request failed."))
        return response.content

    async def analyze_pdf(
        self,
        base64_data: str,
        length: SummaryLength = SummaryLength.BRIEF,
        style: SummaryStyle = SummaryStyle.PARAGRAPH,
    ) -> AnalysisResult:
        """Request the structured analysis of a PDF.

        Args:
            base64_data: Base64 of the PDF bytes.
            length: Preferred summary length.
            style: Preferred summary layout.

        Returns:
            The validated AnalysisResult.

        Raises:
            ModelServiceError: If the request fails.
            AnalysisMalformedError: If the reply is not a valid AnalysisResult.
        """
        logger.info(f"Requesting analysis (length={length.value}, style={style.value})")
        content = await self._run(
            self._analysis_agent,
            build_analysis_prompt(length, style),
            base64_data,
        )
        return _parse_reply(content, AnalysisResult, AnalysisMalformedError)

    async def chat_with_pdf(
        self,
        base64_data: str,
        message: str,
        history: Sequence[ChatTurn] = (),
    ) -> ChatReply:
        """Answer one question about a PDF.

        The full document is sent again on every turn.

        Args:
            base64_data: Base64 of the PDF bytes.
            message: The user's question, quoted verbatim in the prompt.
            history: Earlier turns without timestamps.

        Returns:
            The validated ChatReply.

        Raises:
            ModelServiceError: If the request fails.
            ChatMalformedError: If the reply is not a valid ChatReply.
        """
        logger.info(f"Requesting chat answer ({len(history)} prior turns)")
        content = await self._run(
            self._chat_agent,
            build_chat_prompt(message, history),
            base64_data,
        )
        return _parse_reply(content, ChatReply, ChatMalformedError)


# Module-level singleton instance
_agent_service: DocumentAgentService | None = None


def get_agent_service() -> DocumentAgentService:
    """Get or create the global agent service.

    Returns:
        The DocumentAgentService instance.
    """
    global _agent_service
    if _agent_service is None:
        _agent_service = DocumentAgentService()
    return _agent_service

"""Agent configuration with environment variable loading.

Pydantic-based configuration for the Gemini document agents.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


def _api_key_from_env() -> str:
    return os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY", "")


class AgentConfig(BaseModel):
    """Configuration for the document analysis and chat agents.

    Attributes:
        api_key: Gemini API key.
        model_name: Gemini model identifier.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        max_output_tokens: Maximum tokens in a generated response.
    """

    api_key: str = Field(
        default_factory=_api_key_from_env,
        description="API key for the Gemini API",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-3-flash-preview"),
        description="Model to use",
    )
    temperature: float = Field(
        default=0.2,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_output_tokens: int = Field(
        default=8192,
        ge=1,
        le=65536,
        description="Maximum tokens in generated response",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set GEMINI_API_KEY in .env")
        return v.strip()


def get_agent_config() -> AgentConfig:
    """Create agent configuration from environment.

    Returns:
        Configured AgentConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return AgentConfig()

"""Unit tests for the Pydantic data model."""

import pytest
import pytest_check as check
from pydantic import ValidationError

from documind.models.schemas import (
    AnalysisResult,
    ChatMessage,
    ChatReply,
    ChatRequest,
    ChatRole,
)
from tests.conftest import ANALYSIS_PAYLOAD, CHAT_PAYLOAD


class TestAnalysisResult:
    """Tests for AnalysisResult validation."""

    def test_reads_camel_case_fields(self) -> None:
        """Wire names map onto snake_case attributes."""
        result = AnalysisResult.model_validate(ANALYSIS_PAYLOAD)

        check.equal(result.key_points[0], "Term is 24 months")
        check.equal(len(result.suggested_questions), 3)
        check.equal(result.entities[1].name, "Globex")
        check.equal(result.sentiment.score, 55)

    def test_dumps_camel_case_fields(self) -> None:
        """Serialising by alias restores the wire names."""
        data = AnalysisResult.model_validate(ANALYSIS_PAYLOAD).model_dump(by_alias=True)

        check.is_in("keyPoints", data)
        check.is_in("suggestedQuestions", data)

    def test_rejects_missing_required_field(self) -> None:
        """Every top-level field is required."""
        payload = {k: v for k, v in ANALYSIS_PAYLOAD.items() if k != "complexity"}

        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(payload)

    def test_rejects_entity_without_significance(self) -> None:
        """Entity fields are all required."""
        payload = dict(ANALYSIS_PAYLOAD, entities=[{"name": "Acme", "type": "Org"}])

        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(payload)

    @pytest.mark.parametrize("score", [-1, 100.5])
    def test_rejects_sentiment_out_of_range(self, score: float) -> None:
        """Sentiment score must stay within 0-100."""
        payload = dict(
            ANALYSIS_PAYLOAD,
            sentiment={"score": score, "label": "x", "description": "y"},
        )

        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(payload)

    def test_is_immutable(self) -> None:
        """An analysis cannot be modified once produced."""
        result = AnalysisResult.model_validate(ANALYSIS_PAYLOAD)

        with pytest.raises(ValidationError):
            result.summary = "changed"

    def test_schema_uses_wire_names(self) -> None:
        """The JSON schema handed to the model uses camelCase names."""
        schema = AnalysisResult.model_json_schema()

        check.equal(
            set(schema["required"]),
            {"summary", "keyPoints", "entities", "sentiment", "complexity", "suggestedQuestions"},
        )


class TestChatReply:
    """Tests for ChatReply validation."""

    def test_parses_reply(self) -> None:
        reply = ChatReply.model_validate(CHAT_PAYLOAD)

        check.is_in("30 days", reply.answer)
        check.equal(len(reply.follow_up_questions), 3)

    def test_follow_up_count_not_enforced(self) -> None:
        """Three follow-ups are expected but any list of strings is accepted."""
        reply = ChatReply.model_validate({"answer": "Yes.", "followUpQuestions": ["Why?"]})

        check.equal(reply.follow_up_questions, ["Why?"])

    def test_rejects_missing_answer(self) -> None:
        with pytest.raises(ValidationError):
            ChatReply.model_validate({"followUpQuestions": []})


class TestChatMessage:
    """Tests for transcript entries."""

    def test_to_turn_drops_timestamp(self) -> None:
        message = ChatMessage(role=ChatRole.USER, content="Hello")
        turn = message.to_turn()

        check.equal(turn.model_dump(), {"role": ChatRole.USER, "content": "Hello"})

    def test_timestamp_defaults_to_now(self) -> None:
        message = ChatMessage(role=ChatRole.MODEL, content="Hi")

        check.is_not_none(message.timestamp)


class TestChatRequest:
    """Tests for ChatRequest validation."""

    def test_strips_whitespace(self) -> None:
        check.equal(ChatRequest(message="  What?  ").message, "What?")

    def test_rejects_whitespace_only(self) -> None:
        with pytest.raises(ValidationError):
            ChatRequest(message="   ")

"""Prompt text for the analysis and chat requests."""

from collections.abc import Sequence

from documind.models.schemas import ChatRole, ChatTurn, SummaryLength, SummaryStyle

LENGTH_INSTRUCTIONS = {
    SummaryLength.BRIEF: "Keep the summary concise (2-3 sentences).",
    SummaryLength.DETAILED: (
        "Provide a comprehensive, detailed executive summary (1-2 paragraphs)."
    ),
}

STYLE_INSTRUCTIONS = {
    SummaryStyle.BULLETS: (
        "Format the summary as a structured bulleted list within the summary string."
    ),
    SummaryStyle.PARAGRAPH: "Format the summary as a cohesive narrative paragraph.",
}

ANALYSIS_DESCRIPTION = "You analyze PDF documents and report on them as structured JSON."

CHAT_SYSTEM_INSTRUCTION = (
    "You are a specialized document analysis assistant. "
    "Always return your response in JSON format. "
    "The 'answer' should be in clear Markdown format if it contains lists or tables. "
    "The 'followUpQuestions' should be a list of 3 strings."
)

_SPEAKERS = {ChatRole.USER: "User", ChatRole.MODEL: "Assistant"}


def build_analysis_prompt(length: SummaryLength, style: SummaryStyle) -> str:
    """Instruction sent alongside the PDF for the one-time analysis."""
    return (
        "Analyze this document thoroughly and return a structured JSON report.\n"
        f"For the 'summary' field: {LENGTH_INSTRUCTIONS[length]} {STYLE_INSTRUCTIONS[style]}\n"
        "Focus on objective facts, key themes, and important entities.\n"
        "Be critical if the content is technical or dense."
    )


def format_history(history: Sequence[ChatTurn]) -> str:
    """Render earlier turns as a plain transcript."""
    return "\n".join(f"{_SPEAKERS[turn.role]}: {turn.content}" for turn in history)


def build_chat_prompt(message: str, history: Sequence[ChatTurn] = ()) -> str:
    """Instruction for one chat turn, quoting the question verbatim."""
    prompt = (
        f'Based on the attached PDF, answer this question: "{message}". '
        "Then, provide 3 follow-up questions that would help me explore this "
        "specific topic deeper."
    )
    if history:
        prompt = f"Conversation so far:\n{format_history(history)}\n\n{prompt}"
    return prompt

"""DocuMind - structured PDF analysis and document chat on Gemini.

Combines FastAPI for the HTTP surface, Agno for model orchestration,
and Pydantic for validating the model's JSON replies.

Components:
    - api: HTTP endpoints for sessions
    - agent: Gemini agents for analysis and chat
    - parsing: PDF upload validation and encoding
    - session: Per-user document session state
    - models: Data model and request/response schemas
"""

__version__ = "0.1.0"

"""HTTP surface for document sessions.

Endpoints:
    - GET /health: Service health status
    - POST /sessions: Create a session
    - GET /sessions/{id}: Session snapshot
    - PUT /sessions/{id}/preferences: Summary length and style
    - POST /sessions/{id}/upload: PDF upload and analysis
    - POST /sessions/{id}/chat: Follow-up question
    - POST /sessions/{id}/reset: Clear the session
    - DELETE /sessions/{id}: Drop the session
"""

from documind.api.app import app, create_app

__all__ = ["app", "create_app"]

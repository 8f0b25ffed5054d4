"""Test package for DocuMind.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP workflow tests against the FastAPI app

The model is replaced by an in-memory fake except in the live tests, which
are skipped unless GEMINI_API_KEY is set. Uses pytest with pytest-check for
soft assertions.
"""

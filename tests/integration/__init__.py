"""Integration tests for the HTTP API.

Drives the FastAPI app through httpx with ASGITransport. The live Gemini
tests need GEMINI_API_KEY and network access.
"""

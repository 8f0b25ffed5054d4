"""Unit tests for individual components in isolation.

Coverage:
    - models/: Pydantic validation of model replies
    - parsing/: Upload validation and encoding
    - agent/: Configuration, prompts and reply parsing
    - session/: State machine transitions
"""

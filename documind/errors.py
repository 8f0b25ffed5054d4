"""Base exception for the package.

Each component defines its own subclasses next to the code that raises them.
"""


class DocuMindError(Exception):
    """Base class for all DocuMind errors."""

    pass

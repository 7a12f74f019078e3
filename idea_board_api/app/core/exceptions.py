"""
Domain exceptions raised by the store and service layers.

Endpoints translate these into HTTP responses: ``ValidationError``
becomes 400, ``NotFoundError`` 404 and ``StoreError`` 500.  The
message of a ``StoreError`` is meant for logs only and is never sent
to clients.
"""


class IdeaBoardError(Exception):
    """Base class for all idea board errors."""


class ValidationError(IdeaBoardError):
    """Request data is missing, empty or too long."""


class NotFoundError(IdeaBoardError):
    """No idea exists with the requested identifier."""

    def __init__(self, idea_id: str) -> None:
        super().__init__(f"Idea {idea_id} not found")
        self.idea_id = idea_id


class StoreError(IdeaBoardError):
    """The underlying storage failed (connection loss, SQL error, ...)."""

"""
Pydantic models for idea data.

``IdeaCreate`` is the request body for submitting an idea and
``IdeaRead`` is the representation returned by the API and by every
store implementation.  ``text`` on ``IdeaCreate`` is optional at the
schema level so that a missing value produces the same 400 message as
an empty one; length rules live in ``IdeaService.validate_text``.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

MAX_IDEA_LENGTH = 280


class IdeaCreate(BaseModel):
    """Schema for submitting a new idea."""

    text: Optional[str] = Field(None, examples=["Build a thing"])


class IdeaRead(BaseModel):
    """Schema for reading an idea from the API."""

    id: str
    text: str
    upvotes: int = Field(0, ge=0)
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }


class HealthRead(BaseModel):
    status: str
    message: str


class ErrorRead(BaseModel):
    """Body of every error response."""

    error: str

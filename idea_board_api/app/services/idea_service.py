"""
Business logic for ideas.

``IdeaService`` sits between the HTTP handlers and the injected
``IdeaStore``.  It enforces the text rules for new ideas on the server
side regardless of any client‑side check, and logs each mutation.
"""

import logging
from typing import List, Optional

from ..core.exceptions import ValidationError
from ..schemas.idea import MAX_IDEA_LENGTH, IdeaCreate, IdeaRead
from .idea_store import IdeaStore

logger = logging.getLogger(__name__)

TEXT_REQUIRED = "Idea text is required"
TEXT_TOO_LONG = f"Idea text must be {MAX_IDEA_LENGTH} characters or less"


class IdeaService:
    """Service for listing, submitting and upvoting ideas."""

    def __init__(self, store: IdeaStore) -> None:
        self.store = store

    @staticmethod
    def validate_text(text: Optional[str]) -> str:
        """Return the trimmed idea text or raise ``ValidationError``.

        Emptiness is checked on the trimmed text while the length limit
        applies to the text as submitted, so 281 characters including
        surrounding whitespace are rejected even though the trimmed text
        would fit.
        """
        if text is None or not text.strip():
            raise ValidationError(TEXT_REQUIRED)
        if len(text) > MAX_IDEA_LENGTH:
            raise ValidationError(TEXT_TOO_LONG)
        return text.strip()

    async def list_ideas(self) -> List[IdeaRead]:
        return self.store.list()

    async def create_idea(self, data: IdeaCreate) -> IdeaRead:
        text = self.validate_text(data.text)
        idea = self.store.create(text)
        logger.info("Idea %s submitted (%d chars)", idea.id, len(idea.text))
        return idea

    async def upvote_idea(self, idea_id: str) -> IdeaRead:
        idea = self.store.upvote(idea_id)
        logger.info("Idea %s upvoted, now %d", idea.id, idea.upvotes)
        return idea

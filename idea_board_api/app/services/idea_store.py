"""
Store abstraction for ideas and its in‑memory implementation.

``IdeaStore`` defines the capability set every backend offers:
``list``, ``create`` and ``upvote`` (plus ``init`` and ``ping`` for
lifecycle and health).  The API receives a store instance at
construction time, so the in‑memory, SQLite and PostgreSQL variants
are interchangeable and tests never share process‑wide state.

State held by ``MemoryIdeaStore`` is lost when the process exits.
"""

from __future__ import annotations

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, List, Optional

from ..core.exceptions import NotFoundError
from ..schemas.idea import IdeaRead

if TYPE_CHECKING:
    from ..core.config import Settings

logger = logging.getLogger(__name__)


DEMO_IDEAS = [
    (
        "Create an AI-powered personal assistant that learns from your daily "
        "routines and proactively suggests optimizations.",
        12,
        timedelta(0),
    ),
    (
        "Build a platform that connects local farmers directly with consumers, "
        "eliminating middlemen and ensuring fair prices.",
        8,
        timedelta(hours=1),
    ),
    (
        "Develop a smart waste management system that uses IoT sensors to optimize "
        "garbage collection routes and reduce environmental impact.",
        15,
        timedelta(hours=2),
    ),
]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def rank_ideas(ideas: List[IdeaRead]) -> List[IdeaRead]:
    """Order ideas by upvotes, then by creation time, newest first.

    ``sorted`` is stable with ``reverse=True``, so ideas with equal keys
    keep their relative order.
    """
    return sorted(ideas, key=lambda idea: (idea.upvotes, idea.created_at), reverse=True)


class IdeaStore(ABC):
    """Persistence capability shared by all idea stores."""

    def init(self) -> None:
        """Prepare the backing storage.  Called once on application startup."""

    def ping(self) -> bool:
        """Return ``True`` if the backing storage is reachable."""
        return True

    @abstractmethod
    def list(self) -> List[IdeaRead]:
        """Return every idea ranked by upvotes then ``created_at`` (both descending)."""

    @abstractmethod
    def create(self, text: str) -> IdeaRead:
        """Persist a new idea with zero upvotes.

        ``text`` must already be trimmed and length‑checked by the caller.
        """

    @abstractmethod
    def upvote(self, idea_id: str) -> IdeaRead:
        """Increment the idea's upvotes by one and return the updated record.

        Raises ``NotFoundError`` if no idea has this identifier.
        """


class MemoryIdeaStore(IdeaStore):
    """Ephemeral store keeping ideas in a list, newest first."""

    def __init__(self, ideas: Optional[List[IdeaRead]] = None) -> None:
        self._ideas: List[IdeaRead] = list(ideas or [])
        self._lock = threading.Lock()

    @classmethod
    def with_demo_ideas(cls) -> "MemoryIdeaStore":
        now = utcnow()
        ideas = [
            IdeaRead(id=str(uuid.uuid4()), text=text, upvotes=upvotes, created_at=now - age)
            for text, upvotes, age in DEMO_IDEAS
        ]
        logger.info("Loaded %d demo ideas", len(ideas))
        return cls(ideas)

    def list(self) -> List[IdeaRead]:
        with self._lock:
            return rank_ideas(self._ideas)

    def create(self, text: str) -> IdeaRead:
        idea = IdeaRead(id=str(uuid.uuid4()), text=text, upvotes=0, created_at=utcnow())
        with self._lock:
            self._ideas.insert(0, idea)
        return idea

    def upvote(self, idea_id: str) -> IdeaRead:
        with self._lock:
            for index, idea in enumerate(self._ideas):
                if idea.id == idea_id:
                    updated = idea.model_copy(update={"upvotes": idea.upvotes + 1})
                    self._ideas[index] = updated
                    return updated
        raise NotFoundError(idea_id)

    def __len__(self) -> int:
        return len(self._ideas)


def build_store(config: "Settings") -> IdeaStore:
    """Instantiate the store selected by ``config.idea_store``."""
    kind = config.idea_store.strip().lower()
    if kind == "memory":
        if config.seed_demo_ideas:
            return MemoryIdeaStore.with_demo_ideas()
        return MemoryIdeaStore()
    if kind == "sqlite":
        from .sql_store import SQLiteIdeaStore

        return SQLiteIdeaStore(config.database_url)
    if kind == "postgres":
        from .sql_store import PostgresIdeaStore

        return PostgresIdeaStore(config)
    raise ValueError(f"Unknown idea store {config.idea_store!r}; expected memory, sqlite or postgres")

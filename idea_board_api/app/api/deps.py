"""
FastAPI dependencies shared by the endpoint modules.

The store is created once by ``create_app`` and kept on
``app.state``; handlers receive it (wrapped in an ``IdeaService``)
through these dependencies instead of importing a global.
"""

from fastapi import Depends, Request

from ..services.idea_service import IdeaService
from ..services.idea_store import IdeaStore


def get_store(request: Request) -> IdeaStore:
    return request.app.state.store


def get_idea_service(store: IdeaStore = Depends(get_store)) -> IdeaService:
    return IdeaService(store)

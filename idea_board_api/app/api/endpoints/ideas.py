"""
Idea endpoints.

These routes list ideas by popularity, accept new submissions and
record upvotes.  Store failures are logged here with full context and
answered with a generic message; the ``error`` body never carries
driver or traceback details.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status

from idea_board_api.app.api.deps import get_idea_service
from idea_board_api.app.core.exceptions import NotFoundError, StoreError, ValidationError
from idea_board_api.app.schemas.idea import ErrorRead, IdeaCreate, IdeaRead
from idea_board_api.app.services.idea_service import IdeaService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=List[IdeaRead],
    responses={500: {"model": ErrorRead}},
)
async def list_ideas(service: IdeaService = Depends(get_idea_service)) -> List[IdeaRead]:
    """Return all ideas, most upvoted first, newest first among equals."""
    try:
        return await service.list_ideas()
    except StoreError as e:
        logger.error("Error fetching ideas: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch ideas"
        ) from e


@router.post(
    "",
    response_model=IdeaRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorRead}, 500: {"model": ErrorRead}},
)
async def create_idea(
    idea_in: Optional[IdeaCreate] = Body(None),
    service: IdeaService = Depends(get_idea_service),
) -> IdeaRead:
    """Submit a new idea.

    The text must be non‑empty after trimming and at most 280
    characters; it is stored trimmed with zero upvotes.
    """
    try:
        return await service.create_idea(idea_in or IdeaCreate())
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except StoreError as e:
        logger.error("Error creating idea: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create idea"
        ) from e


@router.post(
    "/{idea_id}/upvote",
    response_model=IdeaRead,
    responses={404: {"model": ErrorRead}, 500: {"model": ErrorRead}},
)
async def upvote_idea(
    idea_id: str,
    service: IdeaService = Depends(get_idea_service),
) -> IdeaRead:
    """Add one upvote to an idea and return the updated record."""
    try:
        return await service.upvote_idea(idea_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Idea not found") from e
    except StoreError as e:
        logger.error("Error upvoting idea %s: %s", idea_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to upvote idea"
        ) from e

"""
Health endpoint.

A liveness probe for load balancers and the client.  It does not touch
the store, so it answers even when the database is unavailable.
"""

from fastapi import APIRouter

from idea_board_api.app.schemas.idea import HealthRead

router = APIRouter()


@router.get("", response_model=HealthRead)
async def health() -> HealthRead:
    """Report that the API process is running."""
    return HealthRead(status="OK", message="Idea Board API is running")

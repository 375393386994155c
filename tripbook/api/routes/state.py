"""Whole-state snapshot endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from tripbook.api.deps import get_container
from tripbook.models.trip import TripState
from tripbook.state.container import TripStateContainer

router = APIRouter(tags=["state"])


@router.get("/state", response_model=TripState)
async def get_state(container: Annotated[TripStateContainer, Depends(get_container)]) -> TripState:
    """The full persisted aggregate, as it would be saved."""
    return container.state

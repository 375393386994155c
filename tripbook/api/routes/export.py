"""Print/export endpoints returning printable HTML."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse

from tripbook.api.deps import get_container
from tripbook.export.render import render_budget_html, render_itinerary_html
from tripbook.state.container import TripStateContainer

router = APIRouter(prefix="/export", tags=["export"])

Container = Annotated[TripStateContainer, Depends(get_container)]


@router.get("/itinerary", response_class=HTMLResponse)
async def export_itinerary(container: Container, day: date | None = None) -> HTMLResponse:
    """Whole itinerary, or a single day when ``day`` is given."""
    if day is None:
        days = list(container.days)
    else:
        plan = container.days.select_by_date(day)
        if plan is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Day not found")
        days = [plan]
    return HTMLResponse(render_itinerary_html(days))


@router.get("/budget", response_class=HTMLResponse)
async def export_budget(container: Container) -> HTMLResponse:
    state = container.state
    return HTMLResponse(
        render_budget_html(container.budget(), state.display_currency, state.exchange_rate)
    )

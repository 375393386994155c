"""Itinerary endpoints - day selection, summaries and activity CRUD."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from tripbook.adapters.place import PlaceLookupClient
from tripbook.api.deps import get_container, get_lookup_client
from tripbook.budget.aggregator import day_cost, format_money
from tripbook.models.activity import Activity, ActivityDraft
from tripbook.models.trip import DayPlan
from tripbook.state.container import TripStateContainer
from tripbook.state.lookups import lookup_activity_place

router = APIRouter(prefix="/days", tags=["itinerary"])

Container = Annotated[TripStateContainer, Depends(get_container)]


class DaySummary(BaseModel):
    """Row in the day strip."""

    index: int
    date: date
    day_number: int
    activity_count: int
    cost_twd: float


class DayView(BaseModel):
    """One selected day with its cost in the display currency."""

    index: int
    day: DayPlan
    cost_twd: float
    cost_display: str


class JumpRequest(BaseModel):
    date: date


class SummaryUpdate(BaseModel):
    text: str


class SightseeingEntry(BaseModel):
    date: date
    activities: list[Activity]


def _day_view(container: TripStateContainer, index: int, plan: DayPlan) -> DayView:
    state = container.state
    cost = day_cost(plan)
    return DayView(
        index=index,
        day=plan,
        cost_twd=cost,
        cost_display=format_money(cost, state.display_currency, state.exchange_rate),
    )


@router.get("", response_model=list[DaySummary])
async def list_days(container: Container) -> list[DaySummary]:
    return [
        DaySummary(
            index=i,
            date=plan.date,
            day_number=plan.day_number,
            activity_count=len(plan.activities),
            cost_twd=day_cost(plan),
        )
        for i, plan in enumerate(container.days)
    ]


@router.get("/sightseeing-log", response_model=list[SightseeingEntry])
async def sightseeing_log(container: Container) -> list[SightseeingEntry]:
    return [
        SightseeingEntry(date=day, activities=spots)
        for day, spots in container.days.sightseeing_log()
    ]


@router.post("/lookup-place", response_model=ActivityDraft)
async def lookup_place(
    draft: ActivityDraft,
    client: Annotated[PlaceLookupClient, Depends(get_lookup_client)],
) -> ActivityDraft:
    """Fill a draft's location fields from a place lookup."""
    return await lookup_activity_place(draft, client)


@router.get("/{index}", response_model=DayView)
async def get_day(index: int, container: Container) -> DayView:
    plan = container.days.select_by_index(index)
    if plan is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Day not found")
    return _day_view(container, index, plan)


@router.post("/jump", response_model=DayView)
async def jump_to_date(request: JumpRequest, container: Container) -> DayView:
    """Select a date, creating its day plan when it is missing."""
    index = container.jump_to_date(request.date)
    plan = container.days.select_by_index(index)
    assert plan is not None
    return _day_view(container, index, plan)


@router.put("/{day}/summary", response_model=DayPlan)
async def update_summary(day: date, request: SummaryUpdate, container: Container) -> DayPlan:
    plan = container.update_summary(day, request.text)
    if plan is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Day not found")
    return plan


@router.post("/{day}/activities", response_model=Activity, status_code=status.HTTP_201_CREATED)
async def add_activity(day: date, draft: ActivityDraft, container: Container) -> Activity:
    activity = container.add_activity(day, draft)
    if activity is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Day not found")
    return activity


@router.put("/{day}/activities/{activity_id}", response_model=Activity)
async def update_activity(
    day: date, activity_id: str, draft: ActivityDraft, container: Container
) -> Activity:
    activity = container.update_activity(day, activity_id, draft)
    if activity is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Activity not found")
    return activity


@router.delete("/{day}/activities/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_activity(day: date, activity_id: str, container: Container) -> Response:
    if not container.remove_activity(day, activity_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Activity not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Budget endpoints - breakdown, exchange rate, currency and flights."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from tripbook.api.deps import get_container
from tripbook.budget.aggregator import format_money
from tripbook.models.budget import BudgetBreakdown, BudgetStatus
from tripbook.models.common import Currency
from tripbook.models.trip import PreDeparture
from tripbook.state.container import TripStateContainer

router = APIRouter(prefix="/budget", tags=["budget"])

Container = Annotated[TripStateContainer, Depends(get_container)]


class BudgetView(BaseModel):
    """Breakdown in TWD plus its formatted display-currency strings."""

    breakdown: BudgetBreakdown
    display: dict[str, str]
    status: BudgetStatus
    exchange_rate: float
    display_currency: Currency
    days_until_departure: int


class ExchangeRateUpdate(BaseModel):
    # Raw user input; non-numeric text keeps the previous rate
    rate: float | str


class DisplayCurrencyUpdate(BaseModel):
    currency: Currency


class BudgetLimitUpdate(BaseModel):
    limit_myr: float | str


class PreDepartureUpdate(BaseModel):
    flight_info: str | None = None
    flight_cost_myr: float | str | None = None
    return_flight_info: str | None = None
    return_flight_cost_myr: float | str | None = None
    notes: str | None = None


def _budget_view(container: TripStateContainer) -> BudgetView:
    state = container.state
    breakdown = container.budget()
    display = {
        field: format_money(getattr(breakdown, field), state.display_currency, state.exchange_rate)
        for field in ("flights", "transfers", "transport", "food", "sightseeing", "total")
    }
    return BudgetView(
        breakdown=breakdown,
        display=display,
        status=container.budget_status(),
        exchange_rate=state.exchange_rate,
        display_currency=state.display_currency,
        days_until_departure=container.days_until_departure(),
    )


@router.get("", response_model=BudgetView)
async def get_budget(container: Container) -> BudgetView:
    return _budget_view(container)


@router.put("/exchange-rate", response_model=BudgetView)
async def set_exchange_rate(request: ExchangeRateUpdate, container: Container) -> BudgetView:
    container.set_exchange_rate(request.rate)
    return _budget_view(container)


@router.put("/display-currency", response_model=BudgetView)
async def set_display_currency(request: DisplayCurrencyUpdate, container: Container) -> BudgetView:
    container.set_display_currency(request.currency)
    return _budget_view(container)


@router.put("/limit", response_model=BudgetView)
async def set_budget_limit(request: BudgetLimitUpdate, container: Container) -> BudgetView:
    container.set_budget_limit(request.limit_myr)
    return _budget_view(container)


@router.put("/pre-departure", response_model=PreDeparture)
async def update_pre_departure(request: PreDepartureUpdate, container: Container) -> PreDeparture:
    container.update_pre_departure(**request.model_dump())
    return container.state.pre_departure

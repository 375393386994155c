"""Budget models - derived totals, never persisted."""

from enum import Enum

from pydantic import BaseModel


class BudgetBreakdown(BaseModel):
    """Whole-trip cost totals by category, in TWD."""

    flights: float
    transfers: float
    transport: float
    food: float
    sightseeing: float
    total: float
    rate_valid: bool = True


class BudgetStatusCode(str, Enum):
    """Budget limit check outcome."""

    WITHIN = "WITHIN"
    NEAR_LIMIT = "NEAR_LIMIT"
    OVER_LIMIT = "OVER_LIMIT"
    UNKNOWN = "UNKNOWN"


class BudgetStatus(BaseModel):
    """Trip total compared against the MYR budget limit."""

    code: BudgetStatusCode
    total_myr: float | None
    limit_myr: float
    ratio: float | None = None

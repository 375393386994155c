"""Budget limit check against the MYR ceiling."""

from tripbook.budget.aggregator import is_valid_rate
from tripbook.models.budget import BudgetBreakdown, BudgetStatus, BudgetStatusCode

# Up to 20% over the limit is reported as NEAR_LIMIT
NEAR_LIMIT_TOLERANCE = 0.2


def check_budget_limit(breakdown: BudgetBreakdown, limit_myr: float, rate: float) -> BudgetStatus:
    """Compare the trip total (converted to MYR) with the budget limit.

    Args:
        breakdown: Trip totals in TWD
        limit_myr: Budget ceiling in MYR
        rate: Exchange rate, 1 TWD in MYR

    Returns:
        BudgetStatus; UNKNOWN when the rate or limit is not positive
    """
    if not is_valid_rate(rate) or limit_myr <= 0:
        return BudgetStatus(code=BudgetStatusCode.UNKNOWN, total_myr=None, limit_myr=limit_myr)

    total_myr = breakdown.total * rate
    ratio = round(total_myr / limit_myr, 3)

    if total_myr <= limit_myr:
        code = BudgetStatusCode.WITHIN
    elif total_myr <= limit_myr * (1 + NEAR_LIMIT_TOLERANCE):
        code = BudgetStatusCode.NEAR_LIMIT
    else:
        code = BudgetStatusCode.OVER_LIMIT

    return BudgetStatus(code=code, total_myr=total_myr, limit_myr=limit_myr, ratio=ratio)

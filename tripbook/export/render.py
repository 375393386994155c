"""Printable HTML views of the itinerary and the budget.

Read-only consumers of state snapshots; they never mutate what they render.
Markup lives in ``templates/`` and is rendered with Jinja2 (autoescaped).
"""

from collections.abc import Iterable
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from tripbook.budget.aggregator import format_money
from tripbook.models.activity import Activity
from tripbook.models.budget import BudgetBreakdown
from tripbook.models.common import Currency
from tripbook.models.trip import DayPlan

TEMPLATE_DIR = Path(__file__).parent / "templates"

BUDGET_ROWS = (
    ("Flights", "flights"),
    ("Logistics / Transfers", "transfers"),
    ("Local Transport", "transport"),
    ("Food & Dining", "food"),
    ("Sightseeing & Tickets", "sightseeing"),
)


def activity_meta(activity: Activity) -> list[str]:
    """Short tags shown under an activity: arrival method, meal, transport."""
    meta = []
    if activity.arrival_transport:
        meta.append(f"Via {activity.arrival_transport.value}")
    if activity.meal_type:
        meta.append(activity.meal_type.value)
    if activity.transport_type:
        meta.append(activity.transport_type.value)
    return meta


env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
env.filters["activity_meta"] = activity_meta
env.filters["money"] = format_money


def render_itinerary_html(days: Iterable[DayPlan], title: str = "Taipei Journey") -> str:
    """Printable itinerary for one or more days; empty days are skipped."""
    template = env.get_template("itinerary.html")
    return template.render(title=title, days=[day for day in days if day.activities])


def render_budget_html(
    breakdown: BudgetBreakdown,
    currency: Currency,
    rate: float,
    title: str = "Trip Budget",
) -> str:
    """Printable budget breakdown in the display currency."""
    template = env.get_template("budget.html")
    return template.render(
        title=title,
        breakdown=breakdown.model_dump(),
        currency=currency,
        rate=rate,
        rows=BUDGET_ROWS,
    )

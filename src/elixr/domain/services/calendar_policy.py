from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import TypeVar

from src.elixr.domain.enums import PlanFrequency

D = TypeVar("D", date, datetime)

MONDAY, SATURDAY, SUNDAY = 0, 5, 6


@dataclass(frozen=True)
class CalendarPolicy:
    """
    Set of weekdays (Monday=0 .. Sunday=6) on which nothing is delivered.
    Blocked days are always skipped forward, one day at a time.
    """
    name: str
    blocked_weekdays: frozenset[int]

    def __post_init__(self):
        if not self.blocked_weekdays <= frozenset(range(7)):
            raise ValueError(f"Unknown weekday in policy {self.name!r}")
        if len(self.blocked_weekdays) == 7:
            raise ValueError(f"Policy {self.name!r} blocks every day of the week")

    def is_blocked_day(self, day: D) -> bool:
        return day.weekday() in self.blocked_weekdays

    def advance_to_allowed_day(self, day: D) -> D:
        while self.is_blocked_day(day):
            day = day + timedelta(days=1)
        return day


WEEKDAY_ONLY = CalendarPolicy("weekday_only", frozenset({SATURDAY, SUNDAY}))
SUNDAY_ONLY = CalendarPolicy("sunday_only", frozenset({SUNDAY}))
UNRESTRICTED = CalendarPolicy("unrestricted", frozenset())


def policy_for_plan(plan: PlanFrequency | None) -> CalendarPolicy:
    # weekly/monthly repeat on the start weekday, whatever it is
    if plan == PlanFrequency.DAILY:
        return WEEKDAY_ONLY
    return UNRESTRICTED


def calculate_delivery_date(order_date: D) -> D:
    """Generic next-day delivery: the following weekday."""
    return WEEKDAY_ONLY.advance_to_allowed_day(order_date + timedelta(days=1))

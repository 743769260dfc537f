# services/calendar_view.py

"""Month grid for the calendar screen. Weeks start on Sunday."""

import calendar
import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field

from models.event import EventCard, FutsalEvent
from services.presenters import event_card


class CalendarDay(BaseModel):
    day: int
    date: dt.date
    is_today: bool = False
    events: List[EventCard] = Field(default_factory=list)


class MonthRef(BaseModel):
    year: int
    month: int


class CalendarMonth(BaseModel):
    year: int
    month: int
    # None = blank cell before the 1st
    cells: List[Optional[CalendarDay]]
    prev: MonthRef
    next: MonthRef


def shift_month(year: int, month: int, delta: int) -> MonthRef:
    index = year * 12 + (month - 1) + delta
    return MonthRef(year=index // 12, month=index % 12 + 1)


def month_grid(events: List[FutsalEvent], year: int, month: int, today: Optional[dt.date] = None) -> CalendarMonth:
    if not 1 <= month <= 12:
        raise ValueError("month must be 1-12")

    today = today or dt.date.today()

    # calendar.monthrange weekday: Monday=0 ... Sunday=6
    first_weekday, days_in_month = calendar.monthrange(year, month)
    leading_blanks = (first_weekday + 1) % 7

    by_date = {}
    for e in events:
        if e.date.year == year and e.date.month == month:
            by_date.setdefault(e.date, []).append(event_card(e))

    cells: List[Optional[CalendarDay]] = [None] * leading_blanks
    for day in range(1, days_in_month + 1):
        d = dt.date(year, month, day)
        cells.append(
            CalendarDay(
                day=day,
                date=d,
                is_today=(d == today),
                events=by_date.get(d, []),
            )
        )

    return CalendarMonth(
        year=year,
        month=month,
        cells=cells,
        prev=shift_month(year, month, -1),
        next=shift_month(year, month, 1),
    )

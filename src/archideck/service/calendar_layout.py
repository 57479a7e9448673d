# SPDX-License-Identifier: MIT

from typing import Optional

from archideck import time
from archideck.model.calendar_event import CalendarEvent
from archideck.model.calendar_month import CalendarMonth, DayCell, DisplayEntry

HONORIFIC = "様"
DEFAULT_MAX_VISIBLE = 3


def render(
    year: int,
    month: int,
    events: list[CalendarEvent],
    today: Optional[str] = None,
    max_visible: int = DEFAULT_MAX_VISIBLE,
) -> CalendarMonth:
    """
    Lay out a Sunday-first month grid with events bucketed by day.

    Args:
        year: Calendar year
        month: Month number, 1-12
        events: Events to place; those outside the month are ignored
        today: 'YYYY-MM-DD' of the day to highlight (defaults to local today)
        max_visible: Entries shown per day before the overflow entry

    Returns:
        The month title and its cells. The cell count is always a multiple
        of seven, so a month spans four to six rows.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    if max_visible < 1:
        raise ValueError(f"max_visible must be at least 1, got {max_visible}")
    if today is None:
        today = time.today_local_date_str()

    first_weekday = time.sunday_based_weekday(year, month, 1)
    last_day = time.days_in_month(year, month)
    previous_last_day = time.days_in_month(*time.previous_month(year, month))

    events_by_date = bucket_events_by_date(events)

    cells: list[DayCell] = []
    for day in range(previous_last_day - first_weekday + 1, previous_last_day + 1):
        cells.append(_adjacent_cell(day))

    for day in range(1, last_day + 1):
        date_str = f"{year:04d}-{month:02d}-{day:02d}"
        day_events = events_by_date.get(date_str, [])
        cells.append(
            {
                "day": day,
                "date": date_str,
                "is_current_month": True,
                "is_today": date_str == today,
                "events": day_events,
                "entries": display_entries(day_events, max_visible),
            }
        )

    remaining = (7 - (first_weekday + last_day) % 7) % 7
    for day in range(1, remaining + 1):
        cells.append(_adjacent_cell(day))

    return {
        "year": year,
        "month": month,
        "title": month_title(year, month),
        "cells": cells,
    }


def month_title(year: int, month: int) -> str:
    return f"{year}年{month}月"


def weeks(calendar_month: CalendarMonth) -> list[list[DayCell]]:
    cells = calendar_month["cells"]
    return [cells[i : i + 7] for i in range(0, len(cells), 7)]


def bucket_events_by_date(events: list[CalendarEvent]) -> dict[str, list[CalendarEvent]]:
    events_by_date: dict[str, list[CalendarEvent]] = {}
    for event in events:
        events_by_date.setdefault(event["date"], []).append(event)
    return events_by_date


def display_entries(
    events: list[CalendarEvent], max_visible: int = DEFAULT_MAX_VISIBLE
) -> list[DisplayEntry]:
    """Visible entries for one day, with a trailing '+N more' when truncated."""
    entries: list[DisplayEntry] = [
        {
            "label": short_label(event["customer"], event["task"]),
            "tooltip": f"{event['customer']} {event['task']}",
            "category": event["category"],
            "is_overflow": False,
        }
        for event in events[:max_visible]
    ]
    hidden = len(events) - max_visible
    if hidden > 0:
        entries.append(
            {
                "label": f"+{hidden} more",
                "tooltip": "\n".join(
                    f"{event['customer']} {event['task']}"
                    for event in events[max_visible:]
                ),
                "category": None,
                "is_overflow": True,
            }
        )
    return entries


def customer_token(customer: str) -> str:
    """First whitespace-delimited segment of the name without the honorific."""
    name = customer.strip()
    if name.endswith(HONORIFIC):
        name = name[: -len(HONORIFIC)]
    segments = name.split()
    if not segments:
        return ""
    return segments[0]


def short_label(customer: str, task: str) -> str:
    return f"{customer_token(customer)}{HONORIFIC} {task}"


def _adjacent_cell(day: int) -> DayCell:
    return {
        "day": day,
        "date": None,
        "is_current_month": False,
        "is_today": False,
        "events": [],
        "entries": [],
    }

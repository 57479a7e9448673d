# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from archideck.model.calendar_event import CalendarEvent


class DisplayEntry(TypedDict):
    label: str
    tooltip: str
    category: Optional[str]
    is_overflow: bool


class DayCell(TypedDict):
    day: int
    date: Optional[str]
    is_current_month: bool
    is_today: bool
    events: list[CalendarEvent]
    entries: list[DisplayEntry]


class CalendarMonth(TypedDict):
    year: int
    month: int
    title: str
    cells: list[DayCell]

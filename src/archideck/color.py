# SPDX-License-Identifier: MIT

from typing import Optional

from archideck.model.calendar_event import EventCategory

TODAY_STYLE = "bold black on bright_cyan"
SUNDAY_STYLE = "bold red"
SATURDAY_STYLE = "bold blue"
ADJACENT_DAY_STYLE = "bright_black"
OVERFLOW_STYLE = "dim italic"

# Rich colors per event category tag
CATEGORY_COLORS: dict[EventCategory, str] = {
    EventCategory.DESIGN: "bright_blue",
    EventCategory.IC: "magenta",
    EventCategory.EXTERIOR: "green",
    EventCategory.CONSTRUCTION: "dark_orange",
    EventCategory.TASK: "white",
}


def category_color(category: Optional[str]) -> str:
    if category is None:
        return OVERFLOW_STYLE
    try:
        return CATEGORY_COLORS[EventCategory(category)]
    except ValueError:
        return "white"

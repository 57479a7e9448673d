# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from archideck.color import (
    ADJACENT_DAY_STYLE,
    CATEGORY_COLORS,
    SATURDAY_STYLE,
    SUNDAY_STYLE,
    TODAY_STYLE,
    category_color,
)
from archideck.model.calendar_month import CalendarMonth, DayCell, DisplayEntry
from archideck.service.calendar_layout import weeks
from archideck.view.views.header import header, tab_label

WEEKDAY_NAMES = ["日", "月", "火", "水", "木", "金", "土"]


def calendar_month_view(
    active_tab: str,
    calendar_month: CalendarMonth,
    cell_width: int = 18,
    show_legend: bool = True,
) -> None:
    """
    Display a Sunday-first month grid with the visible entries of each day.

    Args:
        active_tab: The sidebar tab the events were collected for
        calendar_month: The laid out month
        cell_width: Width of each day cell in characters
        show_legend: Whether to print the category color legend
    """
    event_count = sum(len(cell["events"]) for cell in calendar_month["cells"])
    header(tab_label(active_tab), f"{calendar_month['title']} {event_count}件")

    console = Console()
    console.print(f"\n[bold]{calendar_month['title']}[/bold]\n")
    console.print(render_month_table(calendar_month, cell_width))

    if show_legend:
        legend = Text()
        for category, color in CATEGORY_COLORS.items():
            legend.append("■ ", style=color)
            legend.append(f"{category}  ")
        console.print(legend)
    console.print()


def render_month_table(calendar_month: CalendarMonth, cell_width: int = 18) -> Table:
    table = Table(box=box.SIMPLE_HEAD, show_header=True, padding=(0, 1))
    for index, day_name in enumerate(WEEKDAY_NAMES):
        style = "bold"
        if index == 0:
            style = SUNDAY_STYLE
        elif index == 6:
            style = SATURDAY_STYLE
        table.add_column(day_name, header_style=style, width=cell_width)

    for week in weeks(calendar_month):
        table.add_row(*[_render_cell(cell, cell_width) for cell in week])
    return table


def _render_cell(cell: DayCell, cell_width: int) -> Text:
    content = Text()
    if not cell["is_current_month"]:
        content.append(f"{cell['day']:2d}\n", style=ADJACENT_DAY_STYLE)
        return content

    if cell["is_today"]:
        content.append(f"{cell['day']:2d}", style=TODAY_STYLE)
        content.append("\n")
    else:
        content.append(f"{cell['day']:2d}\n", style="bold")

    for entry in cell["entries"]:
        content.append_text(entry_text(entry, cell_width))
        content.append("\n")
    return content


def entry_text(entry: DisplayEntry, cell_width: int) -> Text:
    """One calendar line, cut to the cell by terminal width rather than characters."""
    text = Text(entry["label"], style=category_color(entry["category"]))
    text.truncate(cell_width, overflow="ellipsis")
    return text

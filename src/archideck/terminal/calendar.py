# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import pendulum
import typer
from rich import box
from rich.console import Console
from rich.table import Table

from archideck.repository.configuration import CONFIGURATION_REPO
from archideck.service.dashboard import available_tabs, month_calendar
from archideck.terminal.validate import (
    to_visibility,
    validate_max_events,
    validate_month,
    validate_tab,
)
from archideck.view.views.calendar import calendar_month_view


def calendar(
    year: Annotated[
        Optional[int], typer.Option("--year", "-y", help="defaults to the current year")
    ] = None,
    month: Annotated[
        Optional[int],
        typer.Option(
            "--month", "-m", callback=validate_month, help="1-12, defaults to the current month"
        ),
    ] = None,
    offset: Annotated[
        int,
        typer.Option(
            "--offset", "-o", help="months to move from the selected month, e.g. -1 or 1"
        ),
    ] = 0,
    tab: Annotated[
        Optional[str],
        typer.Option(
            "--tab",
            "-t",
            callback=validate_tab,
            help="all-active, archived-all, archived-design-only, archived-ic-only or a person's name",
        ),
    ] = None,
    person: Annotated[
        Optional[str],
        typer.Option(
            "--person",
            "-p",
            help="show a person's projects even if the name matches a reserved tab",
        ),
    ] = None,
    max_events: Annotated[
        Optional[int],
        typer.Option(
            "--max", callback=validate_max_events, help="entries shown per day"
        ),
    ] = None,
    no_legend: Annotated[bool, typer.Option("--no-legend")] = False,
) -> None:
    """Show the deadline calendar for one month."""
    config = CONFIGURATION_REPO.get_config()
    visibility = to_visibility(tab, person, config["default_tab"])

    today = pendulum.today("local")
    selected = pendulum.date(
        year if year is not None else today.year,
        month if month is not None else today.month,
        1,
    ).add(months=offset)

    calendar_month = month_calendar(
        selected.year,
        selected.month,
        visibility,
        today=today.to_date_string(),
        max_visible=max_events if max_events is not None else config["max_events_per_day"],
    )

    active_tab = visibility["person"] or str(visibility["mode"])
    calendar_month_view(active_tab, calendar_month, show_legend=not no_legend)


def tabs() -> None:
    """List the sidebar tabs that can be passed to --tab."""
    table = Table(box=box.SIMPLE)
    table.add_column("tab")
    table.add_column("kind")
    for value, kind in available_tabs():
        table.add_row(value, kind)
    Console().print(table)

# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from archideck.model.visibility import Visibility
from archideck.query.visibility import by_person, parse_visibility
from archideck.time import normalize_date_str

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_date(value: Optional[str]) -> Optional[str]:
    """Accept YYYY-MM-DD, today/t, yesterday/y, tomorrow/o or a day offset like 1, -1."""
    if value is None:
        return None

    value = value.strip()
    if value in ("today", "t"):
        return pendulum.today("local").to_date_string()
    if value in ("yesterday", "y"):
        return pendulum.yesterday("local").to_date_string()
    if value in ("tomorrow", "o"):
        return pendulum.tomorrow("local").to_date_string()
    if re.match(r"^-?\d{1,3}$", value):
        return pendulum.today("local").add(days=int(value)).to_date_string()

    try:
        return normalize_date_str(value)
    except ValueError:
        raise typer.BadParameter(f"Incorrect date format: {value}")


def validate_month(month: Optional[int]) -> Optional[int]:
    if month is None:
        return None
    if not (1 <= month <= 12):
        raise typer.BadParameter("Month must be between 1 and 12 (inclusive)")
    return month


def validate_max_events(max_events: Optional[int]) -> Optional[int]:
    if max_events is None:
        return None
    if max_events < 1:
        raise typer.BadParameter("At least one event per day must be visible")
    return max_events


def validate_log_level(level: Optional[str]) -> Optional[str]:
    if level is None:
        return None
    if level.upper() not in _LOG_LEVELS:
        raise typer.BadParameter(f"Log level must be one of {', '.join(_LOG_LEVELS)}")
    return level.upper()


def validate_tab(tab: Optional[str]) -> Optional[str]:
    if tab is None:
        return None
    try:
        parse_visibility(tab)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    return tab.strip()


def to_visibility(tab: Optional[str], person: Optional[str], default_tab: str) -> Visibility:
    """Resolve the --tab/--person options, --person taking precedence."""
    try:
        if person is not None:
            return by_person(person)
        return parse_visibility(tab if tab is not None else default_tab)
    except ValueError as e:
        raise typer.BadParameter(str(e))

# SPDX-License-Identifier: MIT

from typing import Optional, cast

import pendulum


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local_date_str() -> str:
    return pendulum.today("local").to_date_string()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM-DD HH:mm")


def normalize_date_str(date_str: str) -> str:
    """Validate a calendar date and return it in 'YYYY-MM-DD' format.

    Raises:
        ValueError: if the value is not a real calendar date
    """
    try:
        parsed = pendulum.parse(date_str.strip(), exact=True)
    except ValueError as e:
        raise ValueError(f"Invalid date: {date_str!r}") from e
    # DateTime is a subclass of Date
    if not isinstance(parsed, pendulum.Date):
        raise ValueError(f"Invalid date: {date_str!r}")
    return parsed.to_date_string()


def normalize_date_str_optional(date_str: Optional[str]) -> Optional[str]:
    if date_str is None or date_str.strip() == "":
        return None
    return normalize_date_str(date_str)


def days_in_month(year: int, month: int) -> int:
    return pendulum.date(year, month, 1).days_in_month


def sunday_based_weekday(year: int, month: int, day: int) -> int:
    """Weekday with Sunday=0 .. Saturday=6."""
    # pendulum: Monday=0 .. Sunday=6
    return (pendulum.date(year, month, day).day_of_week + 1) % 7


def previous_month(year: int, month: int) -> tuple[int, int]:
    previous = pendulum.date(year, month, 1).subtract(months=1)
    return previous.year, previous.month


def stored_date_str(value: object) -> Optional[str]:
    """Normalize a date read from a store file.

    Unquoted dates come back from PyYAML as date objects rather than strings.
    """
    if value is None or str(value).strip() == "":
        return None
    return normalize_date_str(str(value))

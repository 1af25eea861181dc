# SPDX-License-Identifier: MIT

import datetime
from typing import Union, cast

import pendulum


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local() -> pendulum.Date:
    return pendulum.today("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def to_date(value: Union[str, datetime.date]) -> pendulum.Date:
    """
    Coerce an ISO 'YYYY-MM-DD' string, a datetime.date or a pendulum.Date
    into a pendulum.Date. Time components are dropped.
    """
    if isinstance(value, str):
        parsed = pendulum.parse(value, exact=True)
        if isinstance(parsed, pendulum.DateTime):
            return parsed.date()
        if not isinstance(parsed, pendulum.Date):
            raise ValueError(f"Not a calendar date: {value}")
        return parsed
    return pendulum.date(value.year, value.month, value.day)


def date_to_iso_str(date: pendulum.Date) -> str:
    """Format a date as 'YYYY-MM-DD'."""
    return date.to_date_string()


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD ddd")


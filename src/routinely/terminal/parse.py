# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from routinely.time import to_date, today_local


def parse_date(date_param: Optional[str | int]) -> pendulum.Date:
    """
    Parse a date argument. Missing values mean today.

    Accepts YYYY-MM-DD, today/t, yesterday/y and signed day offsets
    relative to today (e.g., "-1", "7").
    """
    if date_param is None:
        return today_local()

    date_str = str(date_param).strip()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        try:
            return to_date(date_str)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date '{date_str}': {e}")

    if re.match(r"^-?\d+$", date_str):
        return today_local().add(days=int(date_str))

    if date_str == "today" or date_str == "t":
        return today_local()
    if date_str == "yesterday" or date_str == "y":
        return today_local().subtract(days=1)

    raise typer.BadParameter("Incorrect date format")


def parse_tags(tags: Optional[list[str]]) -> list[str]:
    """
    Flatten repeated and comma separated tag options into an ordered,
    deduplicated list.
    """
    if tags is None:
        return []
    parsed: list[str] = []
    for tag_option in tags:
        for tag in tag_option.split(","):
            tag = tag.strip()
            if tag and tag not in parsed:
                parsed.append(tag)
    return parsed

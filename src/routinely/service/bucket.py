# SPDX-License-Identifier: MIT

from typing import Iterator

import pendulum

from routinely.model.bucket import Bucket, Granularity
from routinely.model.entry import Entry
from routinely.model.field import Field
from routinely.service.entry import day_value


def period_start_for(granularity: Granularity, day: pendulum.Date) -> pendulum.Date:
    """
    Get the natural start of the period containing a date.

    Weeks start on Monday (ISO), months on the 1st and years on January 1st.
    """
    if granularity == "day":
        return day
    if granularity == "week":
        return day.subtract(days=day.isoweekday() - 1)
    if granularity == "month":
        return pendulum.date(day.year, day.month, 1)
    if granularity == "year":
        return pendulum.date(day.year, 1, 1)
    raise ValueError(f"Unknown granularity: {granularity}")


def next_period_start(
    granularity: Granularity, period_start: pendulum.Date
) -> pendulum.Date:
    """Get the start of the period following the one starting at period_start."""
    if granularity == "day":
        return period_start.add(days=1)
    if granularity == "week":
        return period_start.add(weeks=1)
    if granularity == "month":
        return period_start.add(months=1)
    if granularity == "year":
        return period_start.add(years=1)
    raise ValueError(f"Unknown granularity: {granularity}")


def period_end(granularity: Granularity, period_start: pendulum.Date) -> pendulum.Date:
    """Get the last day (inclusive) of the period starting at period_start."""
    return next_period_start(granularity, period_start).subtract(days=1)


def label_for(granularity: Granularity, period_start: pendulum.Date) -> str:
    """
    Short human label for a period.

    Args:
        granularity: "day", "week", "month" or "year"
        period_start: The natural start of the period

    Returns:
        "Jan 05" for days, "W01" for ISO weeks, "Jan" for months, "2024" for years
    """
    if granularity == "day":
        return period_start.format("MMM DD")
    if granularity == "week":
        return f"W{period_start.isocalendar()[1]:02d}"
    if granularity == "month":
        return period_start.format("MMM")
    if granularity == "year":
        return period_start.format("YYYY")
    raise ValueError(f"Unknown granularity: {granularity}")


def iter_days(start: pendulum.Date, end: pendulum.Date) -> Iterator[pendulum.Date]:
    """Yield every date from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current = current.add(days=1)


def get_daily_values(
    entries: list[Entry],
    field: Field,
    range_start: pendulum.Date,
    range_end: pendulum.Date,
) -> dict[pendulum.Date, float]:
    """
    Map each date in range that has an entry for the field to its day value.
    Entries for other fields and dates outside the range are ignored.
    """
    values: dict[pendulum.Date, float] = {}
    for entry in entries:
        if entry["field_id"] != field["id"]:
            continue
        if not range_start <= entry["date"] <= range_end:
            continue
        values[entry["date"]] = day_value(field, entry["value"])
    return values


def bucketize(
    entries: list[Entry],
    field: Field,
    range_start: pendulum.Date,
    range_end: pendulum.Date,
    granularity: Granularity,
) -> list[Bucket]:
    """
    Aggregate a field's daily entries into buckets of the given granularity.

    Buckets walk from the period containing range_start up to the one
    containing range_end. Each bucket covers its period clipped to the range,
    so the first and last bucket may be partial. Entries dated before
    range_start are not counted, even when they fall in the first bucket's
    period.

    Checkbox fields count completed days per bucket (0/1 per day bucket).
    Number fields sum their parsed values.

    Args:
        entries: Entries for any number of fields; filtered to this field
        field: The field being aggregated
        range_start: First date of the range (inclusive)
        range_end: Last date of the range (inclusive)
        granularity: "day", "week", "month" or "year"

    Returns:
        Buckets in ascending order, empty when range_end < range_start
    """
    if range_end < range_start:
        return []

    daily_values = get_daily_values(entries, field, range_start, range_end)

    buckets: list[Bucket] = []
    period_start = period_start_for(granularity, range_start)
    while period_start <= range_end:
        span_start = max(period_start, range_start)
        span_end = min(period_end(granularity, period_start), range_end)

        if span_start <= span_end:
            days = list(iter_days(span_start, span_end))
            buckets.append(
                {
                    "period_start": period_start,
                    "span_start": span_start,
                    "span_end": span_end,
                    "day_count": len(days),
                    "value": sum(daily_values.get(day, 0.0) for day in days),
                    "label": label_for(granularity, period_start),
                }
            )

        period_start = next_period_start(granularity, period_start)

    return buckets

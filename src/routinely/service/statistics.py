# SPDX-License-Identifier: MIT

from typing import Optional, cast

from routinely.model.bucket import Bucket, Granularity
from routinely.model.field import Field, Frequency
from routinely.model.statistics import Statistics

# Days per frequency window, used for expectation and streaks at day granularity
FREQUENCY_WINDOW_DAYS: dict[Frequency, int] = {
    "daily": 1,
    "every-2-days": 2,
    "weekly": 7,
    "bi-weekly": 14,
}

FREQUENCY_ALIASES: dict[str, Frequency] = {
    "every 2 days": "every-2-days",
    "biweekly": "bi-weekly",
}


def __canonical_frequency(frequency: str) -> str:
    normalized = frequency.strip().lower()
    return FREQUENCY_ALIASES.get(normalized, normalized)


def is_known_frequency(frequency: Optional[str]) -> bool:
    if frequency is None:
        return False
    return __canonical_frequency(frequency) in FREQUENCY_WINDOW_DAYS


def normalize_frequency(frequency: Optional[str]) -> Frequency:
    """
    Map a stored frequency onto a known one. Unknown or missing frequencies
    are read as daily. Reporting unknown values is left to the caller.
    """
    if frequency is None or not is_known_frequency(frequency):
        return "daily"
    return cast(Frequency, __canonical_frequency(frequency))


def frequency_window_days(frequency: Optional[str]) -> int:
    return FREQUENCY_WINDOW_DAYS[normalize_frequency(frequency)]


def expected_occurrences(
    bucket_count: int, frequency: Optional[str], granularity: Granularity
) -> int:
    """
    Number of completions expected over the buckets.

    Only day buckets are derated by frequency (floor(days / window)). Coarser
    buckets each already represent one period, so one completion is expected
    per bucket.
    """
    if granularity != "day":
        return bucket_count
    return bucket_count // frequency_window_days(frequency)


def success_rate_percent(completed: int, expected: int) -> float:
    """completed / expected as a percentage with one decimal, 0 when nothing is expected."""
    if expected == 0:
        return 0.0
    return min(100.0, round(completed / expected * 100, 1))


def windowed_streak(values: list[float], window: int) -> int:
    """
    Count consecutive hit windows from the most recent value backwards.

    Values are split into non-overlapping windows of `window` days anchored
    at the end. A window is hit when any value in it is above 0. The oldest
    window may be shorter and is judged on the days it has.
    """
    streak = 0
    end = len(values)
    while end > 0:
        start = max(0, end - window)
        if not any(value > 0 for value in values[start:end]):
            break
        streak += 1
        end = start
    return streak


def compute_streak(
    buckets: list[Bucket], frequency: Optional[str], granularity: Granularity
) -> int:
    values = [bucket["value"] for bucket in buckets]
    if granularity != "day":
        return windowed_streak(values, 1)
    return windowed_streak(values, frequency_window_days(frequency))


def compute_statistics(
    buckets: list[Bucket],
    field: Field,
    granularity: Granularity,
) -> Statistics:
    """
    Compute trend statistics for one field's buckets.

    Returns: {
        "streak": int,  # Consecutive trailing periods (or frequency windows)
        "completed": int,  # Buckets with a value above 0
        "expected": int,
        "success_rate_percent": float,  # In [0, 100]
        "average": Optional[float],  # Number fields only
        "total": float,
    }
    """
    frequency = normalize_frequency(field["frequency"])
    bucket_count = len(buckets)
    total = sum(bucket["value"] for bucket in buckets)
    completed = len([bucket for bucket in buckets if bucket["value"] > 0])
    expected = expected_occurrences(bucket_count, frequency, granularity)

    average: Optional[float] = None
    if field["type"] == "number":
        average = round(total / bucket_count, 1) if bucket_count > 0 else 0.0

    return {
        "streak": compute_streak(buckets, frequency, granularity),
        "completed": completed,
        "expected": expected,
        "success_rate_percent": success_rate_percent(completed, expected),
        "average": average,
        "total": float(total),
    }


def streak_label(frequency: Optional[str], granularity: Granularity) -> str:
    if granularity != "day":
        return f"{granularity.capitalize()} Streak"
    return {
        "daily": "Day Streak",
        "weekly": "Week Streak",
        "bi-weekly": "Bi-Weekly Streak",
        "every-2-days": "2-Day Period Streak",
    }[normalize_frequency(frequency)]

# SPDX-License-Identifier: MIT

import itertools
from typing import Optional, Protocol

import pendulum
import structlog

from routinely.model.bucket import Bucket, Granularity
from routinely.model.category import Category
from routinely.model.entry import Entry
from routinely.model.field import Field
from routinely.model.selection import Selection
from routinely.model.trend import RangeSpec, TrendSeries
from routinely.service.bucket import bucketize
from routinely.service.catalog import resolve_selection
from routinely.service.statistics import (
    compute_statistics,
    is_known_frequency,
    normalize_frequency,
)

logger = structlog.get_logger(__name__)

# Days per window unit. Months and years are approximations, not calendar-exact.
WINDOW_UNIT_DAYS: dict[str, int] = {
    "day": 1,
    "week": 7,
    "month": 30,
    "year": 365,
}

DEFAULT_WINDOW_DAYS: dict[str, int] = {
    "daily": 14,
    "weekly": 56,
    "bi-weekly": 84,
    "every-2-days": 30,
}


class DataFetchError(Exception):
    """Raised when entries or the field catalog cannot be read for a query."""

    pass


class EntrySource(Protocol):
    def fetch_entries(
        self, start: pendulum.Date, end: pendulum.Date
    ) -> list[Entry]: ...


class CatalogSource(Protocol):
    def fetch_field_catalog(self) -> list[Category]: ...


def query_range(
    range_spec: RangeSpec, now: pendulum.Date
) -> tuple[pendulum.Date, pendulum.Date]:
    """
    Get (range_start, range_end) for a query ending today.

    The window is counted in the granularity's unit: days, weeks (7 days),
    months (30 days) or years (365 days).
    """
    granularity = range_spec["granularity"]
    if granularity not in WINDOW_UNIT_DAYS:
        raise ValueError(f"Unknown granularity: {granularity}")
    window_days = max(0, range_spec["window_size"]) * WINDOW_UNIT_DAYS[granularity]
    return now.subtract(days=window_days), now


def default_window_size(frequency: Optional[str]) -> int:
    """Default day window for a field, long enough to show a few of its periods."""
    return DEFAULT_WINDOW_DAYS[normalize_frequency(frequency)]


def heatmap_intensity(
    bucket: Bucket,
    field: Field,
    granularity: Granularity,
    max_value: float,
) -> int:
    """
    Heatmap level (0-4) for one bucket.

    Checkbox day buckets are either empty or full. Coarser checkbox buckets
    scale with the share of completed days, number fields with the largest
    value in the series.
    """
    value = bucket["value"]
    if value <= 0:
        return 0

    if field["type"] == "checkbox":
        if granularity == "day":
            return 4
        ratio = value / bucket["day_count"] if bucket["day_count"] > 0 else 0.0
    else:
        ratio = value / max_value if max_value > 0 else 0.0

    return max(1, min(4, int(ratio * 4)))


def build_series(
    field: Field,
    entries: list[Entry],
    range_start: pendulum.Date,
    range_end: pendulum.Date,
    granularity: Granularity,
) -> TrendSeries:
    if not is_known_frequency(field["frequency"]):
        logger.warning(
            "unknown_frequency",
            field_id=field["id"],
            frequency=field["frequency"],
            fallback="daily",
        )

    buckets = bucketize(entries, field, range_start, range_end, granularity)
    return {
        "field": field,
        "buckets": buckets,
        "statistics": compute_statistics(buckets, field, granularity),
    }


class TrendQueryService:
    """
    Builds chart-ready series and statistics for a selection of fields.

    Each query reads the catalog once and the entry range once, then handles
    every resolved field independently.
    """

    def __init__(self, entry_source: EntrySource, catalog_source: CatalogSource) -> None:
        self._entry_source = entry_source
        self._catalog_source = catalog_source
        self._generations = itertools.count(1)
        self._latest_generation = 0

    def __fetch_catalog(self) -> list[Category]:
        try:
            return self._catalog_source.fetch_field_catalog()
        except Exception as e:
            logger.error("catalog_fetch_failed", error=str(e))
            raise DataFetchError(f"Could not read the field catalog: {e}") from e

    def __fetch_entries(
        self, range_start: pendulum.Date, range_end: pendulum.Date
    ) -> list[Entry]:
        try:
            return self._entry_source.fetch_entries(range_start, range_end)
        except Exception as e:
            logger.error(
                "entry_fetch_failed",
                range_start=range_start.to_date_string(),
                range_end=range_end.to_date_string(),
                error=str(e),
            )
            raise DataFetchError(f"Could not read entries: {e}") from e

    def query(
        self,
        selection: Selection,
        range_spec: RangeSpec,
        now: pendulum.Date,
    ) -> list[TrendSeries]:
        """
        Compute one series per selected field, in catalog order.

        Raises DataFetchError when either source fails. No partial results
        are returned.
        """
        _, series = self.__run(selection, range_spec, now)
        return series

    def __run(
        self,
        selection: Selection,
        range_spec: RangeSpec,
        now: pendulum.Date,
    ) -> tuple[int, list[TrendSeries]]:
        generation = next(self._generations)
        self._latest_generation = generation

        granularity = range_spec["granularity"]
        range_start, range_end = query_range(range_spec, now)

        logger.info(
            "trend_query_started",
            selection=selection["kind"],
            selection_id=selection["id"],
            granularity=granularity,
            range_start=range_start.to_date_string(),
            range_end=range_end.to_date_string(),
        )

        fields = resolve_selection(self.__fetch_catalog(), selection)
        if len(fields) == 0:
            logger.info("trend_query_empty_selection", selection=selection["kind"])
            return generation, []

        entries = self.__fetch_entries(range_start, range_end)

        series = [
            build_series(field, entries, range_start, range_end, granularity)
            for field in fields
        ]

        logger.info("trend_query_completed", fields=len(series), entries=len(entries))
        return generation, series

    def query_latest(
        self,
        selection: Selection,
        range_spec: RangeSpec,
        now: pendulum.Date,
    ) -> Optional[list[TrendSeries]]:
        """
        Like query(), but returns None when another query started on this
        service before this one finished, so a superseded result is never
        rendered.
        """
        generation, series = self.__run(selection, range_spec, now)
        if generation != self._latest_generation:
            logger.info("trend_query_superseded", generation=generation)
            return None
        return series

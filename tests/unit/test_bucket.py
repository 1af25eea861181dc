"""
Unit tests for the Bucketizer.

Covers period boundary walking, per-granularity bucket layout, partial
periods at the range edges and checkbox/number aggregation.
"""

import pendulum
import pytest

from routinely.service.bucket import (
    bucketize,
    label_for,
    next_period_start,
    period_end,
    period_start_for,
)
from tests.factories import FieldFactory, make_entries, make_entry


def d(value: str) -> pendulum.Date:
    return pendulum.parse(value, exact=True)  # type: ignore[return-value]


# ===================
# PERIOD BOUNDARIES
# ===================


class TestPeriodBoundaries:
    def test_week_starts_on_monday(self):
        # 2024-01-04 is a Thursday
        assert period_start_for("week", d("2024-01-04")) == d("2024-01-01")

    def test_week_start_of_a_monday_is_itself(self):
        assert period_start_for("week", d("2024-01-08")) == d("2024-01-08")

    def test_week_start_of_a_sunday(self):
        assert period_start_for("week", d("2024-01-07")) == d("2024-01-01")

    def test_month_and_year_start(self):
        assert period_start_for("month", d("2024-02-29")) == d("2024-02-01")
        assert period_start_for("year", d("2024-07-15")) == d("2024-01-01")

    def test_day_start_is_the_day(self):
        assert period_start_for("day", d("2024-03-03")) == d("2024-03-03")

    def test_next_period_start(self):
        assert next_period_start("day", d("2024-12-31")) == d("2025-01-01")
        assert next_period_start("week", d("2024-12-30")) == d("2025-01-06")
        assert next_period_start("month", d("2024-01-01")) == d("2024-02-01")
        assert next_period_start("year", d("2024-01-01")) == d("2025-01-01")

    def test_period_end(self):
        assert period_end("week", d("2024-01-01")) == d("2024-01-07")
        assert period_end("month", d("2024-02-01")) == d("2024-02-29")
        assert period_end("month", d("2023-02-01")) == d("2023-02-28")
        assert period_end("year", d("2024-01-01")) == d("2024-12-31")

    def test_unknown_granularity(self):
        with pytest.raises(ValueError):
            period_start_for("quarter", d("2024-01-01"))  # type: ignore[arg-type]

    def test_labels(self):
        assert label_for("day", d("2024-01-05")) == "Jan 05"
        assert label_for("week", d("2024-01-01")) == "W01"
        assert label_for("month", d("2024-03-01")) == "Mar"
        assert label_for("year", d("2024-01-01")) == "2024"


# ===================
# DAY GRANULARITY
# ===================


class TestDayBuckets:
    def test_one_bucket_per_day_in_order(self):
        field = FieldFactory.create()
        buckets = bucketize([], field, d("2024-01-01"), d("2024-01-31"), "day")

        assert len(buckets) == 31
        starts = [bucket["period_start"] for bucket in buckets]
        assert starts == sorted(starts)
        assert starts[0] == d("2024-01-01")
        assert starts[-1] == d("2024-01-31")
        assert all(bucket["day_count"] == 1 for bucket in buckets)

    @pytest.mark.parametrize("days", [0, 1, 6, 59, 400])
    def test_bucket_count_matches_range_length(self, days):
        field = FieldFactory.create()
        start = d("2023-12-15")
        end = start.add(days=days)
        buckets = bucketize([], field, start, end, "day")
        assert len(buckets) == days + 1

    def test_checkbox_values(self):
        field = FieldFactory.create(id="F")
        entries = make_entries("F", "2024-01-01", ["true", True, "false", None, "true"])

        buckets = bucketize(entries, field, d("2024-01-01"), d("2024-01-05"), "day")

        assert [bucket["value"] for bucket in buckets] == [1, 1, 0, 0, 1]

    def test_number_values_with_missing_and_unparsable(self):
        field = FieldFactory.create(id="G", type="number", unit="ml")
        entries = make_entries("G", "2024-01-01", ["200", None, "150", "abc", "2.5"])

        buckets = bucketize(entries, field, d("2024-01-01"), d("2024-01-05"), "day")

        assert [bucket["value"] for bucket in buckets] == [200, 0, 150, 0, 2.5]

    def test_ignores_other_fields_and_out_of_range_entries(self):
        field = FieldFactory.create(id="F")
        entries = [
            make_entry("2024-01-02", "F", "true"),
            make_entry("2024-01-02", "other", "true"),
            make_entry("2023-12-31", "F", "true"),
            make_entry("2024-01-04", "F", "true"),
        ]

        buckets = bucketize(entries, field, d("2024-01-01"), d("2024-01-03"), "day")

        assert [bucket["value"] for bucket in buckets] == [0, 1, 0]

    def test_reversed_range_is_empty(self):
        field = FieldFactory.create()
        assert bucketize([], field, d("2024-01-05"), d("2024-01-01"), "day") == []

    def test_single_day_range(self):
        field = FieldFactory.create(id="F")
        entries = [make_entry("2024-01-01", "F", "true")]
        buckets = bucketize(entries, field, d("2024-01-01"), d("2024-01-01"), "day")
        assert len(buckets) == 1
        assert buckets[0]["value"] == 1


# ===================
# COARSE GRANULARITIES
# ===================


class TestCoarseBuckets:
    def test_weeks_start_on_monday_before_range_start(self):
        field = FieldFactory.create()
        # Wednesday 2024-01-03 to Sunday 2024-01-21
        buckets = bucketize([], field, d("2024-01-03"), d("2024-01-21"), "week")

        assert [bucket["period_start"] for bucket in buckets] == [
            d("2024-01-01"),
            d("2024-01-08"),
            d("2024-01-15"),
        ]
        # Leading week is clipped to the range
        assert buckets[0]["span_start"] == d("2024-01-03")
        assert buckets[0]["day_count"] == 5

    def test_leading_week_ignores_entries_before_range_start(self):
        field = FieldFactory.create(id="F")
        # Monday and Tuesday fall in the first week but before the range
        entries = make_entries("F", "2024-01-01", ["true", "true", "true", "true"])

        buckets = bucketize(entries, field, d("2024-01-03"), d("2024-01-07"), "week")

        assert len(buckets) == 1
        assert buckets[0]["period_start"] == d("2024-01-01")
        assert buckets[0]["value"] == 2

    def test_trailing_partial_week_is_kept(self):
        field = FieldFactory.create()
        buckets = bucketize([], field, d("2024-01-01"), d("2024-01-10"), "week")

        assert len(buckets) == 2
        assert buckets[-1]["span_start"] == d("2024-01-08")
        assert buckets[-1]["span_end"] == d("2024-01-10")
        assert buckets[-1]["day_count"] == 3

    def test_checkbox_week_counts_completed_days(self):
        field = FieldFactory.create(id="F")
        entries = make_entries(
            "F", "2024-01-01", ["true", "false", "true", "true", None, None, True, "true"]
        )

        buckets = bucketize(entries, field, d("2024-01-01"), d("2024-01-08"), "week")

        assert [bucket["value"] for bucket in buckets] == [4, 1]

    def test_number_month_sums_values(self):
        field = FieldFactory.create(id="G", type="number")
        entries = [
            make_entry("2024-01-15", "G", "10"),
            make_entry("2024-01-31", "G", "5.5"),
            make_entry("2024-02-01", "G", "3"),
            make_entry("2024-03-10", "G", "oops"),
        ]

        buckets = bucketize(entries, field, d("2024-01-10"), d("2024-03-20"), "month")

        assert [bucket["label"] for bucket in buckets] == ["Jan", "Feb", "Mar"]
        assert [bucket["value"] for bucket in buckets] == [15.5, 3, 0]
        assert buckets[0]["span_start"] == d("2024-01-10")
        assert buckets[-1]["span_end"] == d("2024-03-20")

    def test_years_overlapping_the_range(self):
        field = FieldFactory.create(id="F")
        entries = [
            make_entry("2023-12-30", "F", "true"),
            make_entry("2024-01-02", "F", "true"),
            make_entry("2024-01-03", "F", "true"),
        ]

        buckets = bucketize(entries, field, d("2023-12-01"), d("2024-02-01"), "year")

        assert [bucket["label"] for bucket in buckets] == ["2023", "2024"]
        assert [bucket["value"] for bucket in buckets] == [1, 2]
        assert buckets[0]["span_start"] == d("2023-12-01")
        assert buckets[0]["span_end"] == d("2023-12-31")
        assert buckets[1]["span_end"] == d("2024-02-01")

    @pytest.mark.parametrize("granularity", ["day", "week", "month", "year"])
    def test_buckets_are_contiguous_and_cover_the_range(self, granularity):
        field = FieldFactory.create()
        start, end = d("2023-11-17"), d("2024-03-02")

        buckets = bucketize([], field, start, end, granularity)

        assert buckets[0]["span_start"] == start
        assert buckets[-1]["span_end"] == end
        for previous, current in zip(buckets, buckets[1:]):
            assert current["span_start"] == previous["span_end"].add(days=1)
        assert sum(bucket["day_count"] for bucket in buckets) == end.diff(start).in_days() + 1

    @pytest.mark.parametrize("granularity", ["week", "month", "year"])
    def test_weekly_sum_equals_daily_sum(self, granularity):
        field = FieldFactory.create(id="G", type="number")
        values = [str(i % 7 * 1.5) if i % 3 else None for i in range(60)]
        entries = make_entries("G", "2024-01-03", values)
        start, end = d("2024-01-03"), d("2024-03-02")

        daily = bucketize(entries, field, start, end, "day")
        coarse = bucketize(entries, field, start, end, granularity)

        assert sum(bucket["value"] for bucket in coarse) == pytest.approx(
            sum(bucket["value"] for bucket in daily)
        )

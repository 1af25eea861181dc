# SPDX-License-Identifier: MIT

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from routinely.model.bucket import Granularity
from routinely.model.trend import TrendSeries
from routinely.service.statistics import streak_label
from routinely.view.header import header
from routinely.view.heatmap import build_heatmap_header, build_heatmap_row
from routinely.view.util import field_owner, format_number

LEFT_COLUMN_WIDTH = 24

SLOT_WIDTHS: dict[str, int] = {
    "day": 2,
    "week": 4,
    "month": 4,
    "year": 5,
}


def trend_view(
    series: list[TrendSeries],
    granularity: Granularity,
    range_start: pendulum.Date,
    range_end: pendulum.Date,
) -> None:
    """
    Display statistics and a heatmap row for each series.

    field     owner    streak          completed  success  average
    ───────────────────────────────────────────────────────────────
    Water     Health   3 Day Streak    11 / 15    73.3%    1200 ml
    Stretch   Health   1 Week Streak   2 / 2      100.0%
    """
    header(f"trends {range_start.format('MMM D')} - {range_end.format('MMM D, YYYY')}")

    console = Console()

    if len(series) == 0:
        console.print("No fields match the selection.")
        return

    stats_table = Table(box=box.SIMPLE)
    stats_table.add_column("field")
    stats_table.add_column("owner")
    stats_table.add_column("streak", justify="right")
    stats_table.add_column("completed", justify="right")
    stats_table.add_column("success", justify="right")
    stats_table.add_column("average", justify="right")
    stats_table.add_column("total", justify="right")

    for item in series:
        field = item["field"]
        statistics = item["statistics"]
        unit = field["unit"] or ""

        average = ""
        if statistics["average"] is not None:
            average = f"{format_number(statistics['average'])}{' ' + unit if unit else ''}"

        stats_table.add_row(
            field["name"],
            field_owner(field),
            f"{statistics['streak']} {streak_label(field['frequency'], granularity)}",
            f"{statistics['completed']} / {statistics['expected']}",
            f"{statistics['success_rate_percent']:.1f}%",
            average,
            format_number(statistics["total"]),
        )

    console.print(stats_table)

    slot_width = SLOT_WIDTHS[granularity]
    console.print(build_heatmap_header(series[0]["buckets"], slot_width, LEFT_COLUMN_WIDTH))
    for item in series:
        console.print(
            build_heatmap_row(
                item["field"]["name"],
                "bold",
                item["field"],
                item["buckets"],
                granularity,
                slot_width,
                LEFT_COLUMN_WIDTH,
            )
        )

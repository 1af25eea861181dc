# SPDX-License-Identifier: MIT

from rich.text import Text

from routinely.model.bucket import Bucket, Granularity
from routinely.model.field import Field
from routinely.service.trend import heatmap_intensity


def get_symbol(intensity: int, field: Field, granularity: Granularity) -> str:
    """
    Get the heatmap symbol for an intensity level.

    Checkbox day slots are binary ("X" or blank); everything else uses
    ".", "o", "O", "#" for levels 1-4.
    """
    if intensity <= 0:
        return " "
    if field["type"] == "checkbox" and granularity == "day":
        return "X"
    return {1: ".", 2: "o", 3: "O"}.get(intensity, "#")


def build_heatmap_row(
    left_column_text: str,
    left_column_style: str,
    field: Field,
    buckets: list[Bucket],
    granularity: Granularity,
    slot_width: int,
    left_column_width: int,
    color: str = "green",
) -> Text:
    """
    Build a heatmap row for a field.

    Args:
        left_column_text: Text to display in the left column
        left_column_style: Rich style for the left column
        field: The field the buckets belong to
        buckets: The field's buckets, oldest first
        granularity: "day", "week", "month" or "year"
        slot_width: Width of each slot
        left_column_width: Width of the left column
        color: Style for filled slots

    Returns:
        Rich Text object with the heatmap row
    """
    row = Text()

    # Format the left column
    left_col = left_column_text
    if len(left_col) > left_column_width:
        left_col = left_col[: left_column_width - 3] + "..."
    else:
        left_col = left_col.ljust(left_column_width)

    row.append(left_col, style=left_column_style)

    max_value = max((bucket["value"] for bucket in buckets), default=0.0)

    for i, bucket in enumerate(buckets):
        # Alternating background for day columns
        bg_style = " on grey23" if granularity == "day" and i % 2 == 1 else ""

        intensity = heatmap_intensity(bucket, field, granularity, max_value)
        symbol = get_symbol(intensity, field, granularity)

        symbol_style = color if intensity > 0 else ""
        final_style = (symbol_style + bg_style).strip()
        row.append(symbol, style=final_style)

        if slot_width > 1:
            row.append(" " * (slot_width - 1), style=bg_style.strip())

    return row


def build_heatmap_header(
    buckets: list[Bucket],
    slot_width: int,
    left_column_width: int,
) -> Text:
    """
    Header row with bucket labels. Labels that don't fit in their slot are
    only shown every few slots.
    """
    row = Text(" " * left_column_width)
    if len(buckets) == 0:
        return row

    label_width = max(len(bucket["label"]) for bucket in buckets) + 1
    every = max(1, -(-label_width // slot_width))

    i = 0
    while i < len(buckets):
        span = min(every, len(buckets) - i) * slot_width
        label = buckets[i]["label"] if span >= label_width - 1 else ""
        row.append(label[:span].ljust(span), style="bold")
        i += every

    return row

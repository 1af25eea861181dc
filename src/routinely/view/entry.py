# SPDX-License-Identifier: MIT

import pendulum
from rich import box
from rich.console import Console
from rich.table import Table

from routinely.model.entry import Entry
from routinely.model.field import Field
from routinely.service.entry import completion_progress
from routinely.time import date_to_display_str
from routinely.view.header import header
from routinely.view.util import field_owner, format_entry_value


def entries_for_date_view(
    date: pendulum.Date,
    fields: list[Field],
    entries: list[Entry],
) -> None:
    """
    Display every field's value for a date, with checkbox progress.

    field       owner            value
    ─────────────────────────────────────
    Stretch     Health           X
    Water       Health / Drinks  1500 ml
    """
    header(f"entries {date_to_display_str(date)}")

    values = {entry["field_id"]: entry["value"] for entry in entries}

    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("id")
    entry_table.add_column("field")
    entry_table.add_column("owner")
    entry_table.add_column("value")

    for field in fields:
        value_str = ""
        if field["id"] in values:
            value_str = format_entry_value(field, values[field["id"]])
        entry_table.add_row(field["id"], field["name"], field_owner(field), value_str)

    console = Console()
    console.print(entry_table)

    completed, total = completion_progress(fields, entries)
    if total > 0:
        percent = round(completed / total * 100)
        console.print(f"Completed: {completed} / {total} ({percent}%)")

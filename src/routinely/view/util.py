# SPDX-License-Identifier: MIT

from typing import Optional

from routinely.model.entry import EntryValue
from routinely.model.field import Field
from routinely.service.entry import is_completed, parse_numeric


def format_tags(tags: Optional[list[str]]) -> str:
    if tags is None or len(tags) == 0:
        return ""
    return ", ".join(tags)


def format_number(value: float) -> str:
    if value == int(value):
        return str(int(value))
    return f"{value:.1f}"


def format_entry_value(field: Field, value: EntryValue) -> str:
    if field["type"] == "checkbox":
        return "X" if is_completed(value) else "-"
    unit = field["unit"] or ""
    return f"{format_number(parse_numeric(value))}{' ' + unit if unit else ''}"


def field_owner(field: Field) -> str:
    if field["subcategory_name"] is not None:
        return f"{field['category_name']} / {field['subcategory_name']}"
    return field["category_name"]

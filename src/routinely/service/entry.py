# SPDX-License-Identifier: MIT

import math
from typing import Optional

from routinely.model.entry import Entry, EntryValue
from routinely.model.field import Field


class EntryValidationError(Exception):
    """Raised when entry validation fails."""

    pass


CHECKBOX_TRUE_INPUTS = ["true", "t", "yes", "y", "1", "x"]
CHECKBOX_FALSE_INPUTS = ["false", "f", "no", "n", "0", ""]


def is_completed(value: EntryValue) -> bool:
    """
    A checkbox value counts as completed when it is the boolean True or the
    literal string "true". Both representations round-trip through the store.
    """
    return value is True or value == "true"


def parse_numeric(value: EntryValue) -> float:
    """
    Decimal parse of an entry value. Missing, unparsable and non-finite values
    contribute 0.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def day_value(field: Field, value: EntryValue) -> float:
    """Value of a single day's entry: 0/1 for checkbox, the parsed number otherwise."""
    if field["type"] == "checkbox":
        return 1.0 if is_completed(value) else 0.0
    return parse_numeric(value)


def parse_entry_value(field: Field, value_str: Optional[str]) -> str:
    """
    Parse user input into the string stored for the field.

    - checkbox: common yes/no spellings are normalised to "true"/"false"
    - number: must be a finite decimal, stored as given
    """
    raw = (value_str or "").strip()

    if field["type"] == "checkbox":
        lowered = raw.lower()
        if lowered in CHECKBOX_TRUE_INPUTS:
            return "true"
        if lowered in CHECKBOX_FALSE_INPUTS:
            return "false"
        raise EntryValidationError(
            f"Cannot parse '{raw}' as a checkbox value. "
            f"Use one of: {', '.join(CHECKBOX_TRUE_INPUTS + CHECKBOX_FALSE_INPUTS[:-1])}"
        )

    try:
        number = float(raw)
    except ValueError:
        raise EntryValidationError(
            f"Cannot parse '{raw}' as a number for field '{field['name']}'."
        )
    if not math.isfinite(number):
        raise EntryValidationError(f"Value for '{field['name']}' must be finite.")
    return raw


def validate_entry_value(field: Field, value: EntryValue) -> bool:
    """
    Validate a value about to be written for the field.

    Returns True if valid, raises EntryValidationError if not.
    """
    if field["type"] == "checkbox":
        if isinstance(value, bool) or value in ("true", "false"):
            return True
        raise EntryValidationError(
            f"Checkbox fields take true or false. Got: {value!r}"
        )

    if field["type"] == "number":
        if value is None or isinstance(value, bool):
            raise EntryValidationError("Number fields require a numeric value.")
        if isinstance(value, (int, float)):
            return True
        parse_entry_value(field, value)
        return True

    raise EntryValidationError(f"Unknown field type: {field['type']}")


def completion_progress(fields: list[Field], entries: list[Entry]) -> tuple[int, int]:
    """
    Checkbox progress for a single day.

    Returns (completed checkbox fields, total checkbox fields).
    """
    checkbox_ids = {field["id"] for field in fields if field["type"] == "checkbox"}
    completed = {
        entry["field_id"]
        for entry in entries
        if entry["field_id"] in checkbox_ids and is_completed(entry["value"])
    }
    return len(completed), len(checkbox_ids)

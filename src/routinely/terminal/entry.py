# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from routinely.model.entity_id import EntityId
from routinely.model.entry import EntryValue
from routinely.repository.catalog import CATALOG_REPO, NotFoundError
from routinely.repository.entry import ENTRY_REPO
from routinely.service.catalog import flatten_fields
from routinely.service.entry import (
    EntryValidationError,
    parse_entry_value,
    validate_entry_value,
)
from routinely.terminal.completion import complete_field
from routinely.terminal.custom_typer import AliasedTyperGroup
from routinely.terminal.parse import parse_date
from routinely.view.entry import entries_for_date_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DateOption = Annotated[
    Optional[str],
    typer.Option(
        "--date",
        "-d",
        help="YYYY-MM-DD, today/t, yesterday/y or a day offset (default: today)",
    ),
]


@app.command("set, s", no_args_is_help=True)
def set_value(
    field_id: Annotated[str, typer.Argument(autocompletion=complete_field)],
    value: str,
    date: DateOption = None,
) -> None:
    """Record a field's value for a date, replacing any previous value."""
    entry_date = parse_date(date)

    try:
        field = CATALOG_REPO.get_field(field_id)
        parsed_value = parse_entry_value(field, value)
        validate_entry_value(field, parsed_value)
    except (NotFoundError, EntryValidationError) as e:
        typer.echo(str(e))
        raise typer.Exit(1)

    ENTRY_REPO.set_entry(entry_date, field_id, parsed_value)

    entries_for_date_view(
        entry_date,
        flatten_fields(CATALOG_REPO.get_catalog()),
        ENTRY_REPO.get_entries_for_date(entry_date),
    )


@app.command("save, sv", no_args_is_help=True)
def save(
    pairs: Annotated[
        list[str],
        typer.Argument(help="field_id=value pairs, e.g., 3f9a2c1e=true 7b01d4aa=1500"),
    ],
    date: DateOption = None,
) -> None:
    """
    Replace every value recorded for a date with the given ones. Fields not
    listed lose their value for that date.
    """
    entry_date = parse_date(date)

    values: dict[EntityId, EntryValue] = {}
    for pair in pairs:
        field_id, separator, raw_value = pair.partition("=")
        if separator == "":
            typer.echo(f"Expected field_id=value, got: {pair}")
            raise typer.Exit(1)

        try:
            field = CATALOG_REPO.get_field(field_id.strip())
            parsed_value = parse_entry_value(field, raw_value)
            validate_entry_value(field, parsed_value)
        except (NotFoundError, EntryValidationError) as e:
            typer.echo(str(e))
            raise typer.Exit(1)

        values[field["id"]] = parsed_value

    ENTRY_REPO.save_entries_for_date(entry_date, values)

    entries_for_date_view(
        entry_date,
        flatten_fields(CATALOG_REPO.get_catalog()),
        ENTRY_REPO.get_entries_for_date(entry_date),
    )


@app.command("remove, r", no_args_is_help=True)
def remove(
    field_id: Annotated[str, typer.Argument(autocompletion=complete_field)],
    date: DateOption = None,
) -> None:
    """Remove a field's value for a date."""
    entry_date = parse_date(date)

    if not ENTRY_REPO.remove_entry(entry_date, field_id):
        typer.echo(f"No entry for field {field_id} on {entry_date.to_date_string()}")
        raise typer.Exit(1)

    entries_for_date_view(
        entry_date,
        flatten_fields(CATALOG_REPO.get_catalog()),
        ENTRY_REPO.get_entries_for_date(entry_date),
    )


@app.command("view, v")
def view(date: DateOption = None) -> None:
    """Show every field's value for a date."""
    entry_date = parse_date(date)

    entries_for_date_view(
        entry_date,
        flatten_fields(CATALOG_REPO.get_catalog()),
        ENTRY_REPO.get_entries_for_date(entry_date),
    )

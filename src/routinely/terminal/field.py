# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from routinely.model.field import FIELD_TYPES, FREQUENCIES
from routinely.repository.catalog import CATALOG_REPO, NotFoundError
from routinely.repository.entry import ENTRY_REPO
from routinely.template.field import get_field_template
from routinely.terminal.completion import (
    complete_category,
    complete_field,
    complete_subcategory,
)
from routinely.terminal.custom_typer import AliasedTyperGroup
from routinely.terminal.parse import parse_tags
from routinely.view.catalog import catalog_view, single_field_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    name: str,
    category_id: Annotated[
        str,
        typer.Option(
            "--category",
            "-c",
            help="id of the owning category",
            autocompletion=complete_category,
        ),
    ],
    subcategory_id: Annotated[
        Optional[str],
        typer.Option(
            "--subcategory",
            "-s",
            help="id of the owning subcategory (within the category)",
            autocompletion=complete_subcategory,
        ),
    ] = None,
    field_type: Annotated[
        str,
        typer.Option("--type", "-t", help="checkbox, number"),
    ] = "checkbox",
    unit: Annotated[
        Optional[str],
        typer.Option("--unit", "-u", help="Unit for number fields"),
    ] = None,
    frequency: Annotated[
        str,
        typer.Option(
            "--frequency", "-f", help="daily, weekly, bi-weekly, every-2-days"
        ),
    ] = "daily",
    tags: Annotated[
        Optional[list[str]],
        typer.Option(
            "--tag",
            "-tg",
            help="accepts multiple tag options or a comma separated list",
        ),
    ] = None,
    temporary: Annotated[
        bool,
        typer.Option("--temporary", help="Mark the field as temporary"),
    ] = False,
) -> None:
    """Create a new field."""
    if field_type not in FIELD_TYPES:
        typer.echo(
            f"Invalid field type: {field_type}. Valid options: {', '.join(FIELD_TYPES)}"
        )
        raise typer.Exit(1)

    if frequency not in FREQUENCIES:
        typer.echo(
            f"Invalid frequency: {frequency}. Valid options: {', '.join(FREQUENCIES)}"
        )
        raise typer.Exit(1)

    field = get_field_template()
    field["name"] = name.strip()
    field["type"] = field_type  # type: ignore[typeddict-item]
    field["unit"] = unit
    field["frequency"] = frequency
    field["tags"] = parse_tags(tags)
    field["is_temporary"] = temporary
    field["category_id"] = category_id
    field["subcategory_id"] = subcategory_id

    try:
        id = CATALOG_REPO.add_field(field)
    except NotFoundError as e:
        typer.echo(str(e))
        raise typer.Exit(1)

    single_field_view(CATALOG_REPO.get_field(id))


@app.command("view, v", no_args_is_help=True)
def view(
    id: Annotated[str, typer.Argument(autocompletion=complete_field)],
) -> None:
    """Show a single field."""
    try:
        field = CATALOG_REPO.get_field(id)
    except NotFoundError as e:
        typer.echo(str(e))
        raise typer.Exit(1)

    single_field_view(field)


@app.command("delete, d", no_args_is_help=True)
def delete(
    id: Annotated[str, typer.Argument(autocompletion=complete_field)],
) -> None:
    """Delete a field and its entries."""
    try:
        CATALOG_REPO.delete_field(id)
    except NotFoundError as e:
        typer.echo(str(e))
        raise typer.Exit(1)

    ENTRY_REPO.remove_entries_for_field(id)

    catalog_view(CATALOG_REPO.get_catalog())

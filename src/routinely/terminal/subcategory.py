# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from routinely.repository.catalog import CATALOG_REPO, NotFoundError
from routinely.repository.entry import ENTRY_REPO
from routinely.terminal.completion import complete_category, complete_subcategory
from routinely.terminal.custom_typer import AliasedTyperGroup
from routinely.view.catalog import catalog_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    category_id: Annotated[
        str, typer.Argument(autocompletion=complete_category)
    ],
    name: str,
) -> None:
    """Create a subcategory under a category."""
    try:
        CATALOG_REPO.add_subcategory(category_id, name.strip())
    except NotFoundError as e:
        typer.echo(str(e))
        raise typer.Exit(1)

    catalog_view(CATALOG_REPO.get_catalog())


@app.command("delete, d", no_args_is_help=True)
def delete(
    id: Annotated[str, typer.Argument(autocompletion=complete_subcategory)],
) -> None:
    """Delete a subcategory, its fields and their entries."""
    try:
        field_ids = CATALOG_REPO.delete_subcategory(id)
    except NotFoundError as e:
        typer.echo(str(e))
        raise typer.Exit(1)

    for field_id in field_ids:
        ENTRY_REPO.remove_entries_for_field(field_id)

    catalog_view(CATALOG_REPO.get_catalog())

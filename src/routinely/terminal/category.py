# SPDX-License-Identifier: MIT

import typer

from routinely.repository.catalog import CATALOG_REPO
from routinely.terminal.custom_typer import AliasedTyperGroup
from routinely.view.catalog import catalog_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(name: str) -> None:
    """Create a new category."""
    name = name.strip()
    if name == "":
        typer.echo("Category name cannot be empty")
        raise typer.Exit(1)

    if any(category["name"] == name for category in CATALOG_REPO.get_catalog()):
        typer.echo(f"Category already exists: {name}")
        raise typer.Exit(1)

    CATALOG_REPO.add_category(name)

    catalog_view(CATALOG_REPO.get_catalog())


@app.command("view, v")
def view() -> None:
    """List categories, subcategories and fields."""
    catalog_view(CATALOG_REPO.get_catalog())

# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from routinely.terminal import (
    category,
    configuration,
    entry,
    field,
    subcategory,
    trend,
)
from routinely.terminal.custom_typer import OrderedAliasedTyperGroup
from routinely.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="Routinely - Habit and routine tracking in the CLI",
    no_args_is_help=True,
)
app.add_typer(category.app, name="category, c")
app.add_typer(subcategory.app, name="subcategory, sc")
app.add_typer(field.app, name="field, f")
app.add_typer(entry.app, name="entry, e")
app.add_typer(trend.app, name="trend, tr")
app.add_typer(configuration.app, name="config, cf")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in views",
        ),
    ] = False,
) -> None:
    """
    Routinely - Habit and routine tracking in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()

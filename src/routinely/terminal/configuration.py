# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from routinely import configuration
from routinely.model.bucket import GRANULARITIES
from routinely.repository.configuration import CONFIGURATION_REPO
from routinely.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("default_granularity", config["default_granularity"])
    default_window_size = config.get("default_window_size")
    table.add_row(
        "default_window_size",
        str(default_window_size) if default_window_size is not None else "by frequency",
    )
    table.add_row("log_level", config.get("log_level") or "WARNING")
    table.add_row("config_file", str(configuration.APP_CONFIG_PATH))

    console.print(table)


@app.command("set, s")
def set_config(
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory holding catalog and entries"),
    ] = None,
    remove_data_path: Annotated[
        bool, typer.Option("--remove-data-path", help="Use the default data path")
    ] = False,
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--hide-header"),
    ] = None,
    default_granularity: Annotated[
        Optional[str],
        typer.Option("--default-granularity", help="day, week, month, year"),
    ] = None,
    default_window_size: Annotated[
        Optional[int],
        typer.Option("--default-window-size", min=0),
    ] = None,
    remove_default_window_size: Annotated[
        bool,
        typer.Option(
            "--remove-default-window-size",
            help="Derive the window from the field's frequency",
        ),
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR"),
    ] = None,
) -> None:
    """Update configuration settings."""
    if default_granularity is not None and default_granularity not in GRANULARITIES:
        typer.echo(
            f"Invalid granularity: {default_granularity}. "
            f"Valid options: {', '.join(GRANULARITIES)}"
        )
        raise typer.Exit(1)

    if log_level is not None:
        log_level = log_level.upper()
        if log_level not in LOG_LEVELS:
            typer.echo(
                f"Invalid log level: {log_level}. Valid options: {', '.join(LOG_LEVELS)}"
            )
            raise typer.Exit(1)

    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        show_header=show_header,
        default_granularity=default_granularity,
        default_window_size=default_window_size,
        remove_default_window_size=remove_default_window_size,
        log_level=log_level,
    )

    view()

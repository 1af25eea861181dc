# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from routinely.model.bucket import GRANULARITIES
from routinely.model.selection import Selection
from routinely.repository.catalog import CATALOG_REPO, NotFoundError
from routinely.repository.configuration import CONFIGURATION_REPO
from routinely.repository.entry import ENTRY_REPO
from routinely.service.trend import (
    DataFetchError,
    TrendQueryService,
    default_window_size,
    query_range,
)
from routinely.template import selection as selection_template
from routinely.terminal.completion import (
    complete_category,
    complete_field,
    complete_subcategory,
)
from routinely.terminal.custom_typer import AliasedTyperGroup
from routinely.terminal.parse import parse_date
from routinely.view.trend import trend_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

TREND_SERVICE = TrendQueryService(ENTRY_REPO, CATALOG_REPO)


def build_selection(
    category_id: Optional[str],
    subcategory_id: Optional[str],
    field_id: Optional[str],
) -> Selection:
    chosen = [id for id in (category_id, subcategory_id, field_id) if id is not None]
    if len(chosen) > 1:
        raise typer.BadParameter(
            "Choose at most one of --category, --subcategory and --field"
        )
    if category_id is not None:
        return selection_template.category(category_id)
    if subcategory_id is not None:
        return selection_template.subcategory(subcategory_id)
    if field_id is not None:
        return selection_template.single_field(field_id)
    return selection_template.all_fields()


def resolve_window_size(
    window: Optional[int],
    granularity: str,
    field_id: Optional[str],
) -> int:
    """
    Window from the option, then the configured default, then (for a single
    field at day granularity) the field's frequency default, then 14.
    """
    if window is not None:
        return window

    config = CONFIGURATION_REPO.get_config()
    configured = config.get("default_window_size")
    if configured is not None:
        return configured

    if granularity == "day" and field_id is not None:
        try:
            return default_window_size(CATALOG_REPO.get_field(field_id)["frequency"])
        except NotFoundError:
            pass
    return default_window_size(None)


@app.command("view, v")
def view(
    category_id: Annotated[
        Optional[str],
        typer.Option("--category", "-c", autocompletion=complete_category),
    ] = None,
    subcategory_id: Annotated[
        Optional[str],
        typer.Option("--subcategory", "-s", autocompletion=complete_subcategory),
    ] = None,
    field_id: Annotated[
        Optional[str],
        typer.Option("--field", "-f", autocompletion=complete_field),
    ] = None,
    granularity: Annotated[
        Optional[str],
        typer.Option("--granularity", "-g", help="day, week, month, year"),
    ] = None,
    window: Annotated[
        Optional[int],
        typer.Option(
            "--window", "-w", help="Number of granularity units to look back", min=0
        ),
    ] = None,
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Last day of the range (default: today)"),
    ] = None,
) -> None:
    """Show streaks, success rates and a heatmap for the selected fields."""
    if granularity is None:
        granularity = CONFIGURATION_REPO.get_config()["default_granularity"]
    if granularity not in GRANULARITIES:
        typer.echo(
            f"Invalid granularity: {granularity}. Valid options: {', '.join(GRANULARITIES)}"
        )
        raise typer.Exit(1)

    selection = build_selection(category_id, subcategory_id, field_id)
    now = parse_date(date)
    range_spec = {
        "granularity": granularity,
        "window_size": resolve_window_size(window, granularity, field_id),
    }

    try:
        range_start, range_end = query_range(range_spec, now)  # type: ignore[arg-type]
    except (OverflowError, ValueError):
        typer.echo(
            f"Window of {range_spec['window_size']} {granularity}s reaches before "
            "the earliest supported date"
        )
        raise typer.Exit(1)

    try:
        series = TREND_SERVICE.query_latest(selection, range_spec, now)  # type: ignore[arg-type]
    except DataFetchError as e:
        typer.echo(str(e))
        raise typer.Exit(1)

    if series is None:
        return

    trend_view(series, granularity, range_start, range_end)  # type: ignore[arg-type]

# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from routinely.model.category import Category
from routinely.model.field import Field
from routinely.service.catalog import category_fields
from routinely.time import datetime_to_iso_str
from routinely.view.header import header
from routinely.view.util import format_tags


def catalog_view(catalog: list[Category]) -> None:
    """Display every category, its subcategories and their fields."""
    header("categories")

    catalog_table = Table(box=box.SIMPLE)
    catalog_table.add_column("id")
    catalog_table.add_column("category")
    catalog_table.add_column("subcategory")
    catalog_table.add_column("field")
    catalog_table.add_column("type")
    catalog_table.add_column("frequency")
    catalog_table.add_column("unit")
    catalog_table.add_column("tags")

    for category in catalog:
        catalog_table.add_row(category["id"], f"[bold]{category['name']}[/bold]")
        for subcategory in category["subcategories"]:
            catalog_table.add_row(subcategory["id"], "", subcategory["name"])
        for field in category_fields(category):
            name = field["name"]
            if field["is_temporary"]:
                name = f"{name} [dim](temporary)[/dim]"
            catalog_table.add_row(
                field["id"],
                "",
                field["subcategory_name"] or "",
                name,
                field["type"],
                field["frequency"],
                field["unit"] or "",
                format_tags(field["tags"]),
            )

    console = Console()
    console.print(catalog_table)


def single_field_view(field: Field) -> None:
    """Display detailed view of a single field."""
    header("field")

    field_table = Table(box=box.SIMPLE)
    field_table.add_column("property")
    field_table.add_column("value")

    field_table.add_row("id", field["id"])
    field_table.add_row("name", field["name"])
    field_table.add_row("type", field["type"])
    field_table.add_row("unit", field["unit"] or "")
    field_table.add_row("frequency", field["frequency"])
    field_table.add_row("tags", format_tags(field["tags"]))
    field_table.add_row("temporary", "yes" if field["is_temporary"] else "no")
    field_table.add_row("category", field["category_name"])
    field_table.add_row("subcategory", field["subcategory_name"] or "")
    field_table.add_row("created", datetime_to_iso_str(field["created"]))

    console = Console()
    console.print(field_table)

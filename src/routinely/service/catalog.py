# SPDX-License-Identifier: MIT

from typing import Optional

from routinely.model.category import Category
from routinely.model.entity_id import EntityId
from routinely.model.field import Field
from routinely.model.selection import Selection


def category_fields(category: Category) -> list[Field]:
    """A category's direct fields first, then each subcategory's fields in order."""
    fields = list(category["fields"])
    for subcategory in category["subcategories"]:
        fields.extend(subcategory["fields"])
    return fields


def flatten_fields(catalog: list[Category]) -> list[Field]:
    fields: list[Field] = []
    for category in catalog:
        fields.extend(category_fields(category))
    return fields


def find_field(catalog: list[Category], id: EntityId) -> Optional[Field]:
    for field in flatten_fields(catalog):
        if field["id"] == id:
            return field
    return None


def resolve_selection(catalog: list[Category], selection: Selection) -> list[Field]:
    """
    Resolve a selection to an ordered list of fields.

    The order follows the catalog so that repeated queries for the same
    selection produce series in the same order. Ids that match nothing
    resolve to an empty list.
    """
    kind = selection["kind"]

    if kind == "all":
        return flatten_fields(catalog)

    if kind == "category":
        for category in catalog:
            if category["id"] == selection["id"]:
                return category_fields(category)
        return []

    if kind == "subcategory":
        for category in catalog:
            for subcategory in category["subcategories"]:
                if subcategory["id"] == selection["id"]:
                    return list(subcategory["fields"])
        return []

    if kind == "field":
        field = find_field(catalog, selection["id"] or "")
        return [field] if field is not None else []

    raise ValueError(f"Unknown selection kind: {kind}")

# SPDX-License-Identifier: MIT

from routinely.repository.catalog import CATALOG_REPO
from routinely.service.catalog import flatten_fields


def complete_category(incomplete: str) -> list[str]:
    """Return category ids for shell completion."""
    return [
        category["id"]
        for category in CATALOG_REPO.get_catalog()
        if category["id"].startswith(incomplete)
    ]


def complete_subcategory(incomplete: str) -> list[str]:
    """Return subcategory ids for shell completion."""
    return [
        subcategory["id"]
        for category in CATALOG_REPO.get_catalog()
        for subcategory in category["subcategories"]
        if subcategory["id"].startswith(incomplete)
    ]


def complete_field(incomplete: str) -> list[str]:
    """Return field ids for shell completion."""
    return [
        field["id"]
        for field in flatten_fields(CATALOG_REPO.get_catalog())
        if field["id"].startswith(incomplete)
    ]

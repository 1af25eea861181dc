# SPDX-License-Identifier: MIT

from routinely.model.category import Category, Subcategory
from routinely.time import now_utc


def get_category_template() -> Category:
    return {
        "id": "",
        "name": "",
        "fields": [],
        "subcategories": [],
        "created": now_utc(),
    }


def get_subcategory_template() -> Subcategory:
    return {
        "id": "",
        "name": "",
        "category_id": "",
        "fields": [],
        "created": now_utc(),
    }

# SPDX-License-Identifier: MIT

from routinely.model.entity_id import EntityId
from routinely.model.selection import Selection


def all_fields() -> Selection:
    return {"kind": "all", "id": None}


def category(id: EntityId) -> Selection:
    return {"kind": "category", "id": id}


def subcategory(id: EntityId) -> Selection:
    return {"kind": "subcategory", "id": id}


def single_field(id: EntityId) -> Selection:
    return {"kind": "field", "id": id}

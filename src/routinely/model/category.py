# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from routinely.model.entity_id import EntityId
from routinely.model.field import Field


class Subcategory(TypedDict):
    id: EntityId
    name: str
    category_id: EntityId
    fields: list[Field]
    created: pendulum.DateTime


class Category(TypedDict):
    id: EntityId
    name: str
    fields: list[Field]  # Fields directly under the category
    subcategories: list[Subcategory]
    created: pendulum.DateTime

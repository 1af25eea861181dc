# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict, get_args

import pendulum

from routinely.model.entity_id import EntityId

FieldType = Literal["checkbox", "number"]
Frequency = Literal["daily", "weekly", "bi-weekly", "every-2-days"]

FIELD_TYPES: list[str] = list(get_args(FieldType))
FREQUENCIES: list[str] = list(get_args(Frequency))


class Field(TypedDict):
    id: EntityId
    name: str  # e.g., "Water"
    type: FieldType
    unit: Optional[str]  # e.g., "ml", only meaningful for number fields
    frequency: str  # Usually a Frequency, unknown values are read as daily
    tags: list[str]
    is_temporary: bool

    # Denormalised owner, set when the field is added
    category_id: EntityId
    category_name: str
    subcategory_id: Optional[EntityId]
    subcategory_name: Optional[str]

    created: pendulum.DateTime

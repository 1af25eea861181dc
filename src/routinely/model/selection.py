# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

from routinely.model.entity_id import EntityId

SelectionKind = Literal["all", "category", "subcategory", "field"]


class Selection(TypedDict):
    kind: SelectionKind
    id: Optional[EntityId]  # None only for "all"

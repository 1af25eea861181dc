# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict, Union

import pendulum

from routinely.model.entity_id import EntityId

# checkbox: "true"/"false" or a native bool
# number: decimal string (or an int/float when written by hand in YAML)
EntryValue = Optional[Union[str, bool, int, float]]


class Entry(TypedDict):
    date: pendulum.Date
    field_id: EntityId
    value: EntryValue

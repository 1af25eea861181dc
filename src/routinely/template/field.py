# SPDX-License-Identifier: MIT

from routinely.model.field import Field
from routinely.time import now_utc


def get_field_template() -> Field:
    return {
        "id": "",
        "name": "",
        "type": "checkbox",
        "unit": None,
        "frequency": "daily",
        "tags": [],
        "is_temporary": False,
        "category_id": "",
        "category_name": "",
        "subcategory_id": None,
        "subcategory_name": None,
        "created": now_utc(),
    }

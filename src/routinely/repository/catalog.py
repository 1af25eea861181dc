# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper  # noqa: F401
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from routinely import configuration, time
from routinely.model.category import Category, Subcategory
from routinely.model.entity_id import EntityId, generate_entity_id
from routinely.model.field import Field
from routinely.template.category import (
    get_category_template,
    get_subcategory_template,
)


class NotFoundError(Exception):
    """Raised when a category, subcategory or field id does not exist."""

    pass


class CatalogRepository:
    def __init__(self) -> None:
        self._categories: Optional[list[Category]] = None
        self.is_dirty = False

    @property
    def categories(self) -> list[Category]:
        if self._categories is None:
            self.__load_data()
        if self._categories is None:
            raise ValueError()
        return self._categories

    def __load_data(self) -> None:
        self._categories = []
        if not configuration.DATA_CATALOG_PATH.is_file():
            return
        raw_catalog = load(configuration.DATA_CATALOG_PATH.read_text(), Loader=Loader)
        if raw_catalog is None:
            return
        for raw_category in raw_catalog.get("categories") or []:
            self._categories.append(
                self.__convert_category_for_deserialization(raw_category)
            )

    def __save_data(self) -> None:
        serializable_catalog = {
            "categories": [
                self.__convert_category_for_serialization(deepcopy(category))
                for category in self.categories
            ]
        }
        configuration.DATA_CATALOG_PATH.parent.mkdir(parents=True, exist_ok=True)
        configuration.DATA_CATALOG_PATH.write_text(
            dump(serializable_catalog, Dumper=Dumper, sort_keys=False)
        )

    def flush(self) -> bool:
        if self._categories is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_field_for_serialization(self, field: Field) -> dict[str, Any]:
        serializable_field = cast(dict[str, Any], field)
        serializable_field["created"] = time.datetime_to_iso_str(
            serializable_field["created"]
        )
        return serializable_field

    def __convert_category_for_serialization(
        self, category: Category
    ) -> dict[str, Any]:
        serializable_category = cast(dict[str, Any], category)
        serializable_category["created"] = time.datetime_to_iso_str(
            serializable_category["created"]
        )
        serializable_category["fields"] = [
            self.__convert_field_for_serialization(field)
            for field in category["fields"]
        ]
        for subcategory in serializable_category["subcategories"]:
            subcategory["created"] = time.datetime_to_iso_str(subcategory["created"])
            subcategory["fields"] = [
                self.__convert_field_for_serialization(field)
                for field in subcategory["fields"]
            ]
        return serializable_category

    def __convert_field_for_deserialization(self, field: dict[str, Any]) -> Field:
        deserializable_field = field
        deserializable_field["created"] = time.datetime_from_str(
            deserializable_field["created"]
        )
        # Tags were once stored as a comma separated string
        if isinstance(deserializable_field.get("tags"), str):
            deserializable_field["tags"] = [
                tag.strip()
                for tag in deserializable_field["tags"].split(",")
                if tag.strip()
            ]
        if deserializable_field.get("tags") is None:
            deserializable_field["tags"] = []
        return cast(Field, deserializable_field)

    def __convert_category_for_deserialization(
        self, category: dict[str, Any]
    ) -> Category:
        deserializable_category = category
        deserializable_category["created"] = time.datetime_from_str(
            deserializable_category["created"]
        )
        deserializable_category["fields"] = [
            self.__convert_field_for_deserialization(field)
            for field in deserializable_category.get("fields") or []
        ]
        subcategories = deserializable_category.get("subcategories") or []
        for subcategory in subcategories:
            subcategory["created"] = time.datetime_from_str(subcategory["created"])
            subcategory["fields"] = [
                self.__convert_field_for_deserialization(field)
                for field in subcategory.get("fields") or []
            ]
        deserializable_category["subcategories"] = subcategories
        return cast(Category, deserializable_category)

    def __find_category(self, id: EntityId) -> Category:
        for category in self.categories:
            if category["id"] == id:
                return category
        raise NotFoundError(f"Category not found: {id}")

    def __find_subcategory(self, id: EntityId) -> Subcategory:
        for category in self.categories:
            for subcategory in category["subcategories"]:
                if subcategory["id"] == id:
                    return subcategory
        raise NotFoundError(f"Subcategory not found: {id}")

    def add_category(self, name: str) -> EntityId:
        self.is_dirty = True

        category = get_category_template()
        category["id"] = generate_entity_id()
        category["name"] = name
        self.categories.append(category)

        return category["id"]

    def add_subcategory(self, category_id: EntityId, name: str) -> EntityId:
        category = self.__find_category(category_id)
        self.is_dirty = True

        subcategory = get_subcategory_template()
        subcategory["id"] = generate_entity_id()
        subcategory["name"] = name
        subcategory["category_id"] = category_id
        category["subcategories"].append(subcategory)

        return subcategory["id"]

    def add_field(self, field: Field) -> EntityId:
        """
        Add a field under its category, or under its subcategory when
        subcategory_id is set. Owner names are filled in from the catalog.
        """
        category = self.__find_category(field["category_id"])
        self.is_dirty = True

        field["id"] = generate_entity_id()
        field["category_name"] = category["name"]

        # Deduplicate tags
        field["tags"] = list(dict.fromkeys(field["tags"]))

        if field["subcategory_id"] is not None:
            subcategory = self.__find_subcategory(field["subcategory_id"])
            if subcategory["category_id"] != category["id"]:
                raise NotFoundError(
                    f"Subcategory {subcategory['id']} does not belong to "
                    f"category {category['id']}"
                )
            field["subcategory_name"] = subcategory["name"]
            subcategory["fields"].append(field)
        else:
            field["subcategory_name"] = None
            category["fields"].append(field)

        return field["id"]

    def delete_field(self, id: EntityId) -> None:
        for category in self.categories:
            owners = [category["fields"]] + [
                subcategory["fields"] for subcategory in category["subcategories"]
            ]
            for fields in owners:
                for index, field in enumerate(fields):
                    if field["id"] == id:
                        self.is_dirty = True
                        del fields[index]
                        return
        raise NotFoundError(f"Field not found: {id}")

    def delete_subcategory(self, id: EntityId) -> list[EntityId]:
        """Delete a subcategory and its fields. Returns the removed field ids."""
        for category in self.categories:
            for index, subcategory in enumerate(category["subcategories"]):
                if subcategory["id"] == id:
                    self.is_dirty = True
                    del category["subcategories"][index]
                    return [field["id"] for field in subcategory["fields"]]
        raise NotFoundError(f"Subcategory not found: {id}")

    def get_catalog(self) -> list[Category]:
        return deepcopy(self.categories)

    def fetch_field_catalog(self) -> list[Category]:
        return self.get_catalog()

    def get_field(self, id: EntityId) -> Field:
        for category in self.categories:
            fields = list(category["fields"])
            for subcategory in category["subcategories"]:
                fields.extend(subcategory["fields"])
            for field in fields:
                if field["id"] == id:
                    return deepcopy(field)
        raise NotFoundError(f"Field not found: {id}")


CATALOG_REPO = CatalogRepository()

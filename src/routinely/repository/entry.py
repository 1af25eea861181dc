# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

import pendulum
from yaml import dump, load

try:
    from yaml import CDumper as Dumper  # noqa: F401
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from routinely import configuration, time
from routinely.model.entity_id import EntityId
from routinely.model.entry import Entry, EntryValue


class EntryRepository:
    """
    Daily entries, one YAML file per date under the entries directory.

    At most one entry is kept per (date, field_id): saving replaces.
    """

    def __init__(self) -> None:
        self._entries_by_date: Optional[dict[str, list[Entry]]] = None
        self.is_dirty = False
        self._dirty_dates: set[str] = set()

    @property
    def entries_by_date(self) -> dict[str, list[Entry]]:
        if self._entries_by_date is None:
            self.__load_data()
        if self._entries_by_date is None:
            raise ValueError()
        return self._entries_by_date

    def __load_data(self) -> None:
        self._entries_by_date = {}
        if not configuration.DATA_ENTRIES_DIR.is_dir():
            return
        for file_path in configuration.DATA_ENTRIES_DIR.iterdir():
            if file_path.suffix != ".yaml":
                continue
            raw_day = load(file_path.read_text(), Loader=Loader)
            if raw_day is None:
                continue
            date = time.to_date(str(raw_day["date"]))
            self._entries_by_date[time.date_to_iso_str(date)] = [
                self.__convert_entry_for_deserialization(date, raw_entry)
                for raw_entry in raw_day.get("entries") or []
            ]

    def __save_data(self) -> None:
        configuration.DATA_ENTRIES_DIR.mkdir(parents=True, exist_ok=True)
        for date_str in self._dirty_dates:
            file_path = configuration.DATA_ENTRIES_DIR / f"{date_str}.yaml"
            entries = self.entries_by_date.get(date_str, [])

            # A date without entries has no file
            if len(entries) == 0:
                if file_path.exists():
                    file_path.unlink()
                continue

            serializable_day = {
                "date": date_str,
                "entries": [
                    self.__convert_entry_for_serialization(deepcopy(entry))
                    for entry in entries
                ],
            }
            file_path.write_text(dump(serializable_day, Dumper=Dumper, sort_keys=False))

        self._dirty_dates.clear()

    def flush(self) -> bool:
        if self._entries_by_date is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_entry_for_serialization(self, entry: Entry) -> dict[str, Any]:
        # The date lives on the file, not on each entry
        return {"field_id": entry["field_id"], "value": entry["value"]}

    def __convert_entry_for_deserialization(
        self, date: pendulum.Date, entry: dict[str, Any]
    ) -> Entry:
        return cast(
            Entry,
            {"date": date, "field_id": str(entry["field_id"]), "value": entry.get("value")},
        )

    def __mark_dirty(self, date_str: str) -> None:
        self.is_dirty = True
        self._dirty_dates.add(date_str)

    def save_entries_for_date(
        self, date: pendulum.Date, values: dict[EntityId, EntryValue]
    ) -> None:
        """Replace every entry of a date with the given field values."""
        date_str = time.date_to_iso_str(date)
        self.entries_by_date[date_str] = [
            {"date": date, "field_id": field_id, "value": value}
            for field_id, value in values.items()
        ]
        self.__mark_dirty(date_str)

    def set_entry(self, date: pendulum.Date, field_id: EntityId, value: EntryValue) -> None:
        """Record a value for one field on one date, replacing any previous value."""
        date_str = time.date_to_iso_str(date)
        entries = self.entries_by_date.setdefault(date_str, [])
        for entry in entries:
            if entry["field_id"] == field_id:
                entry["value"] = value
                break
        else:
            entries.append({"date": date, "field_id": field_id, "value": value})
        self.__mark_dirty(date_str)

    def remove_entry(self, date: pendulum.Date, field_id: EntityId) -> bool:
        date_str = time.date_to_iso_str(date)
        entries = self.entries_by_date.get(date_str, [])
        remaining = [entry for entry in entries if entry["field_id"] != field_id]
        if len(remaining) == len(entries):
            return False
        self.entries_by_date[date_str] = remaining
        self.__mark_dirty(date_str)
        return True

    def remove_entries_for_field(self, field_id: EntityId) -> int:
        removed = 0
        for date_str, entries in self.entries_by_date.items():
            remaining = [entry for entry in entries if entry["field_id"] != field_id]
            if len(remaining) != len(entries):
                removed += len(entries) - len(remaining)
                self.entries_by_date[date_str] = remaining
                self.__mark_dirty(date_str)
        return removed

    def get_entries_for_date(self, date: pendulum.Date) -> list[Entry]:
        return deepcopy(self.entries_by_date.get(time.date_to_iso_str(date), []))

    def fetch_entries(self, start: pendulum.Date, end: pendulum.Date) -> list[Entry]:
        """All entries dated from start to end inclusive, oldest first."""
        start_str = time.date_to_iso_str(start)
        end_str = time.date_to_iso_str(end)
        entries: list[Entry] = []
        # ISO date strings sort chronologically
        for date_str in sorted(self.entries_by_date):
            if start_str <= date_str <= end_str:
                entries.extend(self.entries_by_date[date_str])
        return deepcopy(entries)


ENTRY_REPO = EntryRepository()

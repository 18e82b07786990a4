"""Base class for named, user-extensible type registries."""

from abc import ABC, abstractmethod
from typing import Any, Generic, Mapping, TypeVar

EntryT = TypeVar("EntryT")


class TypeRegistry(ABC, Generic[EntryT]):
    """
    Insertion-ordered store of type definitions keyed by id.

    Subclasses decide how a raw config is normalized into an entry and what
    ``get`` returns for an unknown id.
    """

    def __init__(self) -> None:
        self._entries: dict[str, EntryT] = {}

    @abstractmethod
    def _build_entry(self, entry_id: str, config: Mapping[str, Any]) -> EntryT:
        """Normalize a raw config into an entry, filling defaults for missing fields."""
        raise NotImplementedError

    @abstractmethod
    def _fallback(self) -> EntryT | None:
        """Entry returned by ``get`` for an unknown id."""
        raise NotImplementedError

    def register(self, entry_id: str, config: Mapping[str, Any] | None = None) -> EntryT:
        """Insert or replace the entry under ``entry_id``."""
        entry = self._build_entry(entry_id, config or {})
        self._entries[entry_id] = entry
        self._on_change()
        return entry

    def get(self, entry_id: str) -> EntryT | None:
        entry = self._entries.get(entry_id)
        return entry if entry is not None else self._fallback()

    def get_all(self) -> list[EntryT]:
        """All entries in insertion order."""
        return list(self._entries.values())

    def remove(self, entry_id: str) -> bool:
        """Delete an entry, reporting whether it existed."""
        if entry_id not in self._entries:
            return False
        del self._entries[entry_id]
        self._on_change()
        return True

    def _on_change(self) -> None:
        """Hook called after every successful mutation."""

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

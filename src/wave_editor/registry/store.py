"""Key-value stores used to persist registry snapshots."""

import json
from abc import ABC, abstractmethod
from pathlib import Path

from ..log import get_logger

log = get_logger(__name__)


class RegistryStore(ABC):
    """Durable string storage keyed by name."""

    @abstractmethod
    def load(self, key: str) -> str | None:
        """Return the stored value for ``key``, or None if nothing is stored."""
        raise NotImplementedError

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        """Overwrite the value stored under ``key``."""
        raise NotImplementedError


class MemoryRegistryStore(RegistryStore):
    """In-process store; used by tests and one-shot sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(initial or {})
        self.save_count = 0

    def load(self, key: str) -> str | None:
        return self.values.get(key)

    def save(self, key: str, value: str) -> None:
        self.values[key] = value
        self.save_count += 1


class JsonFileRegistryStore(RegistryStore):
    """
    Store backed by one JSON object on disk mapping keys to string values.

    Every save rewrites the whole file. Concurrent writers are not supported.
    """

    def __init__(self, path: str | Path):
        """
        Initialize the store.

        Args:
            path: Location of the JSON file (created on first save)
        """
        self.path = Path(path)

    def load(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def save(self, key: str, value: str) -> None:
        values = self._read_all()
        values[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(values, f, indent=2, ensure_ascii=False)

    def _read_all(self) -> dict[str, object]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                values = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError, RecursionError) as e:
            log.warning("Ignoring unreadable registry store %s: %s", self.path, e)
            return {}
        if not isinstance(values, dict):
            log.warning("Ignoring registry store %s: expected a JSON object", self.path)
            return {}
        return values

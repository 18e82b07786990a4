"""Enemy type registry persisted through a registry store."""

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from ..constants import DEFAULT_ENEMY_ICON, ENEMY_REGISTRY_KEY
from ..log import get_logger
from .base import TypeRegistry
from .store import MemoryRegistryStore, RegistryStore

log = get_logger(__name__)


@dataclass(frozen=True)
class EnemyType:
    """
    An enemy the game can spawn.

    ``scene_path`` and ``uid`` are only read by the wave exporter to
    cross-reference the engine's own assets.
    """
    id: str
    name: str
    icon: str = DEFAULT_ENEMY_ICON
    scene_path: str = ""
    uid: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "scenePath": self.scene_path,
            "uid": self.uid,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of checking enemy types for engine cross-reference completeness."""
    valid: bool
    warnings: list[str] = field(default_factory=list)


class EnemyTypeRegistry(TypeRegistry[EnemyType]):
    """
    Registry of enemy types.

    Unknown ids resolve to the first registered enemy (None when empty). Every
    mutation saves the full entry list to the store; construction reloads it.
    """

    def __init__(self, store: RegistryStore | None = None):
        """
        Initialize the registry from the store's snapshot.

        Args:
            store: Durable storage for the entry list (in-memory when omitted)
        """
        super().__init__()
        self.store = store if store is not None else MemoryRegistryStore()
        self._load()

    def _build_entry(self, entry_id: str, config: Mapping[str, Any]) -> EnemyType:
        return EnemyType(
            id=entry_id,
            name=str(config.get("name") or entry_id),
            icon=str(config.get("icon") or DEFAULT_ENEMY_ICON),
            scene_path=str(_first_present(config, "scenePath", "scene_path") or ""),
            uid=str(config.get("uid") or ""),
        )

    def _fallback(self) -> EnemyType | None:
        return next(iter(self._entries.values()), None)

    def _on_change(self) -> None:
        self._save()

    def validate(self, entry_id: str) -> ValidationResult:
        """Check one enemy type for a scene path and uid."""
        entry = self._entries.get(entry_id)
        if entry is None:
            return ValidationResult(valid=False, warnings=[f"Enemy type '{entry_id}' not found"])

        warnings = []
        if not entry.scene_path:
            warnings.append(f"Enemy '{entry.name}' ({entry.id}) has no scenePath")
        if not entry.uid:
            warnings.append(f"Enemy '{entry.name}' ({entry.id}) has no uid")
        return ValidationResult(valid=not warnings, warnings=warnings)

    def validate_all(self) -> ValidationResult:
        """Check every enemy type; valid only if all of them are."""
        warnings: list[str] = []
        valid = True
        for entry_id in self._entries:
            result = self.validate(entry_id)
            valid = valid and result.valid
            warnings.extend(result.warnings)
        return ValidationResult(valid=valid, warnings=warnings)

    def _save(self) -> None:
        snapshot = [entry.to_dict() for entry in self._entries.values()]
        self.store.save(ENEMY_REGISTRY_KEY, json.dumps(snapshot, ensure_ascii=False))

    def _load(self) -> None:
        raw = self.store.load(ENEMY_REGISTRY_KEY)
        if raw is None:
            return
        try:
            snapshot = json.loads(raw)
            if not isinstance(snapshot, list):
                raise TypeError("enemy registry snapshot must be a list")
            entries = {}
            for item in snapshot:
                entry_id = str(item["id"])
                entries[entry_id] = self._build_entry(entry_id, item)
        except (KeyError, TypeError, ValueError, AttributeError, RecursionError) as e:
            log.error("Failed to load enemy types from store, starting empty: %s", e)
            return
        self._entries = entries
        log.debug("Loaded %d enemy types from store", len(entries))


def _first_present(config: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if config.get(key):
            return config[key]
    return None

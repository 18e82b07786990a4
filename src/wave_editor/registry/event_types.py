"""Event type registry with built-in types and user-defined extensions."""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from ..constants import DEFAULT_EVENT_COLOR, DEFAULT_EVENT_TYPE, SPAWN_EVENT_TYPE
from ..errors import InvalidTypeDefinition
from .base import TypeRegistry
from .fields import FieldSpec, FieldValue, default_values, fields_from_mapping, normalize_fields


@dataclass(frozen=True)
class EventType:
    """A named event template with a display color and a field schema."""
    id: str
    name: str
    color: str = DEFAULT_EVENT_COLOR
    icon: str | None = None
    fields: tuple[FieldSpec, ...] = field(default_factory=tuple)

    def default_values(self) -> dict[str, FieldValue]:
        return default_values(self.fields)

    def get_field(self, name: str) -> FieldSpec | None:
        return next((spec for spec in self.fields if spec.name == name), None)


BUILTIN_EVENT_TYPES: dict[str, dict[str, Any]] = {
    DEFAULT_EVENT_TYPE: {
        "name": "Default event",
        "color": DEFAULT_EVENT_COLOR,
        "fields": {"description": ""},
    },
    "audio": {
        "name": "Audio event",
        "color": "#e74c3c",
        "fields": {"soundFile": "", "volume": 1.0, "loop": False},
    },
    "animation": {
        "name": "Animation event",
        "color": "#2ecc71",
        "fields": {"animationType": "", "duration": 1.0, "easing": "linear"},
    },
    "marker": {
        "name": "Marker",
        "color": "#f39c12",
        "fields": {"label": "", "note": ""},
    },
    SPAWN_EVENT_TYPE: {
        "name": "Spawn enemy",
        "color": "#9b59b6",
        "fields": {
            "enemyId": "",
            "count": 1,
            "spawnPosition": "random",
            "formationType": "single",
        },
    },
}


def type_id_from_name(name: str) -> str:
    """Derive a registry id from a display name (``"Boss Wave"`` -> ``"boss_wave"``)."""
    return re.sub(r"\s+", "_", name.strip().lower())


class EventTypeRegistry(TypeRegistry[EventType]):
    """Registry of event types; unknown ids resolve to the ``default`` type."""

    def __init__(self, include_builtins: bool = True):
        super().__init__()
        if include_builtins:
            for type_id, config in BUILTIN_EVENT_TYPES.items():
                self.register(type_id, config)

    def _build_entry(self, entry_id: str, config: Mapping[str, Any]) -> EventType:
        return EventType(
            id=entry_id,
            name=str(config.get("name") or entry_id),
            color=str(config.get("color") or DEFAULT_EVENT_COLOR),
            icon=config.get("icon"),
            fields=normalize_fields(config.get("fields")),
        )

    def _fallback(self) -> EventType:
        default = self._entries.get(DEFAULT_EVENT_TYPE)
        if default is None:
            # The default type was removed; rebuild it so get() never returns None.
            default = self._build_entry(DEFAULT_EVENT_TYPE, BUILTIN_EVENT_TYPES[DEFAULT_EVENT_TYPE])
        return default

    def get(self, entry_id: str) -> EventType:
        entry = self._entries.get(entry_id)
        return entry if entry is not None else self._fallback()

    def register_from_form(self, name: str, color: str = DEFAULT_EVENT_COLOR, fields_text: str = "") -> EventType:
        """
        Register a custom type from raw form input.

        Args:
            name: Display name; the id is derived from it
            color: Display color
            fields_text: JSON object mapping field names to default values (may be empty)

        Raises:
            InvalidTypeDefinition: If the name is empty or the fields are not a JSON object
        """
        if not name or not name.strip():
            raise InvalidTypeDefinition("Event type name is required")
        try:
            fields = json.loads(fields_text) if fields_text.strip() else {}
        except (json.JSONDecodeError, RecursionError) as e:
            raise InvalidTypeDefinition(f"Custom fields must be valid JSON: {e}") from e
        if not isinstance(fields, dict):
            raise InvalidTypeDefinition("Custom fields must be a JSON object")
        return self.register(
            type_id_from_name(name),
            {"name": name.strip(), "color": color, "fields": fields_from_mapping(fields)},
        )

    def load_definitions(self, path: str | Path) -> list[EventType]:
        """
        Register event types from a JSON file holding a list of ``{id, name, color, icon, fields}``.

        Raises:
            InvalidTypeDefinition: If the file cannot be read or has the wrong shape
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                definitions = json.load(f)
        except (OSError, json.JSONDecodeError, RecursionError) as e:
            raise InvalidTypeDefinition(f"Cannot read event types from '{path}': {e}") from e
        if not isinstance(definitions, list):
            raise InvalidTypeDefinition(f"Event types file '{path}' must hold a JSON list")

        registered = []
        for definition in definitions:
            try:
                type_id = definition.get("id") or type_id_from_name(definition["name"])
                registered.append(self.register(str(type_id), definition))
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise InvalidTypeDefinition(f"Invalid event type definition {definition!r}: {e}") from e
        return registered

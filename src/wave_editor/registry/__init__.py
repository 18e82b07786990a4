"""Type registries for event types and enemy types."""

from .base import TypeRegistry
from .enemy_types import EnemyType, EnemyTypeRegistry, ValidationResult
from .event_types import BUILTIN_EVENT_TYPES, EventType, EventTypeRegistry, type_id_from_name
from .fields import FieldKind, FieldSpec, fields_from_mapping
from .store import JsonFileRegistryStore, MemoryRegistryStore, RegistryStore

__all__ = [
    "TypeRegistry",
    "EnemyType",
    "EnemyTypeRegistry",
    "ValidationResult",
    "BUILTIN_EVENT_TYPES",
    "EventType",
    "EventTypeRegistry",
    "type_id_from_name",
    "FieldKind",
    "FieldSpec",
    "fields_from_mapping",
    "JsonFileRegistryStore",
    "MemoryRegistryStore",
    "RegistryStore",
]

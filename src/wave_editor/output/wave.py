"""Derive an engine-ready wave configuration from a timeline."""

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from ..constants import SPAWN_EVENT_TYPE
from ..log import get_logger
from ..model import Timeline
from ..registry import EnemyType, EnemyTypeRegistry, ValidationResult
from ..registry.event_types import BUILTIN_EVENT_TYPES

log = get_logger(__name__)

_SPAWN_DEFAULTS: Mapping[str, Any] = BUILTIN_EVENT_TYPES[SPAWN_EVENT_TYPE]["fields"]

ConfirmCallback = Callable[[list[str]], bool]


@dataclass(frozen=True)
class SpawnRecord:
    """One enemy spawn at a point in the wave."""
    time: float
    enemy_id: str
    enemy_name: str
    count: Any
    spawn_position: Any
    formation_type: Any
    scene_path: str
    uid: str
    track_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "time": self.time,
            "enemyId": self.enemy_id,
            "enemyName": self.enemy_name,
            "count": self.count,
            "spawnPosition": self.spawn_position,
            "formationType": self.formation_type,
            "scenePath": self.scene_path,
            "uid": self.uid,
            "trackName": self.track_name,
        }


@dataclass(frozen=True)
class WaveData:
    """Read-only projection of a timeline for the game engine."""
    wave_name: str
    duration: float
    enemies: tuple[EnemyType, ...]
    spawn_events: tuple[SpawnRecord, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "waveName": self.wave_name,
            "duration": self.duration,
            "enemies": [enemy.to_dict() for enemy in self.enemies],
            "spawnEvents": [record.to_dict() for record in self.spawn_events],
        }


def generate_wave_data(timeline: Timeline, enemy_registry: EnemyTypeRegistry) -> WaveData:
    """
    Collect every spawn event across all tracks, sorted by time.

    Enemy names and engine references come from the registry; an unknown
    enemy id resolves through the registry's fallback.
    """
    records = [
        _spawn_record(pair.track.name, pair.event.time, pair.event.custom_data, enemy_registry)
        for pair in timeline.get_all_events()
        if pair.event.type == SPAWN_EVENT_TYPE
    ]
    # Stable: equal times keep track order, then event order
    records.sort(key=lambda record: record.time)
    return WaveData(
        wave_name=timeline.name,
        duration=timeline.duration,
        enemies=tuple(enemy_registry.get_all()),
        spawn_events=tuple(records),
    )


def _spawn_record(
    track_name: str,
    time: float,
    data: Mapping[str, Any],
    enemy_registry: EnemyTypeRegistry,
) -> SpawnRecord:
    enemy_id = str(data.get("enemyId", _SPAWN_DEFAULTS["enemyId"]))
    enemy = enemy_registry.get(enemy_id)
    return SpawnRecord(
        time=time,
        enemy_id=enemy_id,
        enemy_name=enemy.name if enemy else "",
        count=data.get("count", _SPAWN_DEFAULTS["count"]),
        spawn_position=data.get("spawnPosition", _SPAWN_DEFAULTS["spawnPosition"]),
        formation_type=data.get("formationType", _SPAWN_DEFAULTS["formationType"]),
        scene_path=enemy.scene_path if enemy else "",
        uid=enemy.uid if enemy else "",
        track_name=track_name,
    )


class WaveExporter:
    """Validates the enemy registry, then builds wave data."""

    def __init__(self, enemy_registry: EnemyTypeRegistry):
        self.enemy_registry = enemy_registry

    def validate(self) -> ValidationResult:
        return self.enemy_registry.validate_all()

    def generate_wave_data(
        self, timeline: Timeline, enemy_registry: EnemyTypeRegistry | None = None
    ) -> WaveData:
        """Build wave data without validation."""
        registry = self.enemy_registry if enemy_registry is None else enemy_registry
        return generate_wave_data(timeline, registry)

    def export(self, timeline: Timeline, confirm: ConfirmCallback | None = None) -> WaveData | None:
        """
        Build wave data, asking ``confirm`` first if any enemy type is incomplete.

        Args:
            timeline: Timeline to export
            confirm: Receives the warning list and returns True to export anyway;
                without a callback the warnings are logged and export proceeds

        Returns:
            The wave data, or None if the caller declined
        """
        result = self.validate()
        if not result.valid:
            if confirm is None:
                for warning in result.warnings:
                    log.warning("Wave export: %s", warning)
            elif not confirm(result.warnings):
                log.info("Wave export of '%s' cancelled by user", timeline.name)
                return None
        return generate_wave_data(timeline, self.enemy_registry)

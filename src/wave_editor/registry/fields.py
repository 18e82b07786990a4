"""Tagged field schema for event type payloads."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping

from ..log import get_logger

log = get_logger(__name__)

FieldValue = bool | float | str


class FieldKind(str, Enum):
    """Input kind of a custom event field."""
    BOOLEAN = "boolean"
    NUMBER = "number"
    TEXT = "text"

    @classmethod
    def infer(cls, value: Any) -> "FieldKind":
        """Infer the kind from a default value (bool is checked before number)."""
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, (int, float)):
            return cls.NUMBER
        return cls.TEXT


@dataclass(frozen=True)
class FieldSpec:
    """A single declared field: name, input kind, and default value."""
    name: str
    kind: FieldKind
    default: FieldValue

    @classmethod
    def from_default(cls, name: str, default: Any) -> "FieldSpec":
        kind = FieldKind.infer(default)
        return cls(name=name, kind=kind, default=_coerce_default(kind, default))

    def coerce(self, raw: Any) -> FieldValue:
        """
        Convert user input to this field's kind.

        Text input for a boolean accepts true/false, yes/no, on/off and 1/0.

        Raises:
            ValueError: If ``raw`` cannot be read as this field's kind
        """
        if self.kind is FieldKind.BOOLEAN:
            if isinstance(raw, bool):
                return raw
            text = str(raw).strip().lower()
            if text in _TRUE_WORDS:
                return True
            if text in _FALSE_WORDS:
                return False
            raise ValueError(f"Field '{self.name}' expects a boolean, got {raw!r}")
        if self.kind is FieldKind.NUMBER:
            if isinstance(raw, bool):
                raise ValueError(f"Field '{self.name}' expects a number, got {raw!r}")
            try:
                number = float(raw)
            except (TypeError, ValueError):
                raise ValueError(f"Field '{self.name}' expects a number, got {raw!r}") from None
            # Whole numbers stay ints so counts serialize as 3, not 3.0
            return int(number) if number.is_integer() else number
        return str(raw)


_TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS = frozenset({"false", "no", "off", "0", ""})


def _coerce_default(kind: FieldKind, value: Any) -> FieldValue:
    if kind is FieldKind.BOOLEAN:
        return bool(value)
    if kind is FieldKind.NUMBER:
        return value
    return "" if value is None else str(value)


def fields_from_mapping(defaults: Mapping[str, Any]) -> tuple[FieldSpec, ...]:
    """Build a schema from a ``{name: default}`` mapping."""
    return tuple(FieldSpec.from_default(name, value) for name, value in defaults.items())


def normalize_fields(fields: Any) -> tuple[FieldSpec, ...]:
    """
    Accept either a ``{name: default}`` mapping or an iterable of field specs.

    Iterable items may be :class:`FieldSpec` instances or ``{name, kind, default}`` dicts.
    Anything else is logged and skipped.
    """
    if not fields:
        return ()
    if isinstance(fields, Mapping):
        return fields_from_mapping(fields)
    if isinstance(fields, (str, bytes)) or not isinstance(fields, Iterable):
        log.warning("Ignoring field schema of unsupported type %s", type(fields).__name__)
        return ()

    specs = []
    for item in fields:
        try:
            specs.append(_field_from_item(item))
        except (KeyError, TypeError, ValueError) as e:
            log.warning("Ignoring invalid field definition %r: %s", item, e)
    return tuple(specs)


def _field_from_item(item: Any) -> FieldSpec:
    if isinstance(item, FieldSpec):
        return item
    kind = FieldKind(item["kind"]) if "kind" in item else FieldKind.infer(item["default"])
    return FieldSpec(name=str(item["name"]), kind=kind, default=_coerce_default(kind, item["default"]))


def default_values(fields: Iterable[FieldSpec]) -> dict[str, FieldValue]:
    return {field.name: field.default for field in fields}

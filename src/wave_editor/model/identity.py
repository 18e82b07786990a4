"""Identifier and timestamp helpers shared by the timeline model."""

import random
import time
from datetime import datetime, timezone

_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_ID_SUFFIX_LENGTH = 9


def generate_id(prefix: str, rng: random.Random | None = None) -> str:
    """Build an opaque id such as ``event_1700000000000_k3j9x0a2b``."""
    source = rng or random
    suffix = "".join(source.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"


def utc_now() -> datetime:
    """Current UTC time truncated to milliseconds (the wire precision)."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond - now.microsecond % 1000)


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as ISO-8601 with millisecond precision and a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def parse_timestamp(text: str) -> datetime:
    """
    Parse an ISO-8601 timestamp produced by :func:`format_timestamp`.

    Raises:
        TypeError: If ``text`` is not a string
        ValueError: If ``text`` is not a valid timestamp
    """
    if not isinstance(text, str):
        raise TypeError(f"Timestamp must be a string, got {type(text).__name__}")
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

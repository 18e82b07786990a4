"""Output providers and the wave configuration exporter."""

from dataclasses import dataclass
from typing import Any

from .base import JsonOutputProvider, OutputProvider
from .json_providers import TimelineOutputProvider, WaveOutputProvider
from .wave import SpawnRecord, WaveData, WaveExporter, generate_wave_data


@dataclass(frozen=True)
class OutputFormatSpec:
    name: str
    provider_class: type[OutputProvider[Any]]


_OUTPUT_FORMATS: dict[str, OutputFormatSpec] = {
    "timeline": OutputFormatSpec(
        name="timeline",
        provider_class=TimelineOutputProvider,
    ),
    "wave": OutputFormatSpec(
        name="wave",
        provider_class=WaveOutputProvider,
    ),
}


def resolve_output_provider(output_format: str, file_path: str = "") -> OutputProvider[Any]:
    """
    Resolve the output provider for a format name.

    Args:
        output_format: ``timeline`` or ``wave`` (case-insensitive)
        file_path: Output file path handed to the provider

    Returns:
        An OutputProvider instance

    Raises:
        ValueError: If the format is not supported
    """
    spec = _OUTPUT_FORMATS.get(output_format.lower())
    if spec is None:
        supported = ", ".join(supported_output_formats())
        raise ValueError(f"Unsupported output format: {output_format}. Supported formats: {supported}")
    return spec.provider_class(file_path)


def supported_output_formats() -> tuple[str, ...]:
    """Return supported output format names."""
    return tuple(_OUTPUT_FORMATS.keys())


__all__ = [
    "OutputFormatSpec",
    "OutputProvider",
    "JsonOutputProvider",
    "TimelineOutputProvider",
    "WaveOutputProvider",
    "SpawnRecord",
    "WaveData",
    "WaveExporter",
    "generate_wave_data",
    "resolve_output_provider",
    "supported_output_formats",
]

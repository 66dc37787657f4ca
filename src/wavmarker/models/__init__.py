"""Pydantic data models for wav-marker."""

from wavmarker.models.config import MarkerConfig
from wavmarker.models.labels import LabelEntry, MarkerTables
from wavmarker.models.wave import ChunkLocation, FormatDescriptor, WaveIndex

__all__ = [
    "MarkerConfig",
    "LabelEntry",
    "MarkerTables",
    "ChunkLocation",
    "FormatDescriptor",
    "WaveIndex",
]

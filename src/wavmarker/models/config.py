"""Configuration model for a marker conversion."""

from __future__ import annotations

from pydantic import BaseModel, Field


class MarkerConfig(BaseModel):
    """Tunables for one conversion. Loadable from YAML via ``--config``."""

    max_start_seconds: float = Field(default=48660.0, gt=0.0)
    max_other_chunks: int = Field(default=256, ge=0)
    copy_buffer_size: int = Field(default=1024 * 1024, ge=1024)
    verify_output: bool = True

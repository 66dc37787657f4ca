"""Label and marker-table models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from wavmarker.models.wave import U32_MAX


class LabelEntry(BaseModel):
    """One accepted line of a label file."""

    sample_index: int = Field(ge=0, le=U32_MAX)
    text: bytes
    start_seconds: float = 0.0
    line_number: int = 0

    @property
    def display_text(self) -> str:
        return self.text.decode("utf-8", errors="replace")


class MarkerTables(BaseModel):
    """Serialized ``cue `` and ``adtl`` bodies built from the label entries.

    ``cue_body`` is the cue count followed by the 24-byte cue records.
    ``list_body`` is the concatenated ``labl`` records without the
    ``adtl`` form type.
    """

    count: int = Field(ge=1, le=U32_MAX)
    cue_body: bytes
    list_body: bytes

    @property
    def cue_chunk_size(self) -> int:
        return len(self.cue_body)

    @property
    def list_chunk_size(self) -> int:
        return 4 + len(self.list_body)

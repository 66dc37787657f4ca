"""Models describing the layout of an input RIFF/WAVE file."""

from __future__ import annotations

import struct

from pydantic import BaseModel, Field

U16_MAX = 0xFFFF
U32_MAX = 0xFFFFFFFF

WAVE_FORMAT_PCM = 0x0001
WAVE_FORMAT_IEEE_FLOAT = 0x0003
SUPPORTED_FORMATS = (WAVE_FORMAT_PCM, WAVE_FORMAT_IEEE_FLOAT)

FORMAT_DESCRIPTOR_SIZE = 16
_FORMAT_STRUCT = struct.Struct("<HHIIHH")


class FormatDescriptor(BaseModel):
    """The 16-byte body at the start of a ``fmt `` chunk."""

    compression_code: int = Field(ge=0, le=U16_MAX)
    channels: int = Field(ge=0, le=U16_MAX)
    sample_rate: int = Field(ge=0, le=U32_MAX)
    avg_bytes_per_second: int = Field(ge=0, le=U32_MAX)
    block_align: int = Field(ge=0, le=U16_MAX)
    bits_per_sample: int = Field(ge=0, le=U16_MAX)

    @classmethod
    def from_bytes(cls, raw: bytes) -> FormatDescriptor:
        (
            compression_code,
            channels,
            sample_rate,
            avg_bytes_per_second,
            block_align,
            bits_per_sample,
        ) = _FORMAT_STRUCT.unpack(raw)
        return cls(
            compression_code=compression_code,
            channels=channels,
            sample_rate=sample_rate,
            avg_bytes_per_second=avg_bytes_per_second,
            block_align=block_align,
            bits_per_sample=bits_per_sample,
        )

    def to_bytes(self) -> bytes:
        return _FORMAT_STRUCT.pack(
            self.compression_code,
            self.channels,
            self.sample_rate,
            self.avg_bytes_per_second,
            self.block_align,
            self.bits_per_sample,
        )

    @property
    def is_supported(self) -> bool:
        return self.compression_code in SUPPORTED_FORMATS


class ChunkLocation(BaseModel):
    """A byte range in the input stream.

    For whole chunks ``size`` counts the 8-byte header plus the payload.
    The alignment pad byte is never part of ``size``.
    """

    start_offset: int = Field(ge=0)
    size: int = Field(ge=0)
    chunk_id: str | None = None

    @property
    def pad(self) -> int:
        return self.size % 2

    @property
    def padded_size(self) -> int:
        return self.size + self.pad


class WaveIndex(BaseModel):
    """Everything the scanner learned about an input file."""

    format: FormatDescriptor
    format_chunk_size: int = Field(ge=FORMAT_DESCRIPTOR_SIZE, le=U32_MAX)
    format_extra: ChunkLocation | None = None
    data: ChunkLocation
    others: list[ChunkLocation] = Field(default_factory=list)
    dropped_cue_chunks: int = 0
    dropped_adtl_chunks: int = 0

    @property
    def format_extra_size(self) -> int:
        return self.format_extra.size if self.format_extra else 0

    @property
    def sample_data_size(self) -> int:
        return self.data.size - 8

    @property
    def frame_count(self) -> int:
        if not self.format.block_align:
            return 0
        return self.sample_data_size // self.format.block_align

"""Read cue points and their labels back out of a WAVE file."""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass, field
from typing import BinaryIO

from wavmarker.riff.endian import read_u32_le
from wavmarker.riff.scanner import CHUNK_HEADER_SIZE, WaveStructureError

_CUE_RECORD = struct.Struct("<II4sIII")


@dataclass
class CuePoint:
    """A decoded 24-byte cue record."""

    cue_id: int
    position: int
    data_chunk_id: bytes
    chunk_start: int
    block_start: int
    frame_offset: int


@dataclass
class ChunkInfo:
    """A top-level chunk header as found in the file."""

    chunk_id: bytes
    offset: int
    size: int
    list_type: bytes | None = None


@dataclass
class MarkerReport:
    """Everything ``read_markers`` found in a file."""

    riff_size: int
    file_size: int
    chunks: list[ChunkInfo] = field(default_factory=list)
    cue_points: list[CuePoint] = field(default_factory=list)
    labels: dict[int, bytes] = field(default_factory=dict)
    cue_bodies: list[bytes] = field(default_factory=list)
    adtl_bodies: list[bytes] = field(default_factory=list)

    def chunk_ids(self) -> list[bytes]:
        return [c.chunk_id for c in self.chunks]


def parse_cue_body(body: bytes) -> list[CuePoint]:
    if len(body) < 4:
        raise WaveStructureError("Cue chunk is too short to hold a cue count")
    count = read_u32_le(body[:4])
    if len(body) < 4 + count * _CUE_RECORD.size:
        raise WaveStructureError(f"Cue chunk declares {count} cue points but is truncated")
    return [
        CuePoint(*_CUE_RECORD.unpack_from(body, 4 + i * _CUE_RECORD.size))
        for i in range(count)
    ]


def parse_adtl_body(body: bytes) -> dict[int, bytes]:
    """Map cue id to label text for every ``labl`` record in an adtl list.

    ``body`` starts after the ``adtl`` form type. Other sub-record types
    are skipped.
    """
    labels: dict[int, bytes] = {}
    pos = 0
    while pos + CHUNK_HEADER_SIZE <= len(body):
        sub_id = body[pos:pos + 4]
        sub_size = read_u32_le(body[pos + 4:pos + 8])
        payload = body[pos + 8:pos + 8 + sub_size]
        if sub_id == b"labl" and len(payload) >= 4:
            cue_id = read_u32_le(payload[:4])
            text = payload[4:]
            if text.endswith(b"\x00"):
                text = text[:-1]
            labels[cue_id] = text
        pos += CHUNK_HEADER_SIZE + sub_size + sub_size % 2
    return labels


def read_markers(stream: BinaryIO) -> MarkerReport:
    """Walk the top-level chunks of *stream* and decode its markers."""
    file_size = stream.seek(0, io.SEEK_END)
    stream.seek(0)
    header = stream.read(12)
    if len(header) < 12 or header[:4] != b"RIFF" or header[8:12] != b"WAVE":
        raise WaveStructureError("Not a RIFF/WAVE file")

    report = MarkerReport(riff_size=read_u32_le(header[4:8]), file_size=file_size)
    pos = 12
    while pos + CHUNK_HEADER_SIZE <= file_size:
        stream.seek(pos)
        chunk_header = stream.read(CHUNK_HEADER_SIZE)
        chunk_id = chunk_header[:4]
        size = read_u32_le(chunk_header[4:8])
        info = ChunkInfo(chunk_id=chunk_id, offset=pos, size=size)

        if chunk_id == b"cue ":
            body = stream.read(size)
            report.cue_bodies.append(body)
            report.cue_points.extend(parse_cue_body(body))
        elif chunk_id == b"LIST" and size >= 4:
            body = stream.read(size)
            info.list_type = body[:4]
            if info.list_type == b"adtl":
                report.adtl_bodies.append(body[4:])
                report.labels.update(parse_adtl_body(body[4:]))

        report.chunks.append(info)
        pos += CHUNK_HEADER_SIZE + size + size % 2

    return report

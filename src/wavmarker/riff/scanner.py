"""Top-level RIFF/WAVE chunk scanner.

Walks the chunks of a seekable stream and records where the format
descriptor, the sample data and every chunk to be preserved live.
Existing ``cue `` and ``LIST/adtl`` chunks are skipped so the writer can
replace them.
"""

from __future__ import annotations

import io
from typing import BinaryIO

from rich.markup import escape

from wavmarker.models.wave import (
    FORMAT_DESCRIPTOR_SIZE,
    ChunkLocation,
    FormatDescriptor,
    WaveIndex,
)
from wavmarker.riff.endian import read_u32_le
from wavmarker.utils.progress import log, log_step, log_warning

RIFF_HEADER_SIZE = 12
CHUNK_HEADER_SIZE = 8
DEFAULT_MAX_OTHER_CHUNKS = 256


class WaveStructureError(ValueError):
    """Raised when the input is not a usable RIFF/WAVE container."""


def _format_id(chunk_id: bytes) -> str:
    return chunk_id.decode("latin-1")


class _Cursor:
    """Bounds-checked reads and skips over the input stream."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self.end = stream.seek(0, io.SEEK_END)
        stream.seek(0)

    @property
    def pos(self) -> int:
        return self.stream.tell()

    def read_exact(self, n: int, what: str) -> bytes:
        raw = self.stream.read(n)
        if len(raw) != n:
            raise WaveStructureError(
                f"Unexpected end of file while reading {what} "
                f"(wanted {n} bytes at offset {self.pos - len(raw)}, got {len(raw)})"
            )
        return raw

    def skip_payload(self, size: int, what: str) -> None:
        """Skip *size* payload bytes plus the pad byte when *size* is odd."""
        target = self.pos + size
        if target > self.end:
            raise WaveStructureError(
                f"Chunk {what} at offset {self.pos} declares {size} bytes "
                f"but the file ends after {self.end - self.pos}"
            )
        # A missing final pad byte at end of file is tolerated.
        if size % 2 and target < self.end:
            target += 1
        self.stream.seek(target)


def _read_header(cursor: _Cursor) -> None:
    header = cursor.stream.read(RIFF_HEADER_SIZE)
    if len(header) < RIFF_HEADER_SIZE:
        raise WaveStructureError("Input file is too short to be a WAVE file")
    if header[0:4] != b"RIFF":
        raise WaveStructureError("Input file is not a RIFF file")
    if header[8:12] != b"WAVE":
        raise WaveStructureError("Input file is not a WAVE file")
    if read_u32_le(header[4:8]) <= 4 or cursor.end <= RIFF_HEADER_SIZE:
        raise WaveStructureError("Input file is an empty WAVE file")


def scan_wave(
    stream: BinaryIO,
    *,
    max_other_chunks: int = DEFAULT_MAX_OTHER_CHUNKS,
) -> WaveIndex:
    """Scan a RIFF/WAVE stream and return its chunk index.

    Raises WaveStructureError for a bad header, truncated chunks, a
    missing or repeated ``fmt ``/``data`` chunk, an unsupported
    compression code or too many preserved chunks.
    """
    cursor = _Cursor(stream)
    _read_header(cursor)

    fmt: FormatDescriptor | None = None
    fmt_size = 0
    fmt_extra: ChunkLocation | None = None
    data: ChunkLocation | None = None
    others: list[ChunkLocation] = []
    dropped_cue = 0
    dropped_adtl = 0

    while True:
        chunk_start = cursor.pos
        chunk_id = stream.read(4)
        if not chunk_id:
            break
        if len(chunk_id) < 4:
            log_warning(
                f"Ignoring {len(chunk_id)} trailing byte(s) at offset {chunk_start}"
            )
            break

        name = _format_id(chunk_id)
        size = read_u32_le(cursor.read_exact(4, f"size of chunk '{name}'"))

        if chunk_id == b"fmt ":
            if fmt is not None:
                raise WaveStructureError("Input file contains more than one format chunk")
            if size < FORMAT_DESCRIPTOR_SIZE:
                raise WaveStructureError(
                    f"Format chunk is {size} bytes, expected at least {FORMAT_DESCRIPTOR_SIZE}"
                )
            fmt = FormatDescriptor.from_bytes(
                cursor.read_exact(FORMAT_DESCRIPTOR_SIZE, "format descriptor")
            )
            if not fmt.is_supported:
                raise WaveStructureError(
                    f"Compressed audio formats are not supported "
                    f"(compression code {fmt.compression_code})"
                )
            fmt_size = size
            extra = size - FORMAT_DESCRIPTOR_SIZE
            if extra:
                fmt_extra = ChunkLocation(start_offset=cursor.pos, size=extra)
            cursor.skip_payload(extra, "'fmt ' extra bytes")
            log_step(
                "Scan",
                f"Got format chunk: {fmt.channels} channel(s), {fmt.sample_rate} Hz, "
                f"{fmt.bits_per_sample}-bit"
                + (f", {extra} extra byte(s)" if extra else ""),
            )

        elif chunk_id == b"data":
            if data is not None:
                raise WaveStructureError("Input file contains more than one data chunk")
            data = ChunkLocation(
                start_offset=chunk_start,
                size=CHUNK_HEADER_SIZE + size,
                chunk_id=name,
            )
            cursor.skip_payload(size, "'data'")
            log_step("Scan", f"Got data chunk: {size} bytes")

        elif chunk_id == b"cue ":
            cursor.skip_payload(size, "'cue '")
            dropped_cue += 1
            log_step("Scan", "Found existing cue chunk, dropping it")

        elif chunk_id == b"LIST" and size >= 4 and cursor.read_exact(4, "list type") == b"adtl":
            cursor.skip_payload(size - 4, "'LIST'")
            dropped_adtl += 1
            log_step("Scan", "Found existing label chunk, dropping it")

        else:
            if len(others) >= max_other_chunks:
                raise WaveStructureError(
                    f"Input file has more chunks than the maximum supported "
                    f"({max_other_chunks})"
                )
            # Rewind past any peeked list type so the full range is recorded.
            stream.seek(chunk_start + CHUNK_HEADER_SIZE)
            others.append(ChunkLocation(
                start_offset=chunk_start,
                size=CHUNK_HEADER_SIZE + size,
                chunk_id=name,
            ))
            cursor.skip_payload(size, repr(name))
            log_step("Scan", f"Found chunk type '{escape(name)}', size: {size} bytes")

    if fmt is None or data is None:
        raise WaveStructureError(
            "Input file did not contain any format data or did not contain any sample data"
        )

    log(f"Indexed {len(others)} chunk(s) to preserve", style="")

    return WaveIndex(
        format=fmt,
        format_chunk_size=fmt_size,
        format_extra=fmt_extra,
        data=data,
        others=others,
        dropped_cue_chunks=dropped_cue,
        dropped_adtl_chunks=dropped_adtl,
    )

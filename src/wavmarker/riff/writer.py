"""Output writer: header, format, data, new markers, preserved chunks."""

from __future__ import annotations

from typing import BinaryIO

from wavmarker.models.labels import MarkerTables
from wavmarker.models.wave import FORMAT_DESCRIPTOR_SIZE, U32_MAX, WaveIndex
from wavmarker.riff.copier import DEFAULT_BUFFER_SIZE, copy_range
from wavmarker.riff.endian import write_u32_le
from wavmarker.riff.scanner import CHUNK_HEADER_SIZE, WaveStructureError
from wavmarker.utils.progress import log_step

PAD = b"\x00"


def riff_size(index: WaveIndex, tables: MarkerTables) -> int:
    """Value of the RIFF header's length field for the output file."""
    extra = index.format_extra_size
    total = 4  # "WAVE"
    total += CHUNK_HEADER_SIZE + FORMAT_DESCRIPTOR_SIZE + extra + extra % 2
    total += index.data.padded_size
    total += sum(other.padded_size for other in index.others)
    total += CHUNK_HEADER_SIZE + tables.cue_chunk_size
    total += CHUNK_HEADER_SIZE + tables.list_chunk_size + len(tables.list_body) % 2
    return total


def _write_chunk_header(dst: BinaryIO, chunk_id: bytes, size: int) -> None:
    dst.write(chunk_id + write_u32_le(size))


def write_wave(
    src: BinaryIO,
    dst: BinaryIO,
    index: WaveIndex,
    tables: MarkerTables,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> int:
    """Write the marked-up file to *dst*. Returns the RIFF length written.

    Order: RIFF header, ``fmt `` (with its extra bytes), ``data``,
    ``cue ``, ``LIST/adtl``, then every preserved chunk in input order.
    Every odd-sized region is followed by one zero pad byte.
    """
    size = riff_size(index, tables)
    if size > U32_MAX:
        raise WaveStructureError(
            f"Output would be {size + 8} bytes, larger than a RIFF file can describe"
        )

    log_step("Write", "Writing output file")
    dst.write(b"RIFF" + write_u32_le(size) + b"WAVE")

    _write_chunk_header(dst, b"fmt ", index.format_chunk_size)
    dst.write(index.format.to_bytes())
    if index.format_extra is not None:
        copy_range(src, dst, index.format_extra, buffer_size=buffer_size)
        dst.write(PAD * index.format_extra.pad)

    copy_range(src, dst, index.data, buffer_size=buffer_size)
    dst.write(PAD * index.data.pad)

    _write_chunk_header(dst, b"cue ", tables.cue_chunk_size)
    dst.write(tables.cue_body)

    _write_chunk_header(dst, b"LIST", tables.list_chunk_size)
    dst.write(b"adtl")
    dst.write(tables.list_body)
    dst.write(PAD * (len(tables.list_body) % 2))

    for other in index.others:
        copy_range(src, dst, other, buffer_size=buffer_size)
        dst.write(PAD * other.pad)

    log_step(
        "Write",
        f"Wrote {tables.count} cue point(s) and {len(index.others)} preserved chunk(s)",
    )
    return size

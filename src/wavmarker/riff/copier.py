"""Buffered copy of byte ranges from the input stream to the output."""

from __future__ import annotations

from typing import BinaryIO

from wavmarker.models.wave import ChunkLocation

MIN_BUFFER_SIZE = 1024
DEFAULT_BUFFER_SIZE = 1024 * 1024


class ChunkCopyError(OSError):
    """Raised when a byte range cannot be copied in full."""


def copy_range(
    src: BinaryIO,
    dst: BinaryIO,
    location: ChunkLocation,
    *,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> int:
    """Copy ``location`` from *src* to the current position of *dst*.

    The read position of *src* is restored afterwards, whether or not the
    copy succeeds. Returns the number of bytes copied.
    """
    buffer_size = max(buffer_size, MIN_BUFFER_SIZE)
    saved = src.tell()
    try:
        src.seek(location.start_offset)
        remaining = location.size
        while remaining:
            block = src.read(min(buffer_size, remaining))
            if not block:
                raise ChunkCopyError(
                    f"Short read copying {location.size} bytes from offset "
                    f"{location.start_offset}: {remaining} bytes missing"
                )
            written = dst.write(block)
            if written is not None and written != len(block):
                raise ChunkCopyError(
                    f"Short write: {written} of {len(block)} bytes written"
                )
            remaining -= len(block)
    finally:
        src.seek(saved)
    return location.size

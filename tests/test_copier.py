from __future__ import annotations

import io

import pytest

from wavmarker.models.wave import ChunkLocation
from wavmarker.riff.copier import ChunkCopyError, copy_range


def test_copies_range_in_pieces() -> None:
    payload = bytes(range(256)) * 20
    src = io.BytesIO(payload)
    dst = io.BytesIO()

    copied = copy_range(src, dst, ChunkLocation(start_offset=100, size=4000), buffer_size=1024)

    assert copied == 4000
    assert dst.getvalue() == payload[100:4100]


def test_restores_input_position() -> None:
    src = io.BytesIO(b"0123456789")
    src.seek(7)
    dst = io.BytesIO()

    copy_range(src, dst, ChunkLocation(start_offset=2, size=3))

    assert dst.getvalue() == b"234"
    assert src.tell() == 7


def test_copies_are_independent_of_order() -> None:
    src = io.BytesIO(b"abcdefgh")
    dst = io.BytesIO()
    copy_range(src, dst, ChunkLocation(start_offset=6, size=2))
    copy_range(src, dst, ChunkLocation(start_offset=0, size=2))
    assert dst.getvalue() == b"ghab"


def test_short_read_is_fatal_and_restores_position() -> None:
    src = io.BytesIO(b"short")
    src.seek(1)
    with pytest.raises(ChunkCopyError, match="Short read"):
        copy_range(src, io.BytesIO(), ChunkLocation(start_offset=0, size=10))
    assert src.tell() == 1


class _FullDisk(io.BytesIO):
    def write(self, data) -> int:
        return super().write(bytes(data)[: len(data) // 2])


def test_short_write_is_fatal() -> None:
    with pytest.raises(ChunkCopyError, match="Short write"):
        copy_range(io.BytesIO(b"abcdef"), _FullDisk(), ChunkLocation(start_offset=0, size=6))

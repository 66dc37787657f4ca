"""Little-endian integer conversions used by the RIFF format."""

from __future__ import annotations

import struct

_U32 = struct.Struct("<I")
_U16 = struct.Struct("<H")


def read_u32_le(raw: bytes) -> int:
    return _U32.unpack(raw)[0]


def read_u16_le(raw: bytes) -> int:
    return _U16.unpack(raw)[0]


def write_u32_le(value: int) -> bytes:
    return _U32.pack(value)


def write_u16_le(value: int) -> bytes:
    return _U16.pack(value)

"""Build the ``cue `` and ``LIST/adtl`` bodies for a list of labels."""

from __future__ import annotations

import struct

from wavmarker.models.labels import LabelEntry, MarkerTables
from wavmarker.riff.endian import write_u32_le
from wavmarker.utils.progress import log_step

CUE_RECORD_SIZE = 24
_CUE_RECORD = struct.Struct("<II4sIII")


def build_cue_record(cue_id: int, sample_index: int) -> bytes:
    """24-byte cue point referring to ``sample_index`` in the data chunk."""
    return _CUE_RECORD.pack(cue_id, sample_index, b"data", 0, 0, sample_index)


def build_labl_record(cue_id: int, text: bytes) -> bytes:
    """``labl`` sub-chunk binding NUL-terminated *text* to *cue_id*."""
    terminated = text + b"\x00"
    record = b"labl" + write_u32_le(4 + len(terminated)) + write_u32_le(cue_id) + terminated
    if len(terminated) % 2:
        record += b"\x00"
    return record


def build_marker_tables(entries: list[LabelEntry]) -> MarkerTables:
    """Serialize cue points and labels, numbering both from 1 in order."""
    cue_records = []
    labl_records = []
    for cue_id, entry in enumerate(entries, start=1):
        cue_records.append(build_cue_record(cue_id, entry.sample_index))
        labl_records.append(build_labl_record(cue_id, entry.text))

    cue_body = write_u32_le(len(entries)) + b"".join(cue_records)
    list_body = b"".join(labl_records)

    log_step(
        "Markers",
        f"Prepared cue chunk ({len(cue_body)} bytes) and label chunk ({len(list_body)} bytes)",
    )
    return MarkerTables(count=len(entries), cue_body=cue_body, list_body=list_body)

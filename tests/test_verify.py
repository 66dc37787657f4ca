from __future__ import annotations

import io
import struct

from tests.riffdata import chunk, fmt_payload, wave
from wavmarker.markers.synth import build_marker_tables
from wavmarker.markers.verify import verify_output
from wavmarker.models.labels import LabelEntry
from wavmarker.riff.reader import read_markers
from wavmarker.riff.scanner import scan_wave
from wavmarker.riff.writer import write_wave


def _marked() -> tuple[bytes, object]:
    src = io.BytesIO(wave(
        chunk(b"fmt ", fmt_payload()),
        chunk(b"data", b"\x00" * 100),
        chunk(b"JUNK", b"abc"),
    ))
    tables = build_marker_tables([
        LabelEntry(sample_index=0, text=b"Intro"),
        LabelEntry(sample_index=25, text=b"Topic"),
    ])
    dst = io.BytesIO()
    write_wave(src, dst, scan_wave(src), tables)
    return dst.getvalue(), tables


def test_read_markers() -> None:
    data, _ = _marked()
    report = read_markers(io.BytesIO(data))

    assert report.riff_size == report.file_size - 8
    assert report.chunk_ids() == [b"fmt ", b"data", b"cue ", b"LIST", b"JUNK"]
    assert [(c.cue_id, c.frame_offset) for c in report.cue_points] == [(1, 0), (2, 25)]
    assert report.labels == {1: b"Intro", 2: b"Topic"}


def test_verify_passes_for_written_file() -> None:
    data, tables = _marked()
    result = verify_output(io.BytesIO(data), tables)
    assert result["passed"]
    assert result["cue_points"] == 2


def test_verify_flags_bad_length_field() -> None:
    data, tables = _marked()
    broken = data[:4] + struct.pack("<I", len(data)) + data[8:]

    result = verify_output(io.BytesIO(broken), tables)

    assert not result["passed"]
    assert result["warnings"] == ["riff_size_matches"]


def test_verify_flags_mismatched_labels() -> None:
    data, _ = _marked()
    other = build_marker_tables([LabelEntry(sample_index=0, text=b"Other")])

    result = verify_output(io.BytesIO(data), other)

    assert not result["passed"]
    assert "cue_ids_sequential" in result["warnings"]

"""Post-write verification of a marked-up WAVE file."""

from __future__ import annotations

from typing import BinaryIO

from wavmarker.models.labels import MarkerTables
from wavmarker.riff.reader import read_markers
from wavmarker.utils.progress import log_step, log_success, log_warning


def verify_output(stream: BinaryIO, tables: MarkerTables) -> dict:
    """Re-read a written stream and check its layout and markers.

    Returns verification results dict.
    """
    log_step("Verify", "Re-reading output file...")

    report = read_markers(stream)

    misaligned = [c for c in report.chunks if c.offset % 2]
    adtl_lists = [c for c in report.chunks if c.list_type == b"adtl"]
    cue_chunks = [c for c in report.chunks if c.chunk_id == b"cue "]
    cue_ids = [cue.cue_id for cue in report.cue_points]
    expected_ids = list(range(1, tables.count + 1))

    checks = {
        "riff_size_matches": report.riff_size == report.file_size - 8,
        "chunks_aligned": not misaligned,
        "single_cue_chunk": len(cue_chunks) == 1,
        "single_adtl_list": len(adtl_lists) == 1,
        "cue_ids_sequential": cue_ids == expected_ids,
        "labels_match_cues": sorted(report.labels) == expected_ids,
        "cue_body_intact": report.cue_bodies == [tables.cue_body],
        "adtl_body_intact": report.adtl_bodies == [tables.list_body],
    }

    verification = {
        "file_size": report.file_size,
        "riff_size": report.riff_size,
        "cue_points": len(report.cue_points),
        **checks,
        "passed": all(checks.values()),
    }

    if verification["passed"]:
        log_success(
            f"Verification passed: {len(report.cue_points)} cue point(s), "
            f"{len(report.chunks)} chunk(s), {report.file_size} bytes"
        )
    else:
        warnings = [name for name, ok in checks.items() if not ok]
        for w in warnings:
            log_warning(f"Verification check failed: {w}")
        verification["warnings"] = warnings

    return verification

"""One conversion: scan the input, parse labels, write the marked-up copy."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path

from rich.markup import escape

from wavmarker.labels.parser import read_label_file
from wavmarker.markers.synth import build_marker_tables
from wavmarker.markers.verify import verify_output
from wavmarker.models.config import MarkerConfig
from wavmarker.models.labels import LabelEntry, MarkerTables
from wavmarker.models.wave import WaveIndex
from wavmarker.riff.scanner import scan_wave
from wavmarker.riff.writer import write_wave
from wavmarker.utils.io import open_atomic
from wavmarker.utils.progress import log, log_step, log_success, log_warning, show_summary


class VerificationError(RuntimeError):
    """Raised when the freshly written file fails its own read-back checks."""


@dataclass
class ConversionResult:
    """What a conversion produced."""

    output_path: Path
    index: WaveIndex
    labels: list[LabelEntry]
    tables: MarkerTables
    riff_size: int
    verification: dict = field(default_factory=dict)
    duration_seconds: float = 0.0


def _audio_seconds(index: WaveIndex) -> float:
    if not index.format.sample_rate:
        return 0.0
    return index.frame_count / index.format.sample_rate


def add_labels_to_wave(
    input_path: Path | str,
    label_path: Path | str,
    output_path: Path | str,
    config: MarkerConfig | None = None,
) -> ConversionResult:
    """Copy *input_path* to *output_path* with markers from *label_path*.

    Existing ``cue `` and ``LIST/adtl`` chunks are replaced. The output
    path is only written once the whole file has been produced (and,
    when enabled, verified).
    """
    config = config or MarkerConfig()
    input_path = Path(input_path)
    label_path = Path(label_path)
    output_path = Path(output_path)
    started = time.monotonic()

    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    if not label_path.exists():
        raise FileNotFoundError(f"Label file not found: {label_path}")

    log(f"Reading input wave file: {escape(str(input_path))}", style="")
    with open(input_path, "rb") as src:
        index = scan_wave(src, max_other_chunks=config.max_other_chunks)

        log(f"Reading label file: {escape(str(label_path))}", style="")
        labels = read_label_file(
            label_path,
            index.format.sample_rate,
            max_start_seconds=config.max_start_seconds,
        )
        for entry in labels:
            log_step(
                "Labels",
                f"#{entry.line_number} {entry.start_seconds:.3f}s → sample "
                f"{entry.sample_index}: {escape(entry.display_text)}",
            )
            if entry.sample_index > index.frame_count:
                log_warning(
                    f"Label on line {entry.line_number} starts after the end of the audio "
                    f"(sample {entry.sample_index} of {index.frame_count})"
                )

        tables = build_marker_tables(labels)

        verification: dict = {}
        with open_atomic(output_path) as dst:
            riff_size = write_wave(
                src, dst, index, tables, buffer_size=config.copy_buffer_size
            )
            dst.flush()
            if config.verify_output:
                verification = verify_output(dst, tables)
                if not verification["passed"]:
                    raise VerificationError(
                        "Output failed verification: "
                        + ", ".join(verification["warnings"])
                    )

    result = ConversionResult(
        output_path=output_path,
        index=index,
        labels=labels,
        tables=tables,
        riff_size=riff_size,
        verification=verification,
        duration_seconds=time.monotonic() - started,
    )
    log_success(f"Finished: {escape(str(output_path))}")
    show_summary(
        "Markers Embedded",
        result.duration_seconds,
        {
            "Output": output_path,
            "Cue points": tables.count,
            "Audio": f"{_audio_seconds(index):.1f}s, {index.format.sample_rate} Hz",
            "Chunks preserved": len(index.others),
            "Chunks replaced": index.dropped_cue_chunks + index.dropped_adtl_chunks,
            "Size": f"{riff_size + 8} bytes",
        },
    )
    return result

"""Parser for Audacity-style label files.

Each line is ``start<TAB>end<TAB>text``. Times are decimal seconds; the end
time is read but not used. Lines may end in LF, CR or CRLF, mixed freely.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from pathlib import Path

from rich.markup import escape

from wavmarker.models.labels import LabelEntry
from wavmarker.models.wave import U32_MAX
from wavmarker.utils.progress import log_step, log_warning

MAX_START_SECONDS = 48660.0

_LINE_BREAK = re.compile(rb"\r\n|\r|\n")


class LabelFileError(ValueError):
    """Raised when a label file yields no usable labels."""


class _BadLine(ValueError):
    pass


def _parse_seconds(raw: bytes, field_name: str) -> Decimal:
    """Exact decimal value of a time field."""
    try:
        value = Decimal(raw.decode("ascii").strip())
    except (UnicodeDecodeError, InvalidOperation):
        raise _BadLine(f"{field_name} {raw!r} is not a number") from None
    if not value.is_finite() or value < 0:
        raise _BadLine(f"{field_name} {raw!r} is out of range")
    return value


def _parse_line(line: bytes) -> tuple[Decimal, bytes]:
    fields = line.split(b"\t", 2)
    if len(fields) != 3:
        raise _BadLine("expected three tab-separated fields")
    start = _parse_seconds(fields[0], "start time")
    _parse_seconds(fields[1], "end time")
    text = fields[2]
    if not text:
        raise _BadLine("label text is empty")
    return start, text


def time_to_index(seconds: Decimal | float, sample_rate: int) -> int:
    """Frame index for *seconds*; channel count does not apply.

    Floats are taken at their shortest decimal form, so 0.7 s at 44.1 kHz
    is frame 30870 rather than 30869.
    """
    if not isinstance(seconds, Decimal):
        seconds = Decimal(repr(seconds))
    return math.floor(seconds * sample_rate)


def parse_labels(
    data: bytes,
    sample_rate: int,
    *,
    max_start_seconds: float = MAX_START_SECONDS,
) -> list[LabelEntry]:
    """Parse label-file bytes into entries, in file order.

    Malformed lines and lines starting after ``max_start_seconds`` are
    reported and skipped. Raises LabelFileError if nothing is left.
    """
    entries: list[LabelEntry] = []

    for line_number, line in enumerate(_LINE_BREAK.split(data), start=1):
        if not line.strip():
            continue

        try:
            start, text = _parse_line(line)
        except _BadLine as e:
            log_warning(
                f"Line {line_number} in label file is not formatted correctly "
                f"({escape(str(e))}); it should be "
                f"\"startTime(sec) \\t endTime(sec) \\t Label\""
            )
            continue

        if start > max_start_seconds:
            log_warning(
                f"Line {line_number} in label file contains a value larger than "
                f"the max possible wav length ({max_start_seconds:,.1f} seconds)"
            )
            continue

        index = time_to_index(start, sample_rate)
        if index > U32_MAX:
            log_warning(
                f"Line {line_number} in label file maps to sample {index}, "
                f"past the largest cue position"
            )
            continue

        entries.append(LabelEntry(
            sample_index=index,
            text=text,
            start_seconds=float(start),
            line_number=line_number,
        ))

    if not entries:
        raise LabelFileError("Did not find any cue point locations in the label file")

    log_step("Labels", f"Read {len(entries)} cue location(s) from label file")
    return entries


def read_label_file(
    path: Path | str,
    sample_rate: int,
    *,
    max_start_seconds: float = MAX_START_SECONDS,
) -> list[LabelEntry]:
    """Read and parse a label file from disk."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Label file not found: {path}")
    with open(path, "rb") as f:
        data = f.read()
    return parse_labels(data, sample_rate, max_start_seconds=max_start_seconds)

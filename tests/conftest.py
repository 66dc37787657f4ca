from __future__ import annotations

from pathlib import Path

import pytest

from tests.riffdata import chunk, fmt_payload, silence, wave


@pytest.fixture
def mono_silence() -> bytes:
    """One second of 44.1 kHz 16-bit mono silence."""
    return wave(chunk(b"fmt ", fmt_payload()), chunk(b"data", silence()))


@pytest.fixture
def write_file(tmp_path: Path):
    def _write(name: str, content: bytes | str) -> Path:
        path = tmp_path / name
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
        return path

    return _write

"""File I/O utilities — atomic binary output, YAML handling."""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from ruamel.yaml import YAML

_yaml = YAML(typ="safe")


@contextmanager
def open_atomic(path: Path | str) -> Iterator[BinaryIO]:
    """Open a binary file for writing that only replaces *path* on success.

    Bytes go to a temporary file in the same directory, which is renamed
    over *path* when the block exits cleanly and removed otherwise.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp = tempfile.NamedTemporaryFile(
        mode="w+b",
        dir=path.parent,
        prefix=f".{path.stem}.",
        suffix=path.suffix,
        delete=False,
    )
    tmp_path = Path(tmp.name)
    try:
        with tmp:
            yield tmp
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def read_yaml(path: Path | str) -> dict:
    """Read a YAML file and return as dict."""
    path = Path(path)
    with open(path) as f:
        return dict(_yaml.load(f) or {})


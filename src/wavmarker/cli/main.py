"""wav-marker command line entry point."""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError
from rich.markup import escape
from ruamel.yaml.error import YAMLError

from wavmarker import __version__
from wavmarker.models.config import MarkerConfig
from wavmarker.utils.io import read_yaml
from wavmarker.utils.progress import log_error


def _load_config(config_path: str | None, verify: bool | None) -> MarkerConfig:
    data: dict = {}
    if config_path:
        path = Path(config_path).resolve()
        if not path.exists():
            log_error(f"Config not found: {escape(str(path))}")
            raise SystemExit(1)
        try:
            data = read_yaml(path)
        except (YAMLError, TypeError, ValueError) as e:
            log_error(f"Could not read config {escape(str(path))}: {escape(str(e))}")
            raise SystemExit(1)
    if verify is not None:
        data["verify_output"] = verify
    try:
        return MarkerConfig(**data)
    except ValidationError as e:
        log_error(f"Invalid config: {escape(str(e))}")
        raise SystemExit(1)


@click.command()
@click.version_option(version=__version__, prog_name="wav-marker")
@click.argument("wave_file", type=click.Path(dir_okay=False))
@click.argument("label_file", type=click.Path(dir_okay=False))
@click.argument("output_file", type=click.Path(dir_okay=False))
@click.option(
    "--config", "-c", "config_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="YAML file overriding conversion settings",
)
@click.option(
    "--verify/--no-verify",
    default=None,
    help="Re-read the output and check it before saving (default: on)",
)
def cli(
    wave_file: str,
    label_file: str,
    output_file: str,
    config_path: str | None,
    verify: bool | None,
) -> None:
    """Embed the labels of LABEL_FILE as cue points into WAVE_FILE.

    LABEL_FILE is an Audacity label export (start, end and text separated
    by tabs). The result, readable as chapter markers by podcast tools,
    is written to OUTPUT_FILE.
    """
    config = _load_config(config_path, verify)

    from wavmarker.pipeline.convert import add_labels_to_wave

    try:
        add_labels_to_wave(wave_file, label_file, output_file, config)
    except Exception as e:
        log_error(f"Conversion failed: {escape(str(e))}")
        raise SystemExit(1)

from __future__ import annotations

from click.testing import CliRunner

from tests.riffdata import chunk, fmt_payload, payloads, silence, wave
from wavmarker import __version__
from wavmarker.cli.main import cli
from wavmarker.riff.reader import parse_cue_body


def test_marks_file(write_file, mono_silence) -> None:
    wav = write_file("in.wav", mono_silence)
    lab = write_file("labels.txt", "0.5\t0.5\tmid\n")
    out = wav.with_name("out.wav")

    result = CliRunner().invoke(cli, [str(wav), str(lab), str(out)])

    assert result.exit_code == 0, result.output
    assert len(parse_cue_body(payloads(out.read_bytes(), b"cue ")[0])) == 1


def test_wrong_argument_count(write_file, mono_silence) -> None:
    wav = write_file("in.wav", mono_silence)
    lab = write_file("labels.txt", "0.5\t0.5\tmid\n")

    runner = CliRunner()
    assert runner.invoke(cli, [str(wav), str(lab)]).exit_code != 0
    extra = runner.invoke(cli, [str(wav), str(lab), str(wav.with_name("o.wav")), "more"])
    assert extra.exit_code != 0
    assert not wav.with_name("o.wav").exists()


def test_unsupported_format_exits_nonzero(write_file) -> None:
    wav = write_file("in.wav", wave(chunk(b"fmt ", fmt_payload(code=2)), chunk(b"data", silence(0.1))))
    lab = write_file("labels.txt", "0.5\t0.5\tmid\n")

    result = CliRunner().invoke(cli, [str(wav), str(lab), str(wav.with_name("out.wav"))])

    assert result.exit_code == 1
    assert "supported" in result.output


def test_no_usable_labels_exits_nonzero(write_file, mono_silence) -> None:
    wav = write_file("in.wav", mono_silence)
    lab = write_file("labels.txt", "48700.0\t48700.1\tlate\n")
    out = wav.with_name("out.wav")

    result = CliRunner().invoke(cli, [str(wav), str(lab), str(out)])

    assert result.exit_code == 1
    assert not out.exists()


def test_missing_input_exits_nonzero(tmp_path) -> None:
    result = CliRunner().invoke(
        cli, [str(tmp_path / "a.wav"), str(tmp_path / "b.txt"), str(tmp_path / "c.wav")]
    )
    assert result.exit_code == 1


def test_config_file_overrides_cap(write_file, mono_silence) -> None:
    wav = write_file("in.wav", mono_silence)
    lab = write_file("labels.txt", "0.2\t0.2\tkept\n0.8\t0.8\tdropped\n")
    cfg = write_file("config.yaml", "max_start_seconds: 0.5\ncopy_buffer_size: 4096\n")
    out = wav.with_name("out.wav")

    result = CliRunner().invoke(cli, ["-c", str(cfg), "--no-verify", str(wav), str(lab), str(out)])

    assert result.exit_code == 0, result.output
    (cue,) = payloads(out.read_bytes(), b"cue ")
    assert [c.frame_offset for c in parse_cue_body(cue)] == [8820]


def test_invalid_config_exits_nonzero(write_file, mono_silence) -> None:
    wav = write_file("in.wav", mono_silence)
    lab = write_file("labels.txt", "0.2\t0.2\tx\n")
    cfg = write_file("config.yaml", "copy_buffer_size: 12\n")

    result = CliRunner().invoke(cli, ["-c", str(cfg), str(wav), str(lab), str(wav.with_name("o.wav"))])

    assert result.exit_code == 1
    assert not wav.with_name("o.wav").exists()


def test_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_unparsable_config_exits_nonzero(write_file, mono_silence) -> None:
    wav = write_file("in.wav", mono_silence)
    lab = write_file("labels.txt", "0.2\t0.2\tx\n")
    out = wav.with_name("o.wav")

    for name, content in [("broken.yaml", "max_start_seconds: [\n"), ("list.yaml", "- 1\n- 2\n")]:
        cfg = write_file(name, content)
        result = CliRunner().invoke(cli, ["-c", str(cfg), str(wav), str(lab), str(out)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert not out.exists()

"""Tests for the command-line entry point (benchmark path only)."""

import json

import pytest

from spectrascope.cli import build_parser, config_from_args, main
from spectrascope.config import Mode

SMALL_ARGS = [
    "--sample-count", "256",
    "--hop-count", "128",
    "--buffer-count", "8",
    "--filter-banks", "10",
]


class TestConfigFromArgs:
    def test_flags(self):
        args = build_parser().parse_args(SMALL_ARGS + ["--mode", "mel", "--gain", "0.03", "--zero-ref", "750"])
        config = config_from_args(args)

        assert config.sample_count == 256
        assert config.hop_count == 128
        assert config.buffer_count == 8
        assert config.filter_bank_count == 10
        assert config.mode is Mode.MEL
        assert config.gain == pytest.approx(0.03)
        assert config.zero_reference == pytest.approx(750.0)

    def test_config_file(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text(json.dumps({"sampleCount": 512, "hopCount": 128, "mode": "mel"}))

        args = build_parser().parse_args(["--config", str(path)])
        config = config_from_args(args)

        assert config.sample_count == 512
        assert config.mode is Mode.MEL

    def test_mel_and_output_flags(self):
        args = build_parser().parse_args(
            SMALL_ARGS + ["--min-freq", "50", "--max-freq", "8000", "--entries", "16", "--output-dtype", "uint8"]
        )
        config = config_from_args(args)

        assert config.min_frequency == pytest.approx(50.0)
        assert config.max_frequency == pytest.approx(8000.0)
        assert config.entries_per_channel == 16
        assert config.output_dtype == "uint8"


class TestMain:
    def test_benchmark(self, capsys):
        main(SMALL_ARGS + ["--benchmark", "0.1", "--seed", "0"])

        out = capsys.readouterr().out
        assert "Spectrogram: 8 frames x 256 bins (linear)" in out
        assert "Processed" in out

    def test_benchmark_mel(self, capsys):
        main(SMALL_ARGS + ["--mode", "mel", "--benchmark", "0.05"])
        assert "x 10 bins (mel)" in capsys.readouterr().out

    def test_invalid_configuration_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--sample-count", "1000", "--hop-count", "500", "--benchmark", "0.1"])

        assert exc.value.code == 1
        assert "Error" in capsys.readouterr().err

    def test_missing_config_file_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(tmp_path / "missing.json"), "--benchmark", "0.1"])

        assert exc.value.code == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_unknown_mode_in_config_file_exits(self, tmp_path, capsys):
        path = tmp_path / "session.json"
        path.write_text(json.dumps({"mode": "log"}))

        with pytest.raises(SystemExit) as exc:
            main(["--config", str(path), "--benchmark", "0.01"])

        assert exc.value.code == 1
        assert "Unknown mode" in capsys.readouterr().err

    def test_non_overlapping_hop_exits(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--sample-count", "256", "--hop-count", "256", "--benchmark", "0.01"])

        assert exc.value.code == 1
        assert "hop_count" in capsys.readouterr().err

"""Tests for the lanedash command line."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lanedash.ui.cli.main import build_parser, main


class TestParser:
    def test_subcommands(self):
        parser = build_parser()
        args = parser.parse_args(["simulate", "--runs", "3", "--seed", "4"])
        assert args.command == "simulate"
        assert args.runs == 3
        assert args.seed == 4

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestCommands:
    def test_simulate_then_report(self, tmp_path, capsys):
        main([
            "simulate", "--runs", "2", "--duration-ms", "2000", "--workers", "1",
            "--seed", "8", "--results-dir", str(tmp_path),
        ])
        assert (tmp_path / "simulation_summary.json").exists()

        main(["report", "--results-dir", str(tmp_path)])
        out = capsys.readouterr().out
        assert "SIMULATION RESULTS" in out
        assert "n_runs: 2" in out

    def test_report_missing(self, tmp_path, capsys):
        main(["report", "--results-dir", str(tmp_path)])
        assert "[report] Missing results" in capsys.readouterr().out

    def test_doctor(self, tmp_path, capsys):
        main(["doctor", "--results-dir", str(tmp_path)])
        out = capsys.readouterr().out
        assert "[OK] settings" in out
        assert "checks passing" in out

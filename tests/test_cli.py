"""Tests for the lanerunner command line."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lanerunner.ui.cli.main import build_parser, main


class TestParser:
    def test_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_common_flags(self):
        args = build_parser().parse_args(["simulate", "--lanes", "4", "--seed", "3", "--policy", "stay"])
        assert args.lanes == 4
        assert args.seed == 3
        assert args.policy == "stay"
        assert args.max_frames is None

    def test_unknown_policy(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["bench", "--policy", "teleport"])


class TestCommands:
    def test_simulate(self, capsys):
        code = main(["simulate", "--seed", "1", "--max-frames", "40"])
        out = capsys.readouterr().out
        assert code == 0
        assert "[simulate] policy=dodge seed=1" in out
        assert "alive: 40 frames" in out

    def test_bench(self, capsys):
        code = main(["bench", "--sims", "2", "--workers", "1", "--max-frames", "20", "--seed", "3"])
        out = capsys.readouterr().out
        assert code == 0
        assert "avg = 20 frames" in out
        assert "runs:   2" in out

    def test_doctor(self, capsys):
        main(["doctor"])
        out = capsys.readouterr().out
        assert "[OK] lanes: lane_count=3" in out
        assert "checks passing" in out

    def test_bad_lanes_exit(self):
        with pytest.raises(SystemExit, match=r"\[config\]"):
            main(["simulate", "--lanes", "0"])

    def test_too_many_sims_exit(self):
        """Asking for more runs than distinct seeds is reported as a config error."""
        with pytest.raises(SystemExit, match=r"\[config\] sims must be"):
            main(["bench", "--sims", "200000"])

"""
Tests for slide_solver.cli
"""

import pytest

from slide_solver.cli import main, parse_args


class TestParseArgs:
    """Argument defaults and validation."""

    def test_defaults(self):
        """Defaults match the documented CLI options."""
        args = parse_args([])
        assert args.size == 4
        assert args.mode == "balanced"
        assert args.speed == "turbo"
        assert args.weights is None
        assert args.max_moves is None
        assert not args.quiet

    def test_short_flags(self):
        """Short flags set size, mode and quiet."""
        args = parse_args(["-s", "5", "-m", "optimal", "-q"])
        assert args.size == 5
        assert args.mode == "optimal"
        assert args.quiet

    def test_rejects_unknown_mode(self):
        """argparse exits on an unknown mode."""
        with pytest.raises(SystemExit):
            parse_args(["--mode", "expert"])

    def test_rejects_unsupported_size(self):
        """argparse exits on an unsupported size."""
        with pytest.raises(SystemExit):
            parse_args(["--size", "9"])


class TestMain:
    """End-to-end runs."""

    def test_quiet_run_prints_summary(self, capsys):
        """A quiet run prints only the summary line."""
        main(["--quiet", "--mode", "fast", "--seed", "1", "--max-moves", "3"])
        out = capsys.readouterr().out
        assert "Moves: 3" in out
        assert "Score:" in out
        assert "Max tile:" in out

    def test_default_run_prints_boards(self, capsys):
        """A normal run prints a board per move."""
        main(["--mode", "fast", "--seed", "1", "--max-moves", "2"])
        out = capsys.readouterr().out
        assert "Moves: 2" in out
        assert out.count("score:") == 2

"""Tests for the command-line interface."""

import pytest
from pluscode.cli import create_parser, main


class TestParser:
    """Tests for argument parsing."""

    def test_encode_defaults(self):
        """Test default encode arguments."""
        args = create_parser().parse_args(["encode", "51.5", "-0.12"])
        assert args.command == "encode"
        assert args.latitude == 51.5
        assert args.longitude == -0.12
        assert args.length == 10
        assert args.strategy == "auto"

    def test_invalid_strategy(self):
        """Test unknown strategies are rejected by the parser."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--strategy", "decimal", "encode", "0", "0"])


class TestCommands:
    """Tests for running commands."""

    def test_no_command(self, capsys):
        """Test running without a command prints help."""
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_encode(self, capsys):
        assert main(["encode", "51.530812", "-0.123767"]) == 0
        assert capsys.readouterr().out.strip() == "9C3XGVJG+8F"

    def test_encode_length(self, capsys):
        assert main(["encode", "0", "0", "-l", "15"]) == 0
        assert capsys.readouterr().out.strip() == "6FG22222+2222222"

    @pytest.mark.parametrize("strategy", ["int", "float"])
    def test_encode_strategy(self, capsys, strategy):
        """Test both arithmetic strategies from the command line."""
        assert main(["--strategy", strategy, "encode", "1.357063", "103.988563"]) == 0
        assert capsys.readouterr().out.strip() == "6PH59X4Q+RC"

    def test_encode_illegal_length(self, capsys):
        """Test library errors are reported without a traceback."""
        assert main(["encode", "0", "0", "-l", "5"]) == 1
        assert "Error: Illegal code length 5" in capsys.readouterr().out

    def test_decode(self, capsys):
        assert main(["decode", "6fg22222+22"]) == 0
        out = capsys.readouterr().out
        assert "Code area for 6FG22222+22" in out
        assert "South latitude: 0.0" in out
        assert "North latitude: 0.000125" in out
        assert "Length: 10" in out

    def test_decode_short(self, capsys):
        """Test decoding a short code fails cleanly."""
        assert main(["decode", "JG+8F"]) == 1
        assert "Error:" in capsys.readouterr().out

    def test_decode_invalid(self, capsys):
        assert main(["decode", "B"]) == 1
        assert "not a valid Open Location Code" in capsys.readouterr().out

    def test_validate(self, capsys):
        """Test classification of several codes."""
        assert main(["validate", "9C3XGVJG+8F", "JG+8F"]) == 0
        out = capsys.readouterr().out
        assert "9C3XGVJG+8F: full" in out
        assert "JG+8F: short" in out

    def test_validate_invalid(self, capsys):
        assert main(["validate", "9C3XGVJG+8F", "B"]) == 1
        assert "B: invalid" in capsys.readouterr().out

    def test_shorten(self, capsys):
        assert main(["shorten", "9C3XGVJG+8F", "51.5", "-0.1"]) == 0
        assert capsys.readouterr().out.strip() == "GVJG+8F"

    def test_shorten_too_far(self, capsys):
        assert main(["shorten", "9C3XGVJG+8F", "0", "0"]) == 1
        assert "too far" in capsys.readouterr().out

    def test_recover(self, capsys):
        assert main(["recover", "GVJG+8F", "51.5", "-0.1"]) == 0
        assert capsys.readouterr().out.strip() == "9C3XGVJG+8F"

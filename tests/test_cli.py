"""Tests for the etf-calc command line."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from etfcalc.cli.calc_cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _in_tmp(tmp_path, monkeypatch):
    """Keep the log directory out of the repo."""
    monkeypatch.chdir(tmp_path)


class TestComputeCommand:
    def test_intraday(self):
        result = runner.invoke(app, ["compute", "--regime", "intraday", "--buy", "100", "--sell", "105", "--qty", "100"])
        assert result.exit_code == 0
        assert "Final Net" in result.output
        assert "315.72" in result.output
        assert "48.97" in result.output

    def test_delivery_from_config(self, tmp_path):
        cfg = tmp_path / "calc.yaml"
        cfg.write_text("default_regime: delivery\n")
        result = runner.invoke(app, ["compute", "--buy", "100", "--sell", "105", "--qty", "100", "--config", str(cfg)])
        assert result.exit_code == 0
        assert "Delivery Round Trip" in result.output
        assert "368.99" in result.output

    @pytest.mark.parametrize(
        "args, message",
        [
            (["--buy", "100", "--sell", "105"], "Please fill in all fields"),
            (["--buy", "100", "--sell", "abc", "--qty", "1"], "Please enter valid numbers"),
            (["--buy", "0", "--sell", "105", "--qty", "1"], "Please enter positive numbers"),
        ],
    )
    def test_invalid_input(self, args, message):
        result = runner.invoke(app, ["compute", *args])
        assert result.exit_code == 1
        assert message in result.output

    def test_unknown_regime(self):
        result = runner.invoke(app, ["compute", "--regime", "futures", "--buy", "1", "--sell", "1", "--qty", "1"])
        assert result.exit_code == 1
        assert "Unknown regime" in result.output


class TestOtherCommands:
    def test_compare(self):
        result = runner.invoke(app, ["compare", "--buy", "100", "--sell", "105", "--qty", "100"])
        assert result.exit_code == 0
        assert "Regime Comparison" in result.output
        assert "Best after tax: delivery" in result.output

    def test_compare_invalid(self):
        result = runner.invoke(app, ["compare", "--buy", "100", "--sell", "105", "--qty", "0"])
        assert result.exit_code == 1
        assert "Please enter positive numbers" in result.output

    def test_schedule(self):
        result = runner.invoke(app, ["schedule", "--regime", "delivery"])
        assert result.exit_code == 0
        assert "15.93" in result.output

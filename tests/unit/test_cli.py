"""Tests for the stitchcount CLI."""

import argparse
import json
import logging

import pytest

from stitchcount import cli
from stitchcount.logging_config import setup_logging


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep main() from replacing pytest's log handlers."""
    monkeypatch.setattr(cli, "setup_logging", lambda level=None: None)


class TestParseCommand:
    def test_parse_json(self, capsys):
        assert cli.main(["parse", "add 5 rows", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["action"] == {"type": "increment", "counter_name": "rows", "amount": 5}
        assert data["confidence"] == 0.9

    def test_parse_text(self, capsys):
        assert cli.main(["parse", "reset stitch counter"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("reset")
        assert "stitch counter" in out

    def test_parse_unknown_exit_code(self, capsys):
        assert cli.main(["parse", "banana"]) == 1


class TestResolveCommand:
    def test_resolve_found(self, capsys):
        code = cli.main(["resolve", "row", "--counter", "1=Row Counter", "--counter", "2=Round"])
        assert code == 0
        assert capsys.readouterr().out.strip() == "1: Row Counter"

    def test_resolve_missing(self, capsys):
        assert cli.main(["resolve", "stitches", "--counter", "1=Sleeve", "--json"]) == 1
        assert json.loads(capsys.readouterr().out) is None


class TestRouteCommand:
    def test_route(self, capsys):
        code = cli.main(["route", "add 2 rows", "--counter", "r=Row Counter:10:20"])
        assert code == 0
        assert capsys.readouterr().out.strip() == "Row Counter is now 12 of 20."

    def test_route_json_default(self, capsys):
        code = cli.main([
            "route", "add 1", "--counter", "a=Rows:1", "--counter", "b=Rounds:4",
            "--default", "b", "--json",
        ])
        assert code == 0
        assert json.loads(capsys.readouterr().out)["value"] == 5

    def test_bad_counter_arg(self):
        with pytest.raises(argparse.ArgumentTypeError):
            cli._parse_counter_arg("no-equals-sign")
        with pytest.raises(argparse.ArgumentTypeError):
            cli._parse_counter_arg("a=Rows:lots")


class TestMisc:
    def test_commands_listing(self, capsys):
        assert cli.main(["commands"]) == 0
        out = capsys.readouterr().out
        assert "Increment:" in out
        assert "Add 5 rows" in out

    def test_no_subcommand_prints_help(self, capsys):
        assert cli.main([]) == 0
        assert "usage" in capsys.readouterr().out


class TestLoggingConfig:
    @pytest.fixture
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield root
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_setup_logging_level_from_env(self, restore_root, monkeypatch):
        monkeypatch.setenv("STITCHCOUNT_LOG_LEVEL", "DEBUG")
        setup_logging()
        assert restore_root.level == logging.DEBUG
        assert len(restore_root.handlers) == 1

    def test_setup_logging_json(self, restore_root, capsys):
        setup_logging(level="INFO", json_output=True)
        logging.getLogger("stitchcount.test").info("counter updated")
        err = capsys.readouterr().err
        record = json.loads(err.strip().splitlines()[-1])
        assert record["event"] == "counter updated"
        assert record["level"] == "info"

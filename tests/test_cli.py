"""Tests for the miningsim command line interface."""

import json

import pytest

from miningsim import cli
from miningsim.models import SimulationConfig, save_config


def feed_input(monkeypatch, answers):
    replies = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(replies))


def feed_then_close(monkeypatch, answers):
    replies = iter(answers)

    def fake_input(prompt=""):
        try:
            return next(replies)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


class TestRunCommand:
    def test_run_prints_report(self, capsys):
        code = cli.main(["run", "--trucks", "3", "--stations", "2", "--seed", "1"])
        out = capsys.readouterr().out

        assert code == 0
        assert "Trucks:   3" in out
        assert "=== Station Throughput ===" in out
        assert "=== Fleet KPIs ===" in out

    def test_run_writes_outputs(self, tmp_path):
        out_dir = tmp_path / "results"
        code = cli.main([
            "run", "-t", "4", "-s", "2", "--seed", "9", "--events", "-o", str(out_dir),
        ])

        assert code == 0
        for name in ("trucks.csv", "stations.csv", "kpis.json", "events.csv"):
            assert (out_dir / name).exists()
        kpis = json.loads((out_dir / "kpis.json").read_text())
        assert kpis["truck_count"] == 4

    def test_run_from_config_file(self, tmp_path, capsys):
        path = tmp_path / "run.json"
        save_config(SimulationConfig(truck_count=2, station_count=5, random_seed=3), str(path))

        code = cli.main(["run", "--config", str(path), "--stations", "1"])
        out = capsys.readouterr().out

        assert code == 0
        assert "Trucks:   2" in out
        assert "Stations: 1" in out

    def test_invalid_counts_rejected(self, capsys):
        code = cli.main(["run", "--trucks", "0", "--stations", "1"])
        err = capsys.readouterr().err

        assert code == 1
        assert "truck_count" in err

    def test_missing_config_file(self, tmp_path, capsys):
        code = cli.main(["run", "--config", str(tmp_path / "nope.json")])
        assert code == 1
        assert "not found" in capsys.readouterr().err


class TestInteractiveCommand:
    def test_reprompts_on_invalid_input(self, monkeypatch, capsys):
        feed_input(monkeypatch, ["abc", "70000", "2", "", "1", "5", "0", "maybe", "n"])

        code = cli.main(["interactive"])
        out = capsys.readouterr().out

        assert code == 0
        assert out.count("Invalid input") == 5
        assert out.count("Success") == 3
        assert "Truck 1:" in out
        assert "Station 0:" in out

    def test_runs_again_on_yes(self, monkeypatch, capsys):
        feed_input(monkeypatch, ["1", "1", "1", "Y", "2", "1", "0", "N"])

        code = cli.main(["interactive"])
        out = capsys.readouterr().out

        assert code == 0
        assert out.count("=== Station Throughput ===") == 2

    def test_closed_input_during_prompts(self, monkeypatch, capsys):
        feed_then_close(monkeypatch, ["3"])

        code = cli.main(["interactive"])

        assert code == 1
        assert "input closed" in capsys.readouterr().err

    def test_closed_input_at_continue_prompt(self, monkeypatch, capsys):
        feed_then_close(monkeypatch, ["1", "1", "0"])

        code = cli.main(["interactive"])
        captured = capsys.readouterr()

        assert code == 1
        assert "=== Station Throughput ===" in captured.out
        assert "input closed" in captured.err


class TestParsers:
    @pytest.mark.parametrize("raw,expected", [
        ("1", 1),
        ("65535", 65535),
        ("0", None),
        ("65536", None),
        ("-3", None),
        ("12a", None),
        ("", None),
    ])
    def test_parse_count(self, raw, expected):
        assert cli._parse_count(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("0", False),
        ("1", True),
        ("2", None),
        ("yes", None),
    ])
    def test_parse_flag(self, raw, expected):
        assert cli._parse_flag(raw) == expected


class TestSchemaCommand:
    def test_schema_to_stdout(self, capsys):
        assert cli.main(["schema"]) == 0
        schema = json.loads(capsys.readouterr().out)
        assert "truck_count" in schema["properties"]

    def test_schema_to_file(self, tmp_path):
        path = tmp_path / "schema" / "config.json"
        assert cli.main(["schema", "-o", str(path)]) == 0
        assert "station_count" in json.loads(path.read_text())["properties"]

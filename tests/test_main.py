import json

import pytest

from elevator_bank import main as cli


@pytest.fixture(autouse=True)
def fast_env(monkeypatch, mocker):
    monkeypatch.setenv("MOVE_TIME_PER_FLOOR_SECS", "0.002")
    monkeypatch.setenv("DOOR_REMAINS_OPEN_SECS", "0.002")
    monkeypatch.setenv("DOOR_REMAINS_OPEN_MAX_SECS", "0.05")
    monkeypatch.setenv("DOOR_POLL_INTERVAL_SECS", "0.001")
    monkeypatch.setenv("DISPATCHER_BACKOFF_SECS", "0.002")
    mocker.patch.object(cli, "handle_signals")


def test_parser_defaults():
    args = cli.build_parser().parse_args(["run.txt"])

    assert str(args.script) == "run.txt"
    assert args.trace is None
    assert args.drain == 0.0


def test_missing_script(tmp_path):
    assert cli.main([str(tmp_path / "missing.txt")]) == 2


def test_script_runs_and_writes_trace(tmp_path):
    script = tmp_path / "run.txt"
    script.write_text("init 4 1\nrider bob 0 2\nsleep 0.3\nquit\nrider amy 3 0\n")
    trace = tmp_path / "trace.jsonl"

    assert cli.main([str(script), "--trace", str(trace), "--drain", "0.2"]) == 0

    records = [json.loads(line) for line in trace.read_text().splitlines()]
    assert records
    assert all("id" in r and "kind" in r for r in records)
    riders = [(r["kind"], r["detail"].get("rider")) for r in records]
    assert ("loaded", "bob") in riders
    assert ("unloaded", "bob") in riders
    assert all(name != "amy" for _, name in riders)

import json

import pytest
from click.testing import CliRunner

from turtlescript.cli import main
from turtlescript.config import Config


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def program(tmp_path):
    path = tmp_path / "square.turtle"
    path.write_text(
        "// square\n"
        "goto 10 10\n"
        "pen down\n"
        "face east\n"
        "move 5\n"
        "face south\n"
        "move 5\n"
    )
    return path


def test_check_ok(runner, program):
    result = runner.invoke(main, ["check", str(program)])
    assert result.exit_code == 0
    assert "OK: 6 instructions" in result.output


def test_check_reports_error(runner, tmp_path):
    path = tmp_path / "bad.turtle"
    path.write_text("pen down\nteleport 1 2\n")
    result = runner.invoke(main, ["check", str(path)])
    assert result.exit_code == 1
    assert "line 2" in result.output
    assert "teleport" in result.output


def test_show(runner, program):
    result = runner.invoke(main, ["show", str(program)])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert len(lines) == 6
    assert lines[0].split() == ["0", "goto", "10.0", "10.0"]
    assert lines[3].split() == ["3", "move", "5.0"]


def test_run_single_pass(runner, program):
    result = runner.invoke(main, ["run", str(program), "--single-pass", "--steps", "20"])
    assert result.exit_code == 0
    state = json.loads(result.output)
    assert state["position"] == [15.0, 15.0]
    assert state["heading"] == "south"
    assert state["halted"] is True
    assert state["segments"] == [[[10.0, 10.0], [15.0, 10.0]], [[15.0, 10.0], [15.0, 15.0]]]


def test_run_trace_and_resize(runner, tmp_path):
    path = tmp_path / "center.turtle"
    path.write_text("goto center\n")
    result = runner.invoke(main, ["run", str(path), "--width", "100", "--height", "60", "--trace"])
    assert result.exit_code == 0
    assert "[0] goto center center" in result.output
    assert '"position": [\n    50.0,\n    30.0\n  ]' in result.output


def test_run_uses_config(runner, tmp_path):
    config_path = tmp_path / "turtle.json"
    Config(language={"directions": "arrows"}, run={"looping": False}).save(config_path)
    path = tmp_path / "arrows.turtle"
    path.write_text("face left\nmove 3\n")

    result = runner.invoke(main, ["run", str(path), "-c", str(config_path)])
    assert result.exit_code == 0
    state = json.loads(result.output)
    assert state["position"] == [-3.0, 0.0]
    assert state["heading"] == "west"
    assert state["halted"] is True

    result = runner.invoke(main, ["check", str(path)])
    assert result.exit_code == 1
    assert "Invalid direction" in result.output


def test_init_config(runner, tmp_path):
    path = tmp_path / "configs" / "turtle.json"
    result = runner.invoke(main, ["init-config", str(path)])
    assert result.exit_code == 0
    assert Config.load(path) == Config()


def test_check_rejects_undecodable_program(runner, tmp_path):
    path = tmp_path / "binary.turtle"
    path.write_bytes(b"move \xff\xfe\n")
    result = runner.invoke(main, ["check", str(path)])
    assert result.exit_code == 1
    assert not isinstance(result.exception, UnicodeDecodeError)
    assert str(path) in result.output


@pytest.mark.parametrize(
    "content",
    [
        '{"viewport": {"width": -1}}',
        "{",
        "[]",
        "3",
        b'{"run": {"looping": \xff}}',
    ],
)
def test_invalid_config_is_reported(runner, program, tmp_path, content):
    config_path = tmp_path / "turtle.json"
    if isinstance(content, bytes):
        config_path.write_bytes(content)
    else:
        config_path.write_text(content)
    result = runner.invoke(main, ["check", str(program), "-c", str(config_path)])
    assert result.exit_code == 1
    assert "Invalid config" in result.output


@pytest.mark.parametrize("option", ["--width", "--height"])
@pytest.mark.parametrize("value", ["-5", "0"])
def test_run_rejects_non_positive_size(runner, program, option, value):
    result = runner.invoke(main, ["run", str(program), option, value])
    assert result.exit_code == 2
    assert option in result.output


def test_run_watch_paces_steps(runner, program, monkeypatch):
    delays = []
    monkeypatch.setattr("turtlescript.cli.time.sleep", delays.append)
    result = runner.invoke(main, ["run", str(program), "--watch", "--steps", "3"])
    assert result.exit_code == 0
    assert delays == [0.05, 0.05, 0.05]

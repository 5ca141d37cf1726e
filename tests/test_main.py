"""
Tests for the command-line entry point: real shell, temporary config and log.
"""

import logging
import textwrap

from linux_installer.logging_utils import configure_logging, parse_level
from linux_installer.main import main


def write_config(tmp_path, body):
    path = tmp_path / "installer.yaml"
    path.write_text(textwrap.dedent(body))
    return str(path)


def test_main_success(tmp_path, capsys):
    marker = tmp_path / "marker"
    config = write_config(
        tmp_path,
        f"""\
        title: Test install
        steps:
          - run: "touch {marker}"
          - parallel:
              - run: "true"
              - run: "echo ok"
          - message: "all good"
        """,
    )
    log = tmp_path / "install.log"

    code = main(["--config", config, "--log", str(log)])

    assert code == 0
    assert marker.exists()
    out = capsys.readouterr().out
    assert "Test install" in out
    assert "all good" in out
    assert "Installation completed" in out
    assert "CMD touch" in log.read_text()


def test_main_failure_exit_code(tmp_path, capsys):
    marker = tmp_path / "never"
    config = write_config(
        tmp_path,
        f"""\
        steps:
          - run: "exit 4"
          - run: "touch {marker}"
        """,
    )

    code = main(["--config", config, "--log", str(tmp_path / "install.log"), "--quiet"])

    assert code == 1
    assert not marker.exists()
    captured = capsys.readouterr()
    assert "Installation failed" in captured.out
    assert "[Error  ]" not in captured.err


def test_main_dry_run(tmp_path):
    marker = tmp_path / "marker"
    config = write_config(tmp_path, f'steps:\n  - run: "touch {marker}"\n')

    assert main(["--config", config, "--log", str(tmp_path / "l.log"), "--dry-run", "--quiet"]) == 0
    assert not marker.exists()


def test_main_bad_config(tmp_path, capsys):
    config = write_config(tmp_path, "steps: nope\n")
    assert main(["--config", config, "--log", str(tmp_path / "l.log")]) == 2
    assert "Cannot load" in capsys.readouterr().out


def test_main_missing_config(tmp_path):
    assert main(["--config", str(tmp_path / "missing.yaml"), "--log", str(tmp_path / "l.log")]) == 2


def test_configure_logging_falls_back(tmp_path, monkeypatch):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    monkeypatch.chdir(tmp_path)

    actual = configure_logging(log_path=str(blocker / "sub" / "x.log"))

    assert actual == str(tmp_path.resolve() / "x.log")
    assert configure_logging(log_path="/elsewhere.log") == actual


def test_parse_level():
    assert parse_level("debug") == logging.DEBUG
    assert parse_level("nonsense") == logging.INFO
    assert parse_level(None) == logging.INFO

"""
Tests for loading and validating the YAML installer config.
"""

import textwrap

import pytest

from linux_installer.installer_config import (
    InstallerConfigError,
    load_installer_config,
    parse_installer_config,
    step_kind,
)


def write(tmp_path, text, name="installer.yaml"):
    path = tmp_path / name
    path.write_text(textwrap.dedent(text))
    return str(path)


def test_load_full_config(tmp_path):
    path = write(
        tmp_path,
        """\
        title: Workstation
        clear_screen: true
        dry_run: true
        env:
          LANG: C
        answers:
          user: admin
        steps:
          - message: hello
            color: green
            style: bold
          - prompt: "Host?"
            key: hostname
          - parallel:
              - run: "true"
              - run: "echo {hostname}"
        """,
    )

    cfg = load_installer_config(path)

    assert cfg.title == "Workstation"
    assert cfg.clear_screen is True
    assert cfg.dry_run is True
    assert cfg.env == {"LANG": "C"}
    assert cfg.answers == {"user": "admin"}
    assert [step_kind(s) for s in cfg.steps] == ["message", "prompt", "parallel"]


def test_defaults():
    cfg = parse_installer_config({"steps": []})
    assert cfg.title == "Installer"
    assert cfg.clear_screen is False
    assert cfg.dry_run is False
    assert cfg.env == {}
    assert cfg.steps == []


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_installer_config(str(tmp_path / "nope.yaml"))


def test_rejects_non_yaml_extension(tmp_path):
    path = write(tmp_path, "steps: []\n", name="installer.json")
    with pytest.raises(InstallerConfigError, match="must be YAML"):
        load_installer_config(path)


def test_rejects_broken_yaml(tmp_path):
    path = write(tmp_path, "steps: [unclosed\n")
    with pytest.raises(InstallerConfigError):
        load_installer_config(path)


@pytest.mark.parametrize(
    "raw, message",
    [
        ([1, 2], "mapping"),
        ({"title": "x"}, "'steps' list"),
        ({"steps": ["run"]}, "must be a mapping"),
        ({"steps": [{"shout": "x"}]}, "exactly one of"),
        ({"steps": [{"run": "a", "message": "b"}]}, "exactly one of"),
        ({"steps": [{"prompt": "Name?"}]}, "needs a key"),
        ({"steps": [{"parallel": {"run": "a"}}]}, "list of steps"),
        ({"steps": [{"parallel": [{"parallel": []}]}]}, "cannot be nested"),
        ({"steps": [{"message": "x", "color": "purple"}]}, "unknown color"),
        ({"steps": [{"message": "x", "background": "gray"}]}, "unknown background"),
        ({"steps": [{"message": "x", "style": "blink"}]}, "unknown style"),
    ],
)
def test_validation_errors(raw, message):
    with pytest.raises(InstallerConfigError, match=message):
        parse_installer_config(raw)

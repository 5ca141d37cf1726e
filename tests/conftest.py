from __future__ import annotations

import io
import logging
from typing import Dict, List

import pytest

from linux_installer.lib.command import CmdResult, ShellExecutor


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers and type(h) in (logging.FileHandler, logging.StreamHandler):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    for attr in ("_linux_installer_configured", "_linux_installer_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)


class FakeShell(ShellExecutor):
    """Records command lines; exit codes come from ``results``."""

    def __init__(self, results: Dict[str, int] | None = None) -> None:
        super().__init__()
        self.results = results or {}
        self.commands: List[str] = []

    async def execute(self, command_line: str, *, input_text: str | None = None) -> CmdResult:
        self.commands.append(command_line)
        code = self.results.get(command_line, 0)
        stderr = "boom" if code else ""
        return CmdResult(command=command_line, returncode=code, stdout=f"out:{command_line}", stderr=stderr)


@pytest.fixture
def fake_shell():
    return FakeShell()


@pytest.fixture
def out_stream():
    return io.StringIO()

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from ..lib.command import CommandError, ShellExecutor
from ..sequencer import Completion, Step
from .placeholders import fill_placeholders

logger = logging.getLogger(__name__)


class RunCommandStep(Step):
    """Run one command line; succeeds with its stdout, fails with CommandError."""

    def __init__(
        self,
        command: str,
        *,
        shell: ShellExecutor,
        answers: Optional[Dict[str, str]] = None,
        step_id: str = "run_command",
    ) -> None:
        self.command = command
        self.shell = shell
        self.answers = answers if answers is not None else {}
        self.step_id = step_id
        self._task: Optional[asyncio.Task] = None

    def start(self, done: Completion, value: Any) -> None:
        command = fill_placeholders(self.command, self.answers)

        def _exited(error: Optional[CommandError], stdout: str, stderr: str) -> None:
            if error is not None:
                done.fail(error)
                return
            logger.info("[%s] ok", self.step_id)
            done.ok(stdout)

        self._task = self.shell.run(command, _exited)

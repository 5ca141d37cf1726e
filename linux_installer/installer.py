from __future__ import annotations

import abc
import logging
from typing import Any, Optional

from .lib.command import ShellExecutor
from .lib.console import FColor, Input, Output
from .lib.logger import Logger
from .sequencer import RunState, Sequencer

logger = logging.getLogger(__name__)


class Installer(abc.ABC):
    """Top-level driver: owns one Sequencer and the collaborators its steps use.

    Subclasses implement ``run``: register steps on ``self.sequencer``, attach
    an error handler (``self.fail`` is the usual one), start the sequencer and
    return the process exit status.
    """

    def __init__(
        self,
        *,
        log: Optional[Logger] = None,
        output: Optional[Output] = None,
        input: Optional[Input] = None,
        shell: Optional[ShellExecutor] = None,
    ) -> None:
        self.log = log or Logger()
        self.output = output or Output()
        self.input = input or Input()
        self.shell = shell or ShellExecutor()
        self.sequencer = Sequencer()
        self.exit_code = 0

    @abc.abstractmethod
    def run(self) -> int:
        ...

    def fail(self, error: Any) -> None:
        """Error handler: report ``error`` and mark the run as failed."""

        self.log.error(str(error))
        self.output.write_line(f"Installation failed: {error}", FColor.RED)
        self.exit_code = 1

    def finish(self) -> int:
        """Exit status after the sequencer reached a terminal state."""

        state = self.sequencer.state
        if state is RunState.COMPLETED:
            self.log.info("Installation completed")
            self.output.write_line("Installation completed", FColor.GREEN)
            return 0
        logger.debug("Installer finished in state %s", state.value)
        return self.exit_code or 1

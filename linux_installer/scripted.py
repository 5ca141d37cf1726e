from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .installer import Installer
from .installer_config import InstallerConfig, step_kind
from .lib.command import ShellExecutor
from .lib.console import BColor, FColor, FStyle, Input, Output
from .lib.logger import Logger
from .sequencer import Step
from .steps import MessageStep, PromptStep, RunCommandStep

logger = logging.getLogger(__name__)


class ScriptedInstaller(Installer):
    """Installer whose pipeline comes from an ``InstallerConfig``."""

    def __init__(
        self,
        config: InstallerConfig,
        *,
        log: Optional[Logger] = None,
        output: Optional[Output] = None,
        input: Optional[Input] = None,
        shell: Optional[ShellExecutor] = None,
    ) -> None:
        if shell is None:
            shell = ShellExecutor(env=config.env, dry_run=config.dry_run)
        super().__init__(log=log, output=output, input=input, shell=shell)
        self.config = config
        self.answers: Dict[str, str] = dict(config.answers)

    def build(self) -> None:
        for index, item in enumerate(self.config.steps, start=1):
            step_id = f"{index:02d}_{step_kind(item)}"
            if "parallel" in item:
                members = [
                    self._make_step(member, f"{step_id}.{n}")
                    for n, member in enumerate(item["parallel"], start=1)
                ]
                self.sequencer.parallel(*members)
            else:
                self.sequencer.then(self._make_step(item, step_id))
        self.sequencer.on_error(self.fail)

    def _make_step(self, item: Dict[str, Any], step_id: str) -> Step:
        kind = step_kind(item)
        if kind == "run":
            return RunCommandStep(str(item["run"]), shell=self.shell, answers=self.answers, step_id=step_id)
        if kind == "prompt":
            return PromptStep(
                str(item["prompt"]),
                str(item["key"]),
                input=self.input,
                output=self.output,
                answers=self.answers,
                default=None if item.get("default") is None else str(item["default"]),
                secret=bool(item.get("secret", False)),
                step_id=step_id,
            )
        return MessageStep(
            str(item["message"]),
            output=self.output,
            color=FColor[str(item.get("color", "white")).upper()],
            background=BColor[str(item["background"]).upper()] if item.get("background") else None,
            style=FStyle[str(item.get("style", "reset")).upper()],
            answers=self.answers,
            step_id=step_id,
        )

    def run(self) -> int:
        if self.config.clear_screen:
            self.output.clear()
        self.output.write_line(self.config.title, FColor.WHITE, style=FStyle.BOLD)
        self.log.info(f"Starting {self.config.title} ({len(self.config.steps)} steps)")

        self.build()
        self.sequencer.start()
        return self.finish()

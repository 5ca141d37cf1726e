from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

logger = logging.getLogger(__name__)


class CommandError(RuntimeError):
    def __init__(self, command: str, returncode: int, stderr: str = "") -> None:
        super().__init__(f"Command failed ({returncode}): {command}\n{stderr}".rstrip())
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


@dataclass(frozen=True)
class CmdResult:
    command: str
    returncode: int
    stdout: str
    stderr: str

    @property
    def error(self) -> Optional[CommandError]:
        if self.returncode == 0:
            return None
        return CommandError(self.command, self.returncode, self.stderr)


CmdCallback = Callable[[Optional[CommandError], str, str], None]


class ShellExecutor:
    """Run command lines through ``/bin/sh`` without blocking the event loop.

    - Always logs the command.
    - Captures stdout/stderr.
    - dry_run logs but does not execute.
    """

    def __init__(
        self,
        *,
        env: Mapping[str, str] | None = None,
        cwd: str | None = None,
        dry_run: bool = False,
    ) -> None:
        self.env = dict(env or {})
        self.cwd = cwd
        self.dry_run = dry_run

    async def execute(self, command_line: str, *, input_text: str | None = None) -> CmdResult:
        logger.info("CMD %s", command_line)

        if self.dry_run:
            return CmdResult(command=command_line, returncode=0, stdout="", stderr="")

        proc = await asyncio.create_subprocess_shell(
            command_line,
            stdin=asyncio.subprocess.PIPE if input_text is not None else asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=self.cwd,
            env=dict(os.environ, **self.env),
        )
        out, err = await proc.communicate(input_text.encode() if input_text is not None else None)
        stdout = out.decode(errors="replace")
        stderr = err.decode(errors="replace")

        if stdout:
            logger.debug("STDOUT %s", stdout.strip())
        if stderr:
            logger.debug("STDERR %s", stderr.strip())

        return CmdResult(command=command_line, returncode=proc.returncode, stdout=stdout, stderr=stderr)

    def run(self, command_line: str, callback: CmdCallback) -> "asyncio.Task[None]":
        """Start ``command_line`` on the running loop.

        ``callback(error, stdout, stderr)`` fires once when the process exits;
        ``error`` is None for exit status 0.
        """

        async def _run() -> None:
            try:
                result = await self.execute(command_line)
            except OSError as e:
                logger.error("Could not start %s: %s", command_line, e)
                callback(CommandError(command_line, -1, str(e)), "", "")
                return
            callback(result.error, result.stdout, result.stderr)

        return asyncio.get_running_loop().create_task(_run())

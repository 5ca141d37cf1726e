from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from ..lib.console import FColor, Input, Output
from ..sequencer import Completion, Step

logger = logging.getLogger(__name__)


class PromptStep(Step):
    """Ask a question, store the answer under ``key`` for later placeholders."""

    def __init__(
        self,
        question: str,
        key: str,
        *,
        input: Input,
        output: Output,
        answers: Dict[str, str],
        default: Optional[str] = None,
        secret: bool = False,
        step_id: str = "prompt",
    ) -> None:
        self.question = question
        self.key = key
        self.input = input
        self.output = output
        self.answers = answers
        self.default = default
        self.secret = secret
        self.step_id = step_id
        self._task: Optional[asyncio.Task] = None

    def start(self, done: Completion, value: Any) -> None:
        self.output.write(self.question + " ", FColor.CYAN)
        if self.default:
            self.output.write(f"[{self.default}] ", FColor.GRAY)
        self._task = asyncio.ensure_future(self._ask(done))

    async def _ask(self, done: Completion) -> None:
        try:
            line = await self.input.read_line()
        except (OSError, ValueError) as e:
            done.fail(e)
            return

        answer = line or (self.default or "")
        self.answers[self.key] = answer
        logger.info("[%s] %s=%r", self.step_id, self.key, "***" if self.secret else answer)
        done.ok(answer)

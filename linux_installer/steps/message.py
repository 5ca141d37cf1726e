from __future__ import annotations

from typing import Any, Dict, Optional

from ..lib.console import BColor, FColor, FStyle, Output
from ..sequencer import Completion, Step
from .placeholders import fill_placeholders


class MessageStep(Step):
    def __init__(
        self,
        text: str,
        *,
        output: Output,
        color: FColor = FColor.WHITE,
        background: Optional[BColor] = None,
        style: FStyle = FStyle.RESET,
        answers: Optional[Dict[str, str]] = None,
        step_id: str = "message",
    ) -> None:
        self.text = text
        self.output = output
        self.color = color
        self.background = background
        self.style = style
        self.answers = answers if answers is not None else {}
        self.step_id = step_id

    def start(self, done: Completion, value: Any) -> None:
        text = fill_placeholders(self.text, self.answers)
        self.output.write_line(text, self.color, self.background, self.style)
        done.ok(text)

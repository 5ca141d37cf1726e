from __future__ import annotations

import asyncio
import enum
import logging
import sys
import threading
from typing import Callable, Optional, TextIO

import click

from .strings import remove_suffix_if_present

logger = logging.getLogger(__name__)


class FColor(enum.Enum):
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"
    GRAY = "bright_black"


class BColor(enum.Enum):
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"


class FStyle(enum.Enum):
    RESET = "reset"
    BOLD = "bold"
    DIM = "dim"
    ITALIC = "italic"
    UNDERLINE = "underline"
    INVERSE = "inverse"
    HIDDEN = "hidden"
    STRIKETHROUGH = "strikethrough"


# click.style has no "conceal" attribute.
_HIDDEN_ON = "\033[8m"
_HIDDEN_OFF = "\033[28m"

CLEAR_SCREEN = "\033c"


def styled(
    message: str,
    color: FColor = FColor.WHITE,
    background: Optional[BColor] = None,
    style: FStyle = FStyle.RESET,
) -> str:
    """Render ``message`` with ANSI color/style codes."""

    kwargs = {
        "fg": color.value,
        "bg": background.value if background is not None else None,
        "bold": style is FStyle.BOLD or None,
        "dim": style is FStyle.DIM or None,
        "italic": style is FStyle.ITALIC or None,
        "underline": style is FStyle.UNDERLINE or None,
        "reverse": style is FStyle.INVERSE or None,
        "strikethrough": style is FStyle.STRIKETHROUGH or None,
    }
    text = click.style(message, **kwargs)
    if style is FStyle.HIDDEN:
        text = _HIDDEN_ON + text + _HIDDEN_OFF
    return text


class Output:
    """Colored writer over a text stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None, *, color: Optional[bool] = None) -> None:
        self._stream = stream
        self._color = color

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def write(
        self,
        message: str,
        color: FColor = FColor.WHITE,
        background: Optional[BColor] = None,
        style: FStyle = FStyle.RESET,
    ) -> "Output":
        click.echo(styled(message, color, background, style), file=self.stream, nl=False, color=self._color)
        return self

    def write_line(
        self,
        message: str,
        color: FColor = FColor.WHITE,
        background: Optional[BColor] = None,
        style: FStyle = FStyle.RESET,
    ) -> "Output":
        self.write(message, color, background, style)
        self.stream.write("\r\n")
        self.stream.flush()
        return self

    def clear(self) -> "Output":
        self.stream.write(CLEAR_SCREEN)
        self.stream.flush()
        return self


def strip_line_ending(line: str) -> str:
    line = remove_suffix_if_present(line, "\n")
    return remove_suffix_if_present(line, "\r")


class Input:
    """Line reader. Each read delivers exactly one line with CR/LF removed.

    Async reads run on a daemon thread per read, not the loop's default
    executor: a read still blocked when the run ends must not hold up loop
    shutdown or process exit.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdin

    def read_line_sync(self) -> str:
        return strip_line_ending(self.stream.readline())

    async def read_line(self) -> str:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[str] = loop.create_future()
        reader = threading.Thread(
            target=self._read_into, args=(loop, future), name="linux-installer-input", daemon=True
        )
        reader.start()
        return await future

    def _read_into(self, loop: asyncio.AbstractEventLoop, future: "asyncio.Future[str]") -> None:
        try:
            line = self.read_line_sync()
        except (OSError, ValueError) as e:
            _deliver(loop, future, None, e)
        else:
            _deliver(loop, future, line, None)

    def get(self, callback: Callable[[str], None]) -> "asyncio.Task[None]":
        """Schedule a read on the running loop; ``callback(line)`` fires once."""

        async def _read() -> None:
            callback(await self.read_line())

        return asyncio.get_running_loop().create_task(_read())


def _deliver(
    loop: asyncio.AbstractEventLoop,
    future: "asyncio.Future[str]",
    line: Optional[str],
    error: Optional[BaseException],
) -> None:
    def _set() -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(line)

    try:
        loop.call_soon_threadsafe(_set)
    except RuntimeError:
        # Loop already closed: the run ended while this read was blocked.
        logger.debug("Dropping input line read after the loop closed")

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

DEFAULT_LOG_PATH = "/var/log/linux-installer.log"

_FMT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d - %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"

_CONFIGURED_FLAG = "_linux_installer_configured"
_PATH_FLAG = "_linux_installer_log_path"


def _open_log_file(log_path: str) -> tuple[logging.Handler, str]:
    """Open ``log_path``, or a same-named file in the working directory if it is not writable."""

    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path, encoding="utf-8"), log_path
    except OSError:
        fallback = str(Path.cwd() / Path(log_path).name)
        return logging.FileHandler(fallback, encoding="utf-8"), fallback


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = False,
) -> str:
    """Configure process logging once.

    Notes:
    - /var/log is not writable for unprivileged runs. We still try it first.
    - Console output is off by default: the installer talks to the user
      through its own colored output and log facade.
    - DEBUG switches to a format with file:line.

    Returns the actual file path being used.
    """

    root = logging.getLogger()
    root.setLevel(level)

    if getattr(root, _CONFIGURED_FLAG, False):
        return getattr(root, _PATH_FLAG, log_path)

    fmt = logging.Formatter(_FMT_DEBUG if level <= logging.DEBUG else _FMT, datefmt=_DATEFMT)

    file_handler, chosen_path = _open_log_file(log_path)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        root.addHandler(console)

    setattr(root, _CONFIGURED_FLAG, True)
    setattr(root, _PATH_FLAG, chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path


def parse_level(level: Optional[str]) -> int:
    """Convert a level name to its numeric constant (INFO when unknown)."""
    if not level:
        return logging.INFO
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.INFO
    return numeric

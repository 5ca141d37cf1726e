from __future__ import annotations

import argparse
import logging
from typing import Optional

from .installer_config import InstallerConfigError, load_installer_config
from .lib.command import ShellExecutor
from .lib.console import FColor, Input, Output
from .lib.logger import ConsoleSink, Logger, LoggingSink, TeeSink
from .logging_utils import DEFAULT_LOG_PATH, configure_logging, parse_level
from .scripted import ScriptedInstaller

logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "installer.yaml"


def build_logger(*, quiet: bool) -> Logger:
    if quiet:
        return Logger(sink=LoggingSink())
    return Logger(sink=TeeSink((ConsoleSink(), LoggingSink())))


def run(
    *,
    config_path: str = DEFAULT_CONFIG_PATH,
    log_path: str = DEFAULT_LOG_PATH,
    log_level: str = "INFO",
    dry_run: bool = False,
    quiet: bool = False,
) -> int:
    """Load the installer config, run its pipeline, return the exit status."""

    configure_logging(log_path=log_path, level=parse_level(log_level))

    output = Output()
    try:
        cfg = load_installer_config(config_path)
    except (FileNotFoundError, InstallerConfigError) as e:
        logger.error("Bad installer config %s: %s", config_path, e)
        output.write_line(f"Cannot load {config_path}: {e}", FColor.RED)
        return 2

    installer = ScriptedInstaller(
        cfg,
        log=build_logger(quiet=quiet),
        output=output,
        input=Input(),
        shell=ShellExecutor(env=cfg.env, dry_run=dry_run or cfg.dry_run),
    )
    return installer.run()


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="linux-installer")
    p.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to installer steps (yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING or ERROR")
    p.add_argument("--dry-run", action="store_true", help="Log commands without executing them")
    p.add_argument("--quiet", action="store_true", help="Send log lines to the log file only")

    args = p.parse_args(argv)

    return run(
        config_path=args.config,
        log_path=args.log,
        log_level=args.log_level,
        dry_run=bool(args.dry_run),
        quiet=bool(args.quiet),
    )


if __name__ == "__main__":
    raise SystemExit(main())

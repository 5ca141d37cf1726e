from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .lib.console import BColor, FColor, FStyle

STEP_KINDS = ("run", "prompt", "message", "parallel")


class InstallerConfigError(ValueError):
    pass


def step_kind(item: Dict[str, Any]) -> str:
    kinds = [k for k in STEP_KINDS if k in item]
    if len(kinds) != 1:
        raise InstallerConfigError(f"step must have exactly one of {', '.join(STEP_KINDS)}: {item!r}")
    return kinds[0]


def _check_enum(enum_cls: Any, item: Dict[str, Any], key: str) -> None:
    name = item.get(key)
    if name is None:
        return
    if str(name).upper() not in enum_cls.__members__:
        allowed = ", ".join(m.lower() for m in enum_cls.__members__)
        raise InstallerConfigError(f"unknown {key} {name!r} (expected one of: {allowed})")


def _check_step(item: Any, *, nested: bool = False) -> None:
    if not isinstance(item, dict):
        raise InstallerConfigError(f"step must be a mapping, got {item!r}")

    kind = step_kind(item)
    if kind == "parallel":
        if nested:
            raise InstallerConfigError("parallel groups cannot be nested")
        members = item["parallel"]
        if not isinstance(members, list):
            raise InstallerConfigError("parallel must be a list of steps")
        for member in members:
            _check_step(member, nested=True)
    elif kind == "prompt" and not item.get("key"):
        raise InstallerConfigError(f"prompt step needs a key: {item!r}")

    _check_enum(FColor, item, "color")
    _check_enum(BColor, item, "background")
    _check_enum(FStyle, item, "style")


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any]

    @property
    def title(self) -> str:
        return str(self.raw.get("title") or "Installer")

    @property
    def clear_screen(self) -> bool:
        return bool(self.raw.get("clear_screen", False))

    @property
    def dry_run(self) -> bool:
        return bool(self.raw.get("dry_run", False))

    @property
    def env(self) -> Dict[str, str]:
        return {str(k): str(v) for k, v in (self.raw.get("env") or {}).items()}

    @property
    def answers(self) -> Dict[str, str]:
        """Preset prompt answers; placeholders can use them without prompting."""
        return {str(k): str(v) for k, v in (self.raw.get("answers") or {}).items()}

    @property
    def steps(self) -> List[Dict[str, Any]]:
        return list(self.raw.get("steps") or [])


def parse_installer_config(raw: Any) -> InstallerConfig:
    if not isinstance(raw, dict):
        raise InstallerConfigError("installer config must contain a mapping/object")

    steps = raw.get("steps")
    if not isinstance(steps, list):
        raise InstallerConfigError("installer config needs a 'steps' list")
    for item in steps:
        _check_step(item)

    return InstallerConfig(raw=raw)


def load_installer_config(path: str) -> InstallerConfig:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise InstallerConfigError("installer config must be YAML")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise InstallerConfigError(f"{path}: {e}") from e

    return parse_installer_config(raw)

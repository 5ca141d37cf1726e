from __future__ import annotations

from typing import Any, Iterable, Optional


def is_null_or_empty(obj: Any) -> bool:
    """True for None and empty str/list/tuple/dict/set."""

    if obj is None:
        return True
    if isinstance(obj, (str, list, tuple, dict, set)):
        return len(obj) == 0
    return False


def replace_all(original: Optional[str], find: Optional[str], replacement: str) -> str:
    if is_null_or_empty(original):
        return ""
    if not find:
        return original
    return original.replace(find, replacement)


def replace_all_in_multiple(original: Optional[str], finds: Iterable[str], replacement: str) -> str:
    result = original or ""
    for find in finds or ():
        result = replace_all(result, find, replacement)
    return result


def remove_suffix_if_present(original: Optional[str], suffix: Optional[str]) -> str:
    if is_null_or_empty(original):
        return ""
    if suffix and original.endswith(suffix):
        return original[: -len(suffix)]
    return original


def starts_with(original: Optional[str], prefix: Optional[str]) -> bool:
    if is_null_or_empty(original):
        return False
    return original.startswith(prefix or "")


def ends_with(original: Optional[str], suffix: Optional[str]) -> bool:
    if is_null_or_empty(original):
        return False
    return original.endswith(suffix or "")


def contains(original: Optional[str], find: Optional[str]) -> bool:
    if is_null_or_empty(original) or is_null_or_empty(find):
        return False
    return find in original

from __future__ import annotations

from typing import Mapping

from ..lib.strings import replace_all


def fill_placeholders(text: str, answers: Mapping[str, str]) -> str:
    """Replace ``{key}`` with the answer stored under ``key``.

    Unknown placeholders are left as they are.
    """

    for key, answer in answers.items():
        text = replace_all(text, "{" + key + "}", answer)
    return text

"""Operator-facing message catalogue for cart and billing errors."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

_CATALOGUE = Path(__file__).resolve().parent / "messages.json"


@lru_cache(maxsize=1)
def _load_messages() -> dict[str, str]:
    with open(_CATALOGUE, encoding="utf-8") as f:
        return json.load(f)


def render(key: str, /, **params: object) -> str:
    """Return the message for *key* with ``{placeholder}`` values filled in.

    An unknown key is returned as-is; a template whose placeholders are not
    all supplied is returned unformatted.
    """
    text = _load_messages().get(key)
    if text is None:
        return key
    try:
        return text.format(**params)
    except KeyError:
        return text

"""Helpers for reading JSON out of free-form model replies."""

from __future__ import annotations

import json
import re
from typing import Any

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


class ModelOutputError(ValueError):
    """The model reply could not be read as the expected JSON shape."""


def strip_code_fences(raw: str) -> str:
    """Remove markdown code-fence markers and surrounding whitespace."""
    return _FENCE_RE.sub("", raw or "").strip()


def parse_json_reply(raw: str) -> Any:
    cleaned = strip_code_fences(raw)
    if not cleaned:
        raise ModelOutputError("empty model reply")
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ModelOutputError(f"model reply is not JSON: {exc.msg}") from exc

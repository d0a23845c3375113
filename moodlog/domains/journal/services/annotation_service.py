"""Mood/tag annotation of journal text via the external model.

``annotate`` never raises: when the model cannot be reached or its reply
cannot be read, the deterministic keyword heuristic in ``fallback_analyze``
supplies the annotation instead.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, List, Protocol

from moodlog.core.ai.client import ModelClientError
from moodlog.core.ai.outcome import Degraded, Ok, Outcome
from moodlog.core.ai.parsing import ModelOutputError, parse_json_reply
from moodlog.domains.journal.mood import MOOD_DEFAULT, clamp_mood

logger = logging.getLogger(__name__)

POSITIVE_WORDS = ("happy", "good", "great", "love", "excited")
NEGATIVE_WORDS = ("sad", "bad", "hate", "tired", "angry")
OFFLINE_TAG = "offline-analysis"
GENERIC_TAG = "general"
MAX_TAGS = 5

ANNOTATION_PROMPT = """Analyze the following journal entry and return a JSON object with exactly two keys:
1. "moodScore": an integer from 1 (lowest/sad) to 10 (highest/happy) based on the sentiment.
2. "tags": an array of short strings (1-2 words) representing key activities, topics, or emotions found in the text.

Ensure the response is valid JSON. Do not include markdown code blocks.

Entry: {entry}
"""


class TextModel(Protocol):
    def generate(self, prompt: str) -> str: ...


@dataclass(frozen=True)
class Annotation:
    mood_score: int
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"moodScore": self.mood_score, "tags": list(self.tags)}


def fallback_analyze(text: str) -> Annotation:
    """Score by counting positive and negative words found in ``text``.

    Each word counts once when it appears anywhere in the lower-cased text,
    substrings included ("badly" counts as "bad").
    """
    lowered = (text or "").lower()
    positive = sum(1 for word in POSITIVE_WORDS if word in lowered)
    negative = sum(1 for word in NEGATIVE_WORDS if word in lowered)
    return Annotation(mood_score=clamp_mood(5 + positive - negative), tags=[OFFLINE_TAG])


def build_prompt(text: str) -> str:
    # json.dumps quotes and escapes the entry so it cannot close the prompt string.
    return ANNOTATION_PROMPT.format(entry=json.dumps(text, ensure_ascii=False))


def coerce_annotation(data: Any) -> Annotation:
    """Normalize a decoded model reply into an ``Annotation``.

    Raises:
        ModelOutputError: when the reply is not a JSON object.
    """
    if not isinstance(data, dict):
        raise ModelOutputError(f"expected a JSON object, got {type(data).__name__}")
    return Annotation(
        mood_score=_coerce_score(data.get("moodScore")),
        tags=_coerce_tags(data.get("tags")),
    )


def _coerce_score(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return MOOD_DEFAULT
    try:
        number = float(value)
    except (TypeError, ValueError):
        return MOOD_DEFAULT
    if not math.isfinite(number):
        return MOOD_DEFAULT
    return clamp_mood(round(number))


def _coerce_tags(value: Any) -> List[str]:
    if not isinstance(value, list):
        return [GENERIC_TAG]
    tags = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (str, int, float)):
            continue
        tag = str(item).strip()
        if tag:
            tags.append(tag)
    if value and not tags:
        return [GENERIC_TAG]
    return tags[:MAX_TAGS]


def annotate(text: str, client: TextModel) -> Outcome[Annotation]:
    """Annotate ``text`` with the model, degrading to the keyword heuristic."""
    try:
        raw = client.generate(build_prompt(text))
        return Ok(coerce_annotation(parse_json_reply(raw)))
    except (ModelClientError, ModelOutputError) as exc:
        reason = str(exc)
    except Exception as exc:  # noqa: BLE001 - ingestion must not block on the model
        logger.exception("Unexpected annotation failure")
        reason = f"unexpected {type(exc).__name__}"

    logger.warning("Annotation degraded, using keyword fallback: %s", reason)
    return Degraded(fallback_analyze(text), reason)

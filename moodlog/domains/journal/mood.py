"""Mood score bounds and the canonical bucket thresholds.

The same thresholds drive the list filter and the ``moodBucket`` field on
every entry response, so clients never need their own copy.
"""

from __future__ import annotations

MOOD_MIN = 1
MOOD_MAX = 10
MOOD_DEFAULT = 5

HAPPY_MIN = 7
NEUTRAL_MIN = 5

BUCKET_ALL = "all"
BUCKET_HAPPY = "happy"
BUCKET_NEUTRAL = "neutral"
BUCKET_SAD = "sad"
BUCKETS = (BUCKET_ALL, BUCKET_HAPPY, BUCKET_NEUTRAL, BUCKET_SAD)


def clamp_mood(score: int) -> int:
    return max(MOOD_MIN, min(MOOD_MAX, int(score)))


def mood_bucket(score: int) -> str:
    if score >= HAPPY_MIN:
        return BUCKET_HAPPY
    if score >= NEUTRAL_MIN:
        return BUCKET_NEUTRAL
    return BUCKET_SAD

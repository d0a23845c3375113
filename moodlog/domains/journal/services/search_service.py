"""Meaning-based matching of a query against a caller-supplied entry set.

Stateless: nothing is indexed or stored, every call sends the candidates to
the model again. Failures yield an empty match list.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Sequence

from moodlog.core.ai.client import ModelClientError
from moodlog.core.ai.outcome import Degraded, Ok, Outcome
from moodlog.core.ai.parsing import ModelOutputError, parse_json_reply
from moodlog.domains.journal.services.annotation_service import TextModel

logger = logging.getLogger(__name__)

TEXT_PREFIX_CHARS = 200

SEARCH_PROMPT = """I have a list of journal entries. I need you to find the ones that are semantically relevant to the user's search query.

User Query: {query}

Entries:
{entries}

Task: Return a JSON array of strings containing ONLY the "id" of the entries that match the query's meaning.
If no entries match, return an empty array [].
Do not include any explanation, just the JSON array.
"""


@dataclass(frozen=True)
class SearchCandidate:
    id: str
    text: str
    tags: List[str] = field(default_factory=list)


def build_search_prompt(
    query: str, candidates: Iterable[SearchCandidate], prefix_chars: int = TEXT_PREFIX_CHARS
) -> str:
    simplified = [
        {"id": c.id, "text": (c.text or "")[:prefix_chars], "tags": list(c.tags)}
        for c in candidates
    ]
    return SEARCH_PROMPT.format(
        query=json.dumps(query, ensure_ascii=False),
        entries=json.dumps(simplified, ensure_ascii=False),
    )


def select_known_ids(data: Any, candidates: Sequence[SearchCandidate]) -> List[str]:
    """Keep ids that name a candidate, in reply order, without duplicates.

    Raises:
        ModelOutputError: when the reply is not a JSON array.
    """
    if not isinstance(data, list):
        raise ModelOutputError(f"expected a JSON array, got {type(data).__name__}")
    known = {c.id for c in candidates}
    matches: List[str] = []
    for item in data:
        if isinstance(item, bool) or not isinstance(item, (str, int)):
            continue
        entry_id = str(item)
        if entry_id in known and entry_id not in matches:
            matches.append(entry_id)
    return matches


def semantic_match(
    query: str,
    candidates: Sequence[SearchCandidate],
    client: TextModel,
    *,
    prefix_chars: int = TEXT_PREFIX_CHARS,
) -> Outcome[List[str]]:
    if not candidates:
        return Ok([])
    try:
        raw = client.generate(build_search_prompt(query, candidates, prefix_chars))
        return Ok(select_known_ids(parse_json_reply(raw), candidates))
    except (ModelClientError, ModelOutputError) as exc:
        reason = str(exc)
    except Exception as exc:  # noqa: BLE001 - search reports "no matches" instead of failing
        logger.exception("Unexpected semantic search failure")
        reason = f"unexpected {type(exc).__name__}"

    logger.warning("Semantic search degraded to no matches: %s", reason)
    return Degraded([], reason)

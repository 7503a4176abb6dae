"""Validation of the remote model's ranking payload.

The model is asked for strict JSON but compliance is not guaranteed, so
every field is type-checked before it is trusted.
"""

import json
import math
from dataclasses import dataclass
from typing import Any, Collection, Union

from replyassist.core.utils.text import truncate_text

from .types import RankedItem

MAX_ITEMS = 3
MAX_REASON_CHARS = 120


@dataclass(frozen=True)
class Valid:
    items: tuple[RankedItem, ...]


@dataclass(frozen=True)
class Invalid:
    reason: str


PayloadResult = Union[Valid, Invalid]


def extract_json_object(text: str) -> str | None:
    """Substring between the first ``{`` and the last ``}``, if any."""
    start = text.find("{")
    end = text.rfind("}")
    if start < 0 or end <= start:
        return None
    return text[start:end + 1]


def _coerce_item(raw: Any, allowed_ids: Collection[str]) -> RankedItem | None:
    if not isinstance(raw, dict):
        return None
    intent_id = raw.get("intentId")
    confidence = raw.get("confidencePct")
    reason = raw.get("reason")
    if not isinstance(intent_id, str) or not isinstance(reason, str):
        return None
    # bool is an int subclass
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        return None
    if not math.isfinite(confidence):
        return None
    if allowed_ids and intent_id not in allowed_ids:
        return None
    pct = max(0, min(100, int(round(confidence))))
    return RankedItem(intent_id=intent_id, confidence_pct=pct, reason=truncate_text(reason.strip(), MAX_REASON_CHARS))


def parse_ranked_payload(text: Any, allowed_ids: Collection[str] = ()) -> PayloadResult:
    """Parse ``{"ranked": [...]}`` out of raw model text.

    Items with a wrong-typed field, or an id outside ``allowed_ids`` when
    given, are discarded. Duplicate ids keep their first occurrence.
    """
    if not isinstance(text, str) or not text.strip():
        return Invalid("empty response")

    body = extract_json_object(text)
    if body is None:
        return Invalid("no JSON object in response")

    try:
        parsed = json.loads(body)
    except json.JSONDecodeError as e:
        return Invalid(f"unparseable JSON: {e.msg}")

    if not isinstance(parsed, dict) or not isinstance(parsed.get("ranked"), list):
        return Invalid("missing 'ranked' list")

    items: list[RankedItem] = []
    seen: set[str] = set()
    for raw in parsed["ranked"]:
        item = _coerce_item(raw, allowed_ids)
        if item is None or item.intent_id in seen:
            continue
        seen.add(item.intent_id)
        items.append(item)
        if len(items) >= MAX_ITEMS:
            break

    if not items:
        return Invalid("no usable ranked items")
    return Valid(tuple(items))

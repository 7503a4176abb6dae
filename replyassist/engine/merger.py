"""Reconciles a remote ranking with the local baseline."""

from typing import Mapping, Sequence

from replyassist.core.logging import get_logger

from .types import Intent, RankedItem, Suggestion

_log = get_logger("engine.merger")

FINAL_SIZE = 3


def merge(
    baseline: Sequence[Suggestion],
    ranked: Sequence[RankedItem],
    intents_by_id: Mapping[str, Intent],
    size: int = FINAL_SIZE,
) -> list[Suggestion]:
    """Remote-ranked entries first, then baseline backfill, capped at ``size``.

    Ids absent from ``intents_by_id`` are dropped. Lexical scores come from
    the matching baseline entry, or 0 when the remote picked something the
    baseline did not return.
    """
    base_by_id = {s.intent_id: s for s in baseline}
    out: list[Suggestion] = []
    seen: set[str] = set()

    for item in ranked:
        if len(out) >= size:
            break
        intent = intents_by_id.get(item.intent_id)
        if intent is None or intent.id in seen:
            _log.debug("remote item dropped", intent_id=item.intent_id)
            continue
        base = base_by_id.get(intent.id)
        out.append(Suggestion(
            intent_id=intent.id,
            title=intent.title,
            answer=intent.answer,
            score=base.score if base else 0.0,
            confidence_pct=item.confidence_pct,
            tags=intent.tags,
            reason=item.reason,
        ))
        seen.add(intent.id)

    for s in baseline:
        if len(out) >= size:
            break
        if s.intent_id in seen:
            continue
        out.append(s)
        seen.add(s.intent_id)

    return out

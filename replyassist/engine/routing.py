"""Keyword pre-routing: narrow the catalog before lexical scoring."""

from typing import Sequence

from replyassist.core.logging import get_logger
from replyassist.core.utils.text import contains_any, normalize_query

from .rules import ScoringRules
from .types import Intent

_log = get_logger("engine.routing")


def route_intents(question: str, intents: Sequence[Intent], rules: ScoringRules) -> list[Intent]:
    """Return the subset of intents matching the first routing rule the question triggers.

    Falls back to the full catalog when no rule triggers or a triggered rule
    selects nothing.
    """
    q = normalize_query(question)
    for rule in rules.routing_rules:
        if not contains_any(q, rule.triggers):
            continue
        picked = [it for it in intents if contains_any(normalize_query(it.combined_text), rule.intent_terms)]
        if picked:
            _log.debug("routed", rule=rule.name, picked=len(picked), total=len(intents))
            return picked
    return list(intents)

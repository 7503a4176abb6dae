"""Turns lexical scores into an ordered, calibrated top-K list."""

import math
from typing import Sequence

from replyassist.config import SOFTMAX_TEMPERATURE, SUGGEST_TOP_K
from replyassist.core.logging import get_logger
from replyassist.core.utils.text import normalize_whitespace

from .similarity import LexicalScorer
from .types import Intent, ScoredCandidate, Suggestion

_log = get_logger("engine.ranking")

MAX_TOP_K = 5
MIN_TEMPERATURE = 0.05


def softmax(scores: Sequence[float], temperature: float = SOFTMAX_TEMPERATURE) -> list[float]:
    """Temperature-scaled softmax. Lower temperature sharpens the top-1 gap."""
    if not scores:
        return []
    t = max(MIN_TEMPERATURE, temperature)
    top = max(scores)
    exps = [math.exp((s - top) / t) for s in scores]
    total = sum(exps) or 1.0
    return [e / total for e in exps]


def to_percent(probability: float) -> int:
    """Round half up to an integer percent clamped to [0, 100]."""
    return max(0, min(100, int(math.floor(probability * 100 + 0.5))))


def score_intents(
    scorer: LexicalScorer, intents: Sequence[Intent], query: str
) -> list[ScoredCandidate]:
    """Score every intent, sorted descending; ties keep catalog order."""
    query_vec = scorer.vectorize(query)
    scored = [ScoredCandidate(intent, scorer.score_vector(query, query_vec, intent)) for intent in intents]
    return sorted(scored, key=lambda c: c.score, reverse=True)


def rank(
    intents: Sequence[Intent],
    query: str,
    scorer: LexicalScorer,
    top_k: int = SUGGEST_TOP_K,
    temperature: float = SOFTMAX_TEMPERATURE,
) -> list[Suggestion]:
    """Rank ``intents`` against ``query`` and return at most ``top_k`` suggestions.

    An empty query or empty catalog yields an empty list.
    """
    if not normalize_whitespace(query) or not intents:
        return []

    k = max(1, min(top_k, MAX_TOP_K))
    top = score_intents(scorer, intents, query)[:k]
    probs = softmax([c.score for c in top], temperature)

    suggestions = [
        Suggestion(
            intent_id=c.intent.id,
            title=c.intent.title,
            answer=c.intent.answer,
            score=c.score,
            confidence_pct=to_percent(p),
            tags=c.intent.tags,
        )
        for c, p in zip(top, probs)
    ]
    _log.debug(
        "baseline ranked",
        candidates=len(intents),
        top_k=k,
        top_id=suggestions[0].intent_id,
        top_score=suggestions[0].score,
    )
    return suggestions

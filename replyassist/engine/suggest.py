"""End-to-end suggestion flow: route, rank locally, maybe rerank remotely, merge."""

from typing import Optional, Sequence

from replyassist.config import RERANK_MIN_CANDIDATES, SOFTMAX_TEMPERATURE, SUGGEST_TOP_K
from replyassist.core.logging import get_logger
from replyassist.core.utils.text import normalize_whitespace

from .merger import FINAL_SIZE, merge
from .ranking import rank
from .reranker import RerankerClient
from .routing import route_intents
from .rules import DEFAULT_RULES, ScoringRules
from .similarity import LexicalScorer
from .types import (
    Failure,
    Intent,
    Ranked,
    RemoteRankingResult,
    RemoteStatus,
    Suggestion,
    SuggestionMeta,
    SuggestionResponse,
    Unavailable,
    UnavailableReason,
)
from .verdict import Verdict, VerdictThresholds, verdict_of

_log = get_logger("engine.suggest")


class SuggestionEngine:

    def __init__(
        self,
        intents: Sequence[Intent],
        reranker: Optional[RerankerClient] = None,
        rules: ScoringRules = DEFAULT_RULES,
        *,
        thresholds: Optional[VerdictThresholds] = None,
        top_k: int = SUGGEST_TOP_K,
        temperature: float = SOFTMAX_TEMPERATURE,
        min_rerank_candidates: int = RERANK_MIN_CANDIDATES,
    ):
        self.intents = list(intents)
        self.intents_by_id = {i.id: i for i in self.intents}
        self.reranker = reranker
        self.rules = rules
        self.scorer = LexicalScorer(rules)
        self.thresholds = thresholds or VerdictThresholds()
        self.top_k = top_k
        self.temperature = temperature
        self.min_rerank_candidates = min_rerank_candidates

    def baseline(self, question: str) -> list[Suggestion]:
        routed = route_intents(question, self.intents, self.rules)
        return rank(routed, question, self.scorer, top_k=self.top_k, temperature=self.temperature)

    def should_rerank(self, baseline: Sequence[Suggestion]) -> bool:
        """Spend remote quota only when the local ranking is not already confident."""
        if self.reranker is None or not self.reranker.is_configured:
            return False
        if len(baseline) < self.min_rerank_candidates:
            return False
        return verdict_of(baseline, self.thresholds) is not Verdict.STRONG

    async def suggest(self, question: str) -> SuggestionResponse:
        """Top-3 suggestions for ``question`` plus ranking metadata.

        Rejecting blank questions is the caller's job; a blank question here
        simply yields no suggestions.
        """
        question = normalize_whitespace(question)
        baseline = self.baseline(question)
        suggestions = baseline[:FINAL_SIZE]

        meta = SuggestionMeta(verdict=Verdict.LOW.value, thresholds=self.thresholds.describe())
        if self.reranker is not None and self.reranker.is_configured:
            meta.remote_status = RemoteStatus.SKIPPED

        if self.should_rerank(baseline):
            candidates = [self.intents_by_id[s.intent_id] for s in baseline]
            result = await self._safe_rerank(question, candidates)
            suggestions = self._apply(result, baseline, suggestions, meta)

        meta.verdict = verdict_of(suggestions, self.thresholds).value
        _log.info(
            "suggested",
            verdict=meta.verdict,
            source=meta.model_used,
            remote=meta.remote_status.value,
            top=suggestions[0].intent_id if suggestions else None,
        )
        return SuggestionResponse(suggestions=suggestions, meta=meta)

    async def _safe_rerank(self, question: str, candidates: list[Intent]) -> Optional[RemoteRankingResult]:
        try:
            return await self.reranker.rerank(question, candidates)
        except Exception as e:
            _log.exception("reranker raised unexpectedly", err=str(e)[:120])
            return None

    def _apply(
        self,
        result: Optional[RemoteRankingResult],
        baseline: list[Suggestion],
        fallback: list[Suggestion],
        meta: SuggestionMeta,
    ) -> list[Suggestion]:
        meta.remote_status = RemoteStatus.FAILED

        if isinstance(result, Ranked):
            merged = merge(baseline, result.items, self.intents_by_id)
            meta.model_used = "remote"
            meta.remote_status = RemoteStatus.OK
            meta.remote_model = result.model
            return merged

        if isinstance(result, Failure):
            meta.remote_error = result.message
            meta.remote_model = result.model or None
        elif isinstance(result, Unavailable):
            if result.reason is UnavailableReason.MISSING_KEY:
                meta.remote_status = RemoteStatus.MISSING_KEY
            else:
                meta.remote_error = result.error.message
        else:
            meta.remote_error = "reranker error"
        return fallback

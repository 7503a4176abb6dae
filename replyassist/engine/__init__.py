from .merger import merge
from .ranking import rank, softmax
from .reranker import FALLBACK_MODELS, RerankerClient
from .rules import DEFAULT_RULES, KeywordGroup, RoutingRule, ScoringRules, load_rules
from .routing import route_intents
from .similarity import LexicalScorer, cosine, term_frequency, to_ngrams
from .suggest import SuggestionEngine
from .types import (
    Failure,
    Intent,
    Ranked,
    RankedItem,
    RemoteRankingResult,
    RemoteStatus,
    Suggestion,
    SuggestionResponse,
    Unavailable,
    UnavailableReason,
)
from .verdict import Verdict, VerdictThresholds, verdict_for, verdict_of

__all__ = [
    "merge",
    "rank",
    "softmax",
    "FALLBACK_MODELS",
    "RerankerClient",
    "DEFAULT_RULES",
    "KeywordGroup",
    "RoutingRule",
    "ScoringRules",
    "load_rules",
    "route_intents",
    "LexicalScorer",
    "cosine",
    "term_frequency",
    "to_ngrams",
    "SuggestionEngine",
    "Failure",
    "Intent",
    "Ranked",
    "RankedItem",
    "RemoteRankingResult",
    "RemoteStatus",
    "Suggestion",
    "SuggestionResponse",
    "Unavailable",
    "UnavailableReason",
    "Verdict",
    "VerdictThresholds",
    "verdict_for",
    "verdict_of",
]

"""Character n-gram lexical similarity.

No tokenizer or morphological analyser is needed: overlapping character
n-grams match Korean and English text well enough for short CS questions.
"""

import math
from collections import Counter
from typing import Iterable

from replyassist.config import NGRAM_SIZE
from replyassist.core.utils.text import contains_any, normalize_query

from .rules import ScoringRules
from .types import Intent

Vector = dict[str, float]


def to_ngrams(text: str, n: int = NGRAM_SIZE) -> list[str]:
    """Split text into overlapping n-grams after padding with boundary spaces."""
    t = normalize_query(text)
    if not t:
        return []
    padded = f" {t} "
    return [padded[i:i + n] for i in range(len(padded) - n + 1)]


def term_frequency(tokens: Iterable[str]) -> Vector:
    """Log-scaled term frequency: ``1 + ln(count)`` per distinct token."""
    return {tok: 1.0 + math.log(count) for tok, count in Counter(tokens).items()}


def cosine(a: Vector, b: Vector) -> float:
    norm_a = math.sqrt(sum(v * v for v in a.values()))
    norm_b = math.sqrt(sum(v * v for v in b.values()))
    if norm_a == 0 or norm_b == 0:
        return 0.0

    small, large = (a, b) if len(a) < len(b) else (b, a)
    dot = sum(sv * large[k] for k, sv in small.items() if k in large)
    return dot / (norm_a * norm_b)


class LexicalScorer:
    """Scores one query against intents, with answer penalties and keyword bonuses."""

    def __init__(self, rules: ScoringRules, ngram_size: int = NGRAM_SIZE):
        if ngram_size < 1:
            raise ValueError("ngram_size must be positive")
        self.rules = rules
        self.ngram_size = ngram_size

    def vectorize(self, text: str) -> Vector:
        return term_frequency(to_ngrams(text, self.ngram_size))

    def similarity(self, query_vec: Vector, intent: Intent) -> float:
        return cosine(query_vec, self.vectorize(intent.document))

    def keyword_bonus(self, query: str, intent: Intent) -> float:
        if not self.rules.keyword_bonus or not self.rules.keyword_groups:
            return 0.0
        q = normalize_query(query)
        doc = normalize_query(intent.combined_text)
        hits = sum(
            1 for group in self.rules.keyword_groups
            if contains_any(q, group.terms) and contains_any(doc, group.terms)
        )
        return hits * self.rules.keyword_bonus

    def score_vector(self, query: str, query_vec: Vector, intent: Intent) -> float:
        raw = self.similarity(query_vec, intent)
        adjusted = raw * self.rules.answer_penalty(intent.answer)
        adjusted += self.keyword_bonus(query, intent)
        return max(0.0, min(1.0, adjusted))

    def score(self, query: str, intent: Intent) -> float:
        """Adjusted similarity of ``query`` to ``intent``, in [0, 1]."""
        return self.score_vector(query, self.vectorize(query), intent)

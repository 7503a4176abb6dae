from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from replyassist.config import (
    VERDICT_NORMAL_PCT,
    VERDICT_NORMAL_SCORE,
    VERDICT_STRONG_PCT,
    VERDICT_STRONG_SCORE,
)

from .types import Suggestion


class Verdict(str, Enum):
    STRONG = "strong"
    NORMAL = "normal"
    LOW = "low"


@dataclass(frozen=True)
class VerdictThresholds:
    strong_pct: int = VERDICT_STRONG_PCT
    strong_score: float = VERDICT_STRONG_SCORE
    normal_pct: int = VERDICT_NORMAL_PCT
    normal_score: float = VERDICT_NORMAL_SCORE

    def describe(self) -> dict[str, str]:
        return {
            "strong": f">={self.strong_pct}% (and score>={self.strong_score})",
            "normal": f">={self.normal_pct}% (and score>={self.normal_score})",
            "low": "else",
        }


def verdict_for(confidence_pct: int, score: float, thresholds: VerdictThresholds) -> Verdict:
    if confidence_pct >= thresholds.strong_pct and score >= thresholds.strong_score:
        return Verdict.STRONG
    if confidence_pct >= thresholds.normal_pct and score >= thresholds.normal_score:
        return Verdict.NORMAL
    return Verdict.LOW


def verdict_of(suggestions: Sequence[Suggestion], thresholds: VerdictThresholds) -> Verdict:
    """Verdict of the top-1 suggestion, ``low`` when there is none."""
    if not suggestions:
        return Verdict.LOW
    top = suggestions[0]
    return verdict_for(top.confidence_pct, top.score, thresholds)

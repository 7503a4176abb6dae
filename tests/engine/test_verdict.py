"""Tests for the confidence verdict."""

import pytest

from replyassist.engine.types import Suggestion
from replyassist.engine.verdict import Verdict, VerdictThresholds, verdict_for, verdict_of


def _top(pct, score):
    return Suggestion(intent_id="a", title="t", answer="x", score=score, confidence_pct=pct)


class TestVerdict:

    @pytest.fixture
    def thresholds(self):
        return VerdictThresholds(strong_pct=90, strong_score=0.22, normal_pct=70, normal_score=0.18)

    @pytest.mark.parametrize("pct,score,expected", [
        (95, 0.30, Verdict.STRONG),
        (90, 0.22, Verdict.STRONG),
        (95, 0.20, Verdict.NORMAL),
        (75, 0.30, Verdict.NORMAL),
        (70, 0.18, Verdict.NORMAL),
        (95, 0.10, Verdict.LOW),
        (60, 0.90, Verdict.LOW),
    ])
    def test_thresholds(self, thresholds, pct, score, expected):
        assert verdict_for(pct, score, thresholds) is expected

    def test_uses_top_suggestion(self, thresholds):
        assert verdict_of([_top(95, 0.3), _top(5, 0.01)], thresholds) is Verdict.STRONG

    def test_empty_is_low(self, thresholds):
        assert verdict_of([], thresholds) is Verdict.LOW

    def test_custom_thresholds(self):
        lenient = VerdictThresholds(strong_pct=50, strong_score=0.0)
        assert verdict_for(55, 0.01, lenient) is Verdict.STRONG

    def test_describe(self, thresholds):
        d = thresholds.describe()
        assert set(d) == {"strong", "normal", "low"}
        assert "90" in d["strong"]

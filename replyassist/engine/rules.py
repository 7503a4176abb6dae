"""Domain vocabulary for the lexical heuristics, kept as data.

The scorer and router only see a ``ScoringRules`` instance; swapping the
business domain means shipping a different rules file, not editing code.
"""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from replyassist.core.errors import CatalogError
from replyassist.core.logging import get_logger

_log = get_logger("engine.rules")


@dataclass(frozen=True)
class KeywordGroup:
    name: str
    terms: tuple[str, ...]


@dataclass(frozen=True)
class RoutingRule:
    name: str
    triggers: tuple[str, ...]
    intent_terms: tuple[str, ...]


@dataclass(frozen=True)
class ScoringRules:
    generic_answer_patterns: tuple[str, ...] = ()
    generic_penalty: float = 0.35
    very_short_answer_chars: int = 15
    very_short_penalty: float = 0.55
    short_answer_chars: int = 40
    short_penalty: float = 0.6
    keyword_bonus: float = 0.12
    keyword_groups: tuple[KeywordGroup, ...] = ()
    routing_rules: tuple[RoutingRule, ...] = ()
    _compiled: tuple[re.Pattern, ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self):
        try:
            compiled = tuple(re.compile(p, re.IGNORECASE) for p in self.generic_answer_patterns)
        except re.error as e:
            raise CatalogError(f"invalid generic answer pattern: {e}") from e
        object.__setattr__(self, "_compiled", compiled)

    @classmethod
    def empty(cls) -> "ScoringRules":
        """Rules with every penalty and bonus disabled."""
        return cls(very_short_answer_chars=0, short_answer_chars=0, keyword_bonus=0.0)

    def is_generic_answer(self, answer: str) -> bool:
        return any(p.search(answer) for p in self._compiled)

    def answer_penalty(self, answer: str) -> float:
        """Multiplier applied to the raw similarity for non-substantive answers."""
        text = answer.strip()
        if self.is_generic_answer(text):
            return self.generic_penalty
        if len(text) < self.very_short_answer_chars:
            return self.very_short_penalty
        if len(text) < self.short_answer_chars:
            return self.short_penalty
        return 1.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScoringRules":
        kwargs: dict[str, Any] = {}
        for key in (
            "generic_penalty", "very_short_penalty", "short_penalty", "keyword_bonus",
        ):
            if key in data:
                kwargs[key] = float(data[key])
        for key in ("very_short_answer_chars", "short_answer_chars"):
            if key in data:
                kwargs[key] = int(data[key])
        if "generic_answer_patterns" in data:
            kwargs["generic_answer_patterns"] = tuple(str(p) for p in data["generic_answer_patterns"])
        if "keyword_groups" in data:
            kwargs["keyword_groups"] = tuple(
                KeywordGroup(name=str(g["name"]), terms=tuple(str(t).lower() for t in g["terms"]))
                for g in data["keyword_groups"]
            )
        if "routing_rules" in data:
            kwargs["routing_rules"] = tuple(
                RoutingRule(
                    name=str(r["name"]),
                    triggers=tuple(str(t).lower() for t in r["triggers"]),
                    intent_terms=tuple(str(t).lower() for t in r["intent_terms"]),
                )
                for r in data["routing_rules"]
            )
        return cls(**kwargs)


DEFAULT_RULES = ScoringRules(
    generic_answer_patterns=(
        r"^\s*(안녕하세요|반갑습니다)[\s.!~,]*(고객님)?[\s.!~]*$",
        r"^\s*(감사합니다|감사드립니다|고맙습니다)[\s.!~]*$",
        r"확인\s*(후|하고)\s*(다시\s*)?(답변|연락|안내)\s*(드리겠습니다|드릴게요)",
        r"잠시만\s*기다려\s*주세요",
        r"^\s*(네|넵|예)[\s.!~,]*(알겠습니다|확인했습니다)?[\s.!~]*$",
    ),
    keyword_groups=(
        KeywordGroup("shipping", ("배송", "출고", "택배", "송장", "도착")),
        KeywordGroup("deposit_limit", ("보증금", "한도", "입찰한도", "증액", "입금")),
        KeywordGroup("appraisal", ("감정", "감정서", "정품", "가품", "검수")),
        KeywordGroup("repair", ("수선", "수리", "a/s", "애프터")),
    ),
    routing_rules=(
        RoutingRule(
            "shipping",
            triggers=("배송", "출고", "언제와", "안와", "택배", "송장", "진행중", "도착"),
            intent_terms=("배송", "출고", "송장", "택배"),
        ),
        RoutingRule(
            "deposit_limit",
            triggers=("한도", "입찰한도", "증액", "추가입금", "추가 입금", "보증금"),
            intent_terms=("보증금", "한도", "입찰한도", "증액", "입금"),
        ),
        RoutingRule(
            "product_info",
            triggers=("사이즈", "크기", "보증서", "사진", "캡쳐", "캡처", "제품명", "이미지"),
            intent_terms=("사이즈", "크기", "보증서", "사진", "캡쳐", "캡처", "제품명", "이미지"),
        ),
    ),
)


def load_rules(path: Optional[str | Path]) -> ScoringRules:
    """Load scoring rules from a JSON file, or return the defaults when unset."""
    if not path:
        return DEFAULT_RULES
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"cannot read scoring rules: {e}", path=str(p)) from e
    if not isinstance(data, dict):
        raise CatalogError("scoring rules must be a JSON object", path=str(p))
    try:
        rules = ScoringRules.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogError(f"invalid scoring rules: {e}", path=str(p)) from e
    _log.info(
        "scoring rules loaded",
        path=str(p),
        groups=len(rules.keyword_groups),
        routes=len(rules.routing_rules),
    )
    return rules

"""Data types shared across the suggestion engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from replyassist.core.errors import RemoteError, RemoteUnavailableError


@dataclass(frozen=True)
class Intent:
    """Immutable catalog entry: one canonical answer plus sample questions."""

    id: str
    title: str
    answer: str
    examples: tuple[str, ...]
    tags: tuple[str, ...] = ()

    @property
    def document(self) -> str:
        """Text the lexical scorer compares a query against."""
        return " / ".join(self.examples) + " " + self.title

    @property
    def combined_text(self) -> str:
        """Everything known about the intent, for keyword matching."""
        return " ".join([self.title, " ".join(self.tags), " ".join(self.examples), self.answer])


@dataclass(frozen=True)
class ScoredCandidate:
    intent: Intent
    score: float


@dataclass
class Suggestion:
    intent_id: str
    title: str
    answer: str
    score: float
    confidence_pct: int
    tags: tuple[str, ...] = ()
    reason: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "intentId": self.intent_id,
            "title": self.title,
            "answer": self.answer,
            "tags": list(self.tags),
            "score": round(self.score, 4),
            "confidencePct": self.confidence_pct,
        }
        if self.reason is not None:
            data["reason"] = self.reason
        return data


# ---------------------------------------------------------------------------
# Remote ranking outcome
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RankedItem:
    intent_id: str
    confidence_pct: int
    reason: str


@dataclass(frozen=True)
class Ranked:
    items: tuple[RankedItem, ...]
    model: str = ""

    ok = True


@dataclass(frozen=True)
class Failure:
    error: RemoteError
    model: str = ""

    ok = False

    @property
    def status(self) -> Optional[int]:
        return self.error.status

    @property
    def message(self) -> str:
        return self.error.message


class UnavailableReason(str, Enum):
    MISSING_KEY = "missing_key"
    CIRCUIT_OPEN = "circuit_open"


@dataclass(frozen=True)
class Unavailable:
    reason: UnavailableReason
    retry_after_sec: int = 0

    ok = False

    @property
    def message(self) -> str:
        if self.reason is UnavailableReason.CIRCUIT_OPEN:
            return f"quota_exceeded: remote ranking paused ({self.retry_after_sec}s remaining)"
        return "remote ranking not configured"

    @property
    def error(self) -> RemoteUnavailableError:
        return RemoteUnavailableError(self.message, code=self.reason.value)


RemoteRankingResult = Union[Ranked, Failure, Unavailable]


# ---------------------------------------------------------------------------
# Engine response
# ---------------------------------------------------------------------------


class RemoteStatus(str, Enum):
    MISSING_KEY = "missing_key"
    SKIPPED = "skipped"
    FAILED = "failed"
    OK = "ok"


@dataclass
class SuggestionMeta:
    verdict: str
    model_used: str = "local"
    remote_status: RemoteStatus = RemoteStatus.MISSING_KEY
    remote_error: Optional[str] = None
    remote_model: Optional[str] = None
    thresholds: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "verdict": self.verdict,
            "modelUsed": self.model_used,
            "remoteStatus": self.remote_status.value,
            "remoteError": self.remote_error,
            "remoteModel": self.remote_model,
            "thresholds": self.thresholds,
        }


@dataclass
class SuggestionResponse:
    suggestions: list[Suggestion]
    meta: SuggestionMeta

    def to_dict(self) -> dict[str, Any]:
        return {
            "suggestions": [s.to_dict() for s in self.suggestions],
            "meta": self.meta.to_dict(),
        }

"""Remote re-ranking of baseline candidates with Gemini.

The remote model only chooses and orders candidate ids; the engine never
shows model-written answer text. Every failure here ends up as a
``Failure`` or ``Unavailable`` value so the caller can always fall back to
the lexical baseline.
"""

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Collection, Optional, Sequence

from google.genai import types

from replyassist.config import (
    GEMINI_API_KEY,
    GEMINI_MODEL,
    RERANK_CACHE_TTL_SEC,
    RERANK_CIRCUIT_TTL_SEC,
    RERANK_DISCOVERY_LIMIT,
    RERANK_MAX_OUTPUT_TOKENS,
    RERANK_TEMPERATURE,
    RERANK_TIMEOUT_MS,
)
from replyassist.core.errors import (
    RemoteError,
    RemoteMalformedOutputError,
    RemoteNotFoundError,
    RemoteQuotaExceededError,
    classify_remote_error,
)
from replyassist.core.logging import get_logger
from replyassist.core.utils.gemini_client import create_gemini_client
from replyassist.core.utils.text import normalize_query

from .cache import TTLCache
from .circuit_breaker import QuotaCircuitBreaker
from .payload import Invalid, parse_ranked_payload
from .prompt import build_rerank_prompt
from .types import Failure, Intent, Ranked, RemoteRankingResult, Unavailable, UnavailableReason

_log = get_logger("rerank.client")

# Known-good model ids, tried in order after the configured model.
FALLBACK_MODELS: tuple[str, ...] = (
    "gemini-2.5-flash",
    "gemini-2.0-flash",
    "gemini-1.5-flash",
    "gemini-1.5-flash-latest",
    "gemini-1.5-pro",
)


class AttemptOutcome(str, Enum):
    SUCCESS = "success"   # stop, result is Ranked
    ADVANCE = "advance"   # model unknown, try the next one
    ABORT = "abort"       # stop, result is Failure


@dataclass(frozen=True)
class Attempt:
    outcome: AttemptOutcome
    result: Optional[RemoteRankingResult] = None
    error: Optional[RemoteError] = None


def model_preference(name: str) -> int:
    """Heuristic ordering for discovered models: flash > pro > latest, no previews."""
    n = name.lower()
    score = 0
    if "flash" in n:
        score += 30
    elif "pro" in n:
        score += 20
    if "latest" in n:
        score += 10
    if "exp" in n:
        score -= 15
    if "preview" in n:
        score -= 10
    return score


class RerankerClient:
    """Gemini reranker owning its response cache, quota circuit and model list.

    Construct one per process and inject it where suggestions are served;
    tests build a fresh instance so no state leaks between them.
    """

    def __init__(
        self,
        api_key: Optional[str] = GEMINI_API_KEY,
        model: Optional[str] = GEMINI_MODEL,
        *,
        client: Any = None,
        fallback_models: Sequence[str] = FALLBACK_MODELS,
        cache_ttl_sec: float = RERANK_CACHE_TTL_SEC,
        circuit_ttl_sec: float = RERANK_CIRCUIT_TTL_SEC,
        timeout_ms: int = RERANK_TIMEOUT_MS,
        temperature: float = RERANK_TEMPERATURE,
        max_output_tokens: int = RERANK_MAX_OUTPUT_TOKENS,
        discovery_limit: int = RERANK_DISCOVERY_LIMIT,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._api_key = api_key
        self.preferred_model = model
        self.fallback_models = tuple(fallback_models)
        self.timeout_ms = timeout_ms
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.discovery_limit = discovery_limit

        self._client = client
        self.cache: TTLCache[RemoteRankingResult] = TTLCache(cache_ttl_sec, clock=clock)
        self.circuit = QuotaCircuitBreaker(circuit_ttl_sec, clock=clock)
        self._discovered: Optional[list[str]] = None
        self._discovery_lock = asyncio.Lock()

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def model_candidates(self) -> list[str]:
        """Configured model first, then the hardcoded fallbacks, without duplicates."""
        ordered = [self.preferred_model] if self.preferred_model else []
        ordered.extend(self.fallback_models)
        return list(dict.fromkeys(ordered))

    @staticmethod
    def cache_key(question: str, candidates: Sequence[Intent]) -> tuple[str, tuple[str, ...]]:
        return normalize_query(question), tuple(c.id for c in candidates)

    def stats(self) -> dict[str, Any]:
        return {
            "configured": self.is_configured,
            "circuit": self.circuit.state,
            "cooldown_s": self.circuit.remaining_cooldown(),
            "cache_entries": len(self.cache),
            "cache_hits": self.cache.hits,
            "discovered_models": len(self._discovered or []),
        }

    async def rerank(self, question: str, candidates: Sequence[Intent]) -> RemoteRankingResult:
        """Ask the remote model to pick and order up to three of ``candidates``."""
        if not self.is_configured:
            return Unavailable(UnavailableReason.MISSING_KEY)
        if self.circuit.is_open():
            remaining = self.circuit.remaining_cooldown()
            _log.debug("circuit open, skipping remote", remaining_s=remaining)
            return Unavailable(UnavailableReason.CIRCUIT_OPEN, retry_after_sec=remaining)

        key = self.cache_key(question, candidates)
        cached = self.cache.get(key)
        if cached is not None:
            _log.debug("rerank cache hit", candidates=len(candidates), ok=cached.ok)
            return cached

        started = time.monotonic()
        result = await self._rank_remote(question, candidates)
        # the open circuit already blocks retries; a cached quota failure would outlive it
        if not (isinstance(result, Failure) and isinstance(result.error, RemoteQuotaExceededError)):
            self.cache.set(key, result)

        if isinstance(result, Ranked):
            _log.info(
                "rerank ok",
                model=result.model,
                items=len(result.items),
                dur_ms=int((time.monotonic() - started) * 1000),
            )
        return result

    async def _rank_remote(self, question: str, candidates: Sequence[Intent]) -> RemoteRankingResult:
        prompt = build_rerank_prompt(question, candidates)
        allowed = {c.id for c in candidates}
        tried: list[str] = []

        result = await self._walk(self.model_candidates(), prompt, allowed, tried)
        if result is not None:
            return result

        try:
            discovered = [m for m in await self._discover_models() if m not in tried]
        except RemoteQuotaExceededError as e:
            return Failure(e, model=tried[-1] if tried else "")
        if discovered:
            _log.info("retrying with discovered models", models=discovered[:self.discovery_limit])
            result = await self._walk(discovered[:self.discovery_limit], prompt, allowed, tried)
            if result is not None:
                return result

        _log.warning("no remote model available", tried=len(tried))
        return Failure(
            RemoteNotFoundError(f"no available model (tried {len(tried)})", status=404),
            model=tried[-1] if tried else "",
        )

    async def _walk(
        self,
        models: Sequence[str],
        prompt: str,
        allowed: Collection[str],
        tried: list[str],
    ) -> Optional[RemoteRankingResult]:
        """Attempt models in order; ``None`` means every one was not found."""
        for model in models:
            tried.append(model)
            attempt = await self._attempt(model, prompt, allowed)
            if attempt.outcome is AttemptOutcome.ADVANCE:
                _log.info("model not found, advancing", model=model)
                continue
            return attempt.result
        return None

    async def _attempt(self, model: str, prompt: str, allowed: Collection[str]) -> Attempt:
        try:
            text = await self._generate(model, prompt)
        except Exception as e:
            error = classify_remote_error(e)
            if isinstance(error, RemoteNotFoundError):
                return Attempt(AttemptOutcome.ADVANCE, error=error)
            if isinstance(error, RemoteQuotaExceededError):
                self.circuit.trip(error.message)
            _log.warning(
                "rerank call failed",
                model=model,
                code=error.code,
                status=error.status,
                err=error.message[:120],
            )
            return Attempt(AttemptOutcome.ABORT, Failure(error, model=model), error)

        parsed = parse_ranked_payload(text, allowed)
        if isinstance(parsed, Invalid):
            error = RemoteMalformedOutputError(f"malformed_output: {parsed.reason}")
            _log.warning("rerank output unusable", model=model, reason=parsed.reason)
            return Attempt(AttemptOutcome.ABORT, Failure(error, model=model), error)

        return Attempt(AttemptOutcome.SUCCESS, Ranked(parsed.items, model=model))

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = create_gemini_client(self._api_key or "", self.timeout_ms)
        return self._client

    async def _generate(self, model: str, prompt: str) -> str:
        config = types.GenerateContentConfig(
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
            response_mime_type="application/json",
        )
        response = await self._get_client().aio.models.generate_content(
            model=model,
            contents=prompt,
            config=config,
        )
        return response.text or ""

    async def _discover_models(self) -> list[str]:
        """List generate-capable Gemini models once per process, best first."""
        async with self._discovery_lock:
            if self._discovered is None:
                names = await self._list_models()
                if names is None:
                    return []
                self._discovered = sorted(names, key=model_preference, reverse=True)
                _log.info("models discovered", count=len(self._discovered))
            return self._discovered

    async def _list_models(self) -> Optional[list[str]]:
        """Generate-capable Gemini model names, or None when listing failed.

        A quota error trips the circuit and is re-raised so the caller reports it.
        """
        names: list[str] = []
        try:
            pager = await self._get_client().aio.models.list()
            async for m in pager:
                actions = getattr(m, "supported_actions", None) or []
                if actions and "generateContent" not in actions:
                    continue
                name = (getattr(m, "name", "") or "").removeprefix("models/")
                if name.startswith("gemini") and name not in names:
                    names.append(name)
        except Exception as e:
            error = classify_remote_error(e)
            if isinstance(error, RemoteQuotaExceededError):
                self.circuit.trip(error.message)
            _log.warning("model discovery failed", code=error.code, err=error.message[:120])
            if isinstance(error, RemoteQuotaExceededError):
                raise error from e
            return None
        return names

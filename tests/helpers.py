"""Test doubles shared across suites."""

import json
from types import SimpleNamespace

from google.genai import errors as genai_errors

from replyassist.engine.types import Intent


def make_intent(id, title, answer, examples, tags=()):
    return Intent(id=id, title=title, answer=answer, examples=tuple(examples), tags=tuple(tags))


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakePager:
    """Async-iterable stand-in for the SDK's model list pager."""

    def __init__(self, models):
        self._models = list(models)

    def __aiter__(self):
        self._it = iter(self._models)
        return self

    async def __anext__(self):
        try:
            return next(self._it)
        except StopIteration:
            raise StopAsyncIteration


def fake_model(name, actions=("generateContent",)):
    return SimpleNamespace(name=f"models/{name}", supported_actions=list(actions))


def ranked_response(*items):
    """Model response whose text carries the given (intent_id, pct, reason) items."""
    payload = {"ranked": [{"intentId": i, "confidencePct": p, "reason": r} for i, p, r in items]}
    return SimpleNamespace(text=json.dumps(payload, ensure_ascii=False))


def api_error(code, status, message="error"):
    cls = genai_errors.ClientError if code < 500 else genai_errors.ServerError
    return cls(code, {"error": {"code": code, "message": message, "status": status}})

"""Loading the intent catalog produced by the offline dataset build."""

import json
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel, Field, ValidationError, field_validator

from replyassist.core.errors import CatalogError
from replyassist.core.logging import get_logger
from replyassist.core.utils.text import normalize_whitespace
from replyassist.engine.types import Intent

_log = get_logger("catalog")


class IntentRecord(BaseModel):
    id: str
    title: str
    answer: str
    examples: list[str]
    tags: list[str] = Field(default_factory=list)

    @field_validator("id", "title", "answer")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("examples")
    @classmethod
    def _clean_examples(cls, v: list[str]) -> list[str]:
        cleaned = [normalize_whitespace(e) for e in v]
        cleaned = [e for e in cleaned if e]
        if not cleaned:
            raise ValueError("at least one non-empty example is required")
        return cleaned

    @field_validator("tags")
    @classmethod
    def _clean_tags(cls, v: list[str]) -> list[str]:
        return [t.strip() for t in v if t.strip()]

    def to_intent(self) -> Intent:
        return Intent(
            id=self.id,
            title=self.title,
            answer=self.answer,
            examples=tuple(self.examples),
            tags=tuple(self.tags),
        )


def parse_catalog(data: object, source: str = "<memory>") -> list[Intent]:
    """Validate raw catalog data (a list, or ``{"intents": [...]}``)."""
    if isinstance(data, dict):
        data = data.get("intents")
    if not isinstance(data, list):
        raise CatalogError("catalog must be a list of intents", path=source)

    intents: list[Intent] = []
    seen: set[str] = set()
    for idx, raw in enumerate(data):
        try:
            intent = IntentRecord.model_validate(raw).to_intent()
        except ValidationError as e:
            raise CatalogError(f"intent #{idx} invalid: {e.errors()[0]['msg']}", path=source) from e
        if intent.id in seen:
            raise CatalogError(f"duplicate intent id: {intent.id}", path=source)
        seen.add(intent.id)
        intents.append(intent)
    return intents


def load_catalog(path: str | Path) -> list[Intent]:
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"cannot read catalog: {e}", path=str(p)) from e

    intents = parse_catalog(data, source=str(p))
    _log.info("catalog loaded", path=p.name, intents=len(intents))
    return intents


def index_catalog(intents: Sequence[Intent]) -> dict[str, Intent]:
    return {i.id: i for i in intents}

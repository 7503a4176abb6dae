import json
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, Field, field_validator

from replyassist.api.deps import AppState, get_state
from replyassist.core.errors import InputInvalidError
from replyassist.core.logging import get_logger

_log = get_logger("api.suggest")

router = APIRouter(tags=["Suggest"])


class SuggestRequest(BaseModel):

    question: Any = Field(default=None, validate_default=True)

    @field_validator("question")
    @classmethod
    def _as_text(cls, v: Any) -> str:
        # anything but a string counts as no question
        return v.strip() if isinstance(v, str) else ""


async def _read_body(request: Request) -> SuggestRequest:
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = None
    return SuggestRequest.model_validate(payload if isinstance(payload, dict) else {})


@router.post("/api/suggest")
async def suggest(body: SuggestRequest = Depends(_read_body), state: AppState = Depends(get_state)):

    question = body.question
    if not question:
        raise InputInvalidError("question is required")

    if state.engine is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="catalog not loaded")

    _log.debug("REQ recv", path="/api/suggest", q_len=len(question))
    response = await state.engine.suggest(question)
    return response.to_dict()

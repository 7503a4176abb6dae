import time
from contextlib import asynccontextmanager
from uuid import uuid4

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from replyassist.api import get_state, init_state, status_router, suggest_router
from replyassist.catalog import load_catalog
from replyassist.config import (
    APP_VERSION,
    HOST,
    INTENTS_PATH,
    PORT,
    SCORING_RULES_PATH,
    get_cors_origins,
)
from replyassist.core.errors import InputInvalidError, ReplyAssistError
from replyassist.core.logging import get_logger, get_request_id, reset_request_id, set_request_id
from replyassist.engine import RerankerClient, SuggestionEngine, load_rules

_log = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the catalog and wire the engine once per process."""
    intents = load_catalog(INTENTS_PATH)
    rules = load_rules(SCORING_RULES_PATH)
    reranker = RerankerClient()
    engine = SuggestionEngine(intents, reranker, rules)
    init_state(engine=engine, reranker=reranker, catalog_size=len(intents))
    _log.info(
        "APP ready",
        intents=len(intents),
        reranker=reranker.is_configured,
        model=reranker.preferred_model,
    )
    try:
        yield
    finally:
        get_state().reset()
        _log.info("APP shutdown")


app = FastAPI(title="replyassist API", version=APP_VERSION, lifespan=lifespan)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or uuid4().hex[:12]
    request.state.request_id = req_id
    token = set_request_id(req_id)
    t0 = time.perf_counter()
    try:
        response = await call_next(request)
    finally:
        reset_request_id(token)
    _log.debug("RES sent", path=request.url.path, dur_ms=int((time.perf_counter() - t0) * 1000))
    response.headers["X-Request-ID"] = req_id
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(status_router)
app.include_router(suggest_router)


@app.exception_handler(ReplyAssistError)
async def app_error_handler(request: Request, exc: ReplyAssistError):
    req_id = getattr(request.state, "request_id", None) or get_request_id()
    headers = {"X-Request-ID": req_id} if req_id else None

    if isinstance(exc, InputInvalidError):
        return JSONResponse(
            status_code=exc.http_status,
            headers=headers,
            content={"suggestions": [], "error": exc.code},
        )

    _log.error("APP error", path=str(request.url.path), code=exc.code, error=exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        headers=headers,
        content={
            "error": type(exc).__name__,
            "code": exc.code,
            "message": exc.message,
            "request_id": req_id,
        },
    )


if __name__ == "__main__":
    uvicorn.run(
        "replyassist.app:app",
        host=HOST,
        port=PORT,
        log_level="warning",
        reload=False,
    )

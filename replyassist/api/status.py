from fastapi import APIRouter, Depends

from replyassist.api.deps import AppState, get_state
from replyassist.config import APP_VERSION

router = APIRouter(tags=["Status"])


@router.get("/health")
async def health_check(state: AppState = Depends(get_state)):
    reranker = state.reranker.stats() if state.reranker is not None else {"configured": False}
    return {
        "status": "ok" if state.engine is not None else "degraded",
        "version": APP_VERSION,
        "catalog_size": state.catalog_size,
        "reranker": reranker,
    }

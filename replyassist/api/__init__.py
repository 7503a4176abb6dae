from .deps import state, get_state, init_state, AppState
from .status import router as status_router
from .suggest import router as suggest_router

__all__ = [
    'state',
    'get_state',
    'init_state',
    'AppState',
    'status_router',
    'suggest_router',
]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from replyassist.core.logging import get_logger

if TYPE_CHECKING:
    from replyassist.engine.reranker import RerankerClient
    from replyassist.engine.suggest import SuggestionEngine

_logger = get_logger("api.deps")


@dataclass
class AppState:
    """Shared application state, filled in by the app lifespan."""

    engine: Optional["SuggestionEngine"] = None
    reranker: Optional["RerankerClient"] = None
    catalog_size: int = 0

    def reset(self) -> None:
        """Reset all fields to their defaults (in-place, preserves identity)."""
        self.engine = None
        self.reranker = None
        self.catalog_size = 0


state = AppState()


def get_state() -> AppState:
    """Get the global application state."""
    return state


def init_state(**kwargs) -> None:
    """Set known AppState attributes; unknown keys are ignored."""
    for key, value in kwargs.items():
        if hasattr(state, key):
            setattr(state, key, value)
        else:
            _logger.debug("unknown state attribute ignored", key=key)

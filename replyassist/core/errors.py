"""
Application error hierarchy.

Only ``InputInvalidError`` ever reaches an HTTP caller. The ``RemoteError``
family is raised inside the reranker's per-model attempt and converted into a
``Failure`` result before it leaves the engine.
"""

import asyncio
import time
from typing import Any, Optional

from google.genai import errors as genai_errors


class ReplyAssistError(Exception):
    """Base for all typed application errors."""

    is_retryable: bool = False
    http_status: int = 500
    default_code: str = "INTERNAL"

    def __init__(self, message: str, *, code: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.timestamp = time.time()

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "is_retryable": self.is_retryable,
            "http_status": self.http_status,
            "timestamp": self.timestamp,
        }


class InputInvalidError(ReplyAssistError):
    http_status = 400
    default_code = "question_required"


class CatalogError(ReplyAssistError):
    default_code = "CATALOG"

    def __init__(self, message: str, *, path: Optional[str] = None, **kw: Any) -> None:
        super().__init__(message, **kw)
        self.path = path


# ---------------------------------------------------------------------------
# Remote reranking
# ---------------------------------------------------------------------------


class RemoteError(ReplyAssistError):
    http_status = 502
    default_code = "REMOTE"

    def __init__(self, message: str, *, status: Optional[int] = None, **kw: Any) -> None:
        super().__init__(message, **kw)
        self.status = status

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["status"] = self.status
        return data


class RemoteUnavailableError(RemoteError):
    http_status = 503
    default_code = "remote_unavailable"


class RemoteTransportError(RemoteError):
    is_retryable = True
    default_code = "remote_failed"


class RemoteNotFoundError(RemoteError):
    http_status = 404
    default_code = "model_not_found"


class RemoteQuotaExceededError(RemoteError):
    http_status = 429
    default_code = "quota_exceeded"


class RemoteMalformedOutputError(RemoteError):
    default_code = "malformed_output"


_NOT_FOUND_MARKERS = ("not_found", "not found", "is not supported for generatecontent")
_QUOTA_MARKERS = ("resource_exhausted", "quota", "rate limit")


def classify_remote_error(error: Exception) -> RemoteError:
    """Map an SDK or transport exception onto the remote error family.

    404 / NOT_FOUND advances the model fallback, 429 / RESOURCE_EXHAUSTED
    opens the circuit, anything else (auth, permission, 5xx, timeouts,
    network) stops the attempt sequence.
    """
    if isinstance(error, RemoteError):
        return error

    status: Optional[int] = None
    api_status = ""
    detail = str(error)
    if isinstance(error, genai_errors.APIError):
        status = error.code
        api_status = (error.status or "").upper()
        detail = f"{error.status or ''} {error.message or ''}".strip() or str(error)

    snippet = detail[:300]

    # message markers only when the response carried no status
    if status is not None or api_status:
        not_found = status == 404 or api_status == "NOT_FOUND"
        quota = status == 429 or api_status == "RESOURCE_EXHAUSTED"
    else:
        text = detail.lower()
        not_found = any(m in text for m in _NOT_FOUND_MARKERS)
        quota = any(m in text for m in _QUOTA_MARKERS)

    if not_found:
        return RemoteNotFoundError(snippet or "model not found", status=status or 404)
    if quota:
        return RemoteQuotaExceededError(f"quota_exceeded: {snippet}", status=status or 429)
    if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
        return RemoteTransportError("remote request timed out", status=status)
    return RemoteTransportError(snippet or type(error).__name__, status=status)

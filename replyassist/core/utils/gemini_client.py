"""google-genai client construction.

The reranker owns its client; nothing here is a process-wide singleton.
"""

from google import genai
from google.genai import types

from replyassist.core.logging import get_logger

_log = get_logger("core.gemini_client")


def create_gemini_client(api_key: str, timeout_ms: int) -> genai.Client:
    """Create a genai.Client with an HttpOptions timeout."""
    if not api_key:
        raise ValueError("GEMINI_API_KEY is required to create a Gemini client")
    client = genai.Client(
        api_key=api_key,
        http_options=types.HttpOptions(timeout=timeout_ms),
    )
    _log.info("genai client ready", timeout_ms=timeout_ms)
    return client

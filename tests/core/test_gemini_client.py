"""Tests for replyassist.core.utils.gemini_client."""

from unittest.mock import patch

import pytest

from replyassist.core.utils.gemini_client import create_gemini_client


class TestCreateGeminiClient:

    def test_requires_key(self):
        with pytest.raises(ValueError):
            create_gemini_client("", 1000)

    def test_passes_timeout(self):
        with patch("replyassist.core.utils.gemini_client.genai.Client") as mock_client:
            create_gemini_client("key", 1234)
        kwargs = mock_client.call_args.kwargs
        assert kwargs["api_key"] == "key"
        assert kwargs["http_options"].timeout == 1234

    def test_reranker_creates_client_lazily(self):
        from replyassist.engine.reranker import RerankerClient

        with patch("replyassist.engine.reranker.create_gemini_client") as factory:
            reranker = RerankerClient(api_key="key", model=None, timeout_ms=500)
            factory.assert_not_called()
            reranker._get_client()
            reranker._get_client()
        factory.assert_called_once_with("key", 500)

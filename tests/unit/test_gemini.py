"""Unit tests for Gemini LLM adapter."""

from __future__ import annotations

import json
import os
from unittest.mock import patch

import httpx
import pytest
import respx

from examgen.adapters.llm.gemini import GeminiLLM
from examgen.core.exceptions import LLMConnectionError
from examgen.core.protocols import GenerativeBackendProtocol

BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
FLASH_URL = f"{BASE_URL}/models/gemini-3-flash-preview:generateContent"


def candidate_response(*texts: str) -> httpx.Response:
    """Build a generateContent response with one candidate."""
    parts = [{"text": text} for text in texts]
    return httpx.Response(200, json={"candidates": [{"content": {"role": "model", "parts": parts}}]})


# ============================================================================
# Initialization Tests
# ============================================================================


class TestGeminiLLMInit:
    """Tests for GeminiLLM initialization."""

    def test_init_with_api_key(self) -> None:
        """Test initialization with explicit API key."""
        llm = GeminiLLM(api_key="AIza-test")
        assert llm.api_key == "AIza-test"
        assert llm.base_url == BASE_URL
        assert llm.timeout == 120.0

    def test_init_with_env_var(self) -> None:
        """Test initialization with environment variable."""
        with patch.dict(os.environ, {"GEMINI_API_KEY": "AIza-env"}):
            llm = GeminiLLM()
            assert llm.api_key == "AIza-env"

    def test_init_without_api_key_raises(self) -> None:
        """Test that initialization without API key raises ValueError."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="API key required"):
                GeminiLLM()

    def test_init_strips_trailing_slash(self) -> None:
        """Test that trailing slash is stripped from base_url."""
        llm = GeminiLLM(api_key="k", base_url="https://proxy.example.com/v1beta/", timeout=5.0)
        assert llm.base_url == "https://proxy.example.com/v1beta"
        assert llm.timeout == 5.0


# ============================================================================
# Protocol Compliance Tests
# ============================================================================


class TestGeminiLLMProtocol:
    """Tests for GenerativeBackendProtocol compliance."""

    def test_implements_backend_protocol(self) -> None:
        """Test that GeminiLLM implements GenerativeBackendProtocol."""
        assert isinstance(GeminiLLM(api_key="k"), GenerativeBackendProtocol)


# ============================================================================
# generate_content Tests
# ============================================================================


class TestGeminiLLMGenerateContent:
    """Tests for generate_content."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_returns_candidate_text(self) -> None:
        """The first candidate's text is returned."""
        respx.post(FLASH_URL).mock(return_value=candidate_response('{"ok": true}'))

        llm = GeminiLLM(api_key="AIza-test")
        text = await llm.generate_content("gemini-3-flash-preview", "prompt")

        assert text == '{"ok": true}'

    @pytest.mark.asyncio
    @respx.mock
    async def test_joins_text_parts(self) -> None:
        """Multiple text parts are concatenated."""
        respx.post(FLASH_URL).mock(return_value=candidate_response('{"a": ', "1}"))

        text = await GeminiLLM(api_key="k").generate_content("gemini-3-flash-preview", "prompt")

        assert text == '{"a": 1}'

    @pytest.mark.asyncio
    @respx.mock
    async def test_request_shape(self) -> None:
        """Prompt, system instruction and mime type go in the body; the key in a header."""
        route = respx.post(FLASH_URL).mock(return_value=candidate_response("{}"))

        llm = GeminiLLM(api_key="AIza-test")
        await llm.generate_content(
            "gemini-3-flash-preview",
            "Write an exam",
            system_instruction="You are an exam writer",
        )

        request = route.calls.last.request
        body = json.loads(request.content)
        assert body["contents"] == [{"role": "user", "parts": [{"text": "Write an exam"}]}]
        assert body["systemInstruction"] == {"parts": [{"text": "You are an exam writer"}]}
        assert body["generationConfig"] == {"responseMimeType": "application/json"}
        assert request.headers["x-goog-api-key"] == "AIza-test"
        assert "AIza-test" not in str(request.url)

    @pytest.mark.asyncio
    @respx.mock
    async def test_no_system_instruction(self) -> None:
        """systemInstruction is omitted when not given."""
        route = respx.post(FLASH_URL).mock(return_value=candidate_response("{}"))

        await GeminiLLM(api_key="k").generate_content("gemini-3-flash-preview", "prompt")

        assert "systemInstruction" not in json.loads(route.calls.last.request.content)

    @pytest.mark.asyncio
    @respx.mock
    async def test_no_candidates_returns_none(self) -> None:
        """A response without candidates yields None."""
        respx.post(FLASH_URL).mock(return_value=httpx.Response(200, json={"promptFeedback": {}}))

        assert await GeminiLLM(api_key="k").generate_content("gemini-3-flash-preview", "prompt") is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_candidate_without_text_returns_none(self) -> None:
        """A candidate with no text parts yields None."""
        respx.post(FLASH_URL).mock(
            return_value=httpx.Response(200, json={"candidates": [{"finishReason": "SAFETY"}]})
        )

        assert await GeminiLLM(api_key="k").generate_content("gemini-3-flash-preview", "prompt") is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error(self) -> None:
        """HTTP errors are wrapped with the status code."""
        respx.post(FLASH_URL).mock(return_value=httpx.Response(429, text="Resource has been exhausted"))

        with pytest.raises(LLMConnectionError, match="Gemini API error: 429"):
            await GeminiLLM(api_key="k").generate_content("gemini-3-flash-preview", "prompt")

    @pytest.mark.asyncio
    @respx.mock
    async def test_connect_error(self) -> None:
        """Connection failures are wrapped."""
        respx.post(FLASH_URL).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(LLMConnectionError, match="Failed to connect"):
            await GeminiLLM(api_key="k").generate_content("gemini-3-flash-preview", "prompt")

    @pytest.mark.asyncio
    @respx.mock
    async def test_timeout(self) -> None:
        """Timeouts are wrapped."""
        respx.post(FLASH_URL).mock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(LLMConnectionError, match="timed out"):
            await GeminiLLM(api_key="k", timeout=1.0).generate_content("gemini-3-flash-preview", "prompt")

    @pytest.mark.asyncio
    @respx.mock
    async def test_context_manager_reuses_client(self) -> None:
        """Within a context manager, one client serves every request."""
        route = respx.post(url__regex=r".*:generateContent").mock(return_value=candidate_response("{}"))

        async with GeminiLLM(api_key="k") as llm:
            client = llm._client
            await llm.generate_content("gemini-3-flash-preview", "one")
            await llm.generate_content("gemini-2.5-flash", "two")
            assert llm._client is client

        assert llm._client is None
        assert route.call_count == 2

"""Google Gemini adapter for examgen.

This module provides an async client for the Gemini REST API,
implementing the GenerativeBackendProtocol used by the invocation pipeline.
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import httpx

from examgen.core.exceptions import LLMConnectionError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from types import TracebackType

# Default configuration
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_TIMEOUT = 120.0


class GeminiLLM:
    """Async client for the Gemini generateContent API.

    Uses httpx for async HTTP requests with connection pooling. The API key
    travels in the ``x-goog-api-key`` header so it never appears in URLs or
    error messages.

    Can be used as a context manager for optimal performance (reuses connections),
    or standalone for simpler use cases.

    Attributes:
        base_url: Base URL for the Gemini API.
        timeout: Request timeout in seconds.

    Example:
        Context manager (recommended for multiple calls):
            >>> async with GeminiLLM(api_key="AIza...") as llm:
            ...     text = await llm.generate_content("gemini-2.5-flash", "Return {} as JSON.")

        Using environment variable:
            >>> # Set GEMINI_API_KEY in environment
            >>> llm = GeminiLLM()
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize GeminiLLM client.

        Args:
            api_key: Gemini API key. If not provided, reads from GEMINI_API_KEY env var.
            base_url: Base URL for the Gemini API.
            timeout: Request timeout in seconds. Defaults to 120.0.

        Raises:
            ValueError: If no API key is provided and GEMINI_API_KEY is not set.
        """
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        if not self.api_key:
            msg = "Gemini API key required. Pass api_key or set GEMINI_API_KEY environment variable."
            raise ValueError(msg)

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> GeminiLLM:
        """Enter async context manager, creating a reusable HTTP client."""
        self._client = httpx.AsyncClient(timeout=self.timeout)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context manager, closing the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_headers(self) -> dict[str, str]:
        """Get headers for API requests."""
        return {
            "x-goog-api-key": self.api_key or "",
            "Content-Type": "application/json",
        }

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get an HTTP client for making requests.

        If used as a context manager, returns the managed client.
        Otherwise, creates a temporary client for this request.

        Yields:
            An httpx.AsyncClient instance.
        """
        if self._client is not None:
            yield self._client
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                yield client

    @staticmethod
    def _build_payload(
        prompt: str,
        system_instruction: str | None,
        response_mime_type: str,
    ) -> dict[str, Any]:
        """Build the generateContent request body."""
        payload: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"responseMimeType": response_mime_type},
        }
        if system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}
        return payload

    @staticmethod
    def _extract_text(data: dict[str, Any]) -> str | None:
        """Concatenate the text parts of the first candidate."""
        candidates = data.get("candidates") or []
        if not candidates:
            return None
        parts = (candidates[0].get("content") or {}).get("parts") or []
        texts = [part["text"] for part in parts if isinstance(part.get("text"), str)]
        return "".join(texts) if texts else None

    async def generate_content(
        self,
        model: str,
        prompt: str,
        *,
        system_instruction: str | None = None,
        response_mime_type: str = "application/json",
    ) -> str | None:
        """Generate content with a specific Gemini model.

        Args:
            model: Gemini model identifier, e.g. "gemini-2.5-flash".
            prompt: The user prompt.
            system_instruction: Optional system instruction.
            response_mime_type: Requested response format. Defaults to JSON.

        Returns:
            The text of the first candidate, or None if there is none.

        Raises:
            LLMConnectionError: If connection to Gemini fails or the request errors.
        """
        url = f"{self.base_url}/models/{model}:generateContent"
        payload = self._build_payload(prompt, system_instruction, response_mime_type)

        try:
            async with self._get_client() as client:
                response = await client.post(url, json=payload, headers=self._get_headers())
                response.raise_for_status()
                return self._extract_text(response.json())
        except httpx.ConnectError as e:
            msg = f"Failed to connect to Gemini at {self.base_url}: {e}"
            raise LLMConnectionError(msg) from e
        except httpx.TimeoutException as e:
            msg = f"Request to Gemini timed out after {self.timeout}s: {e}"
            raise LLMConnectionError(msg) from e
        except httpx.HTTPStatusError as e:
            msg = f"Gemini API error: {e.response.status_code} - {e.response.text}"
            raise LLMConnectionError(msg) from e
        except Exception as e:
            msg = f"Unexpected error calling Gemini: {e}"
            raise LLMConnectionError(msg) from e

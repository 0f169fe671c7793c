"""LLM adapters for examgen.

This module provides adapters for generative-content backends.
"""

from __future__ import annotations

from examgen.adapters.llm.gemini import GeminiLLM

__all__ = [
    "GeminiLLM",
]

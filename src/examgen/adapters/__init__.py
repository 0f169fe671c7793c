"""Adapters module for examgen.

This module provides adapters for external services. All generation
backends are cloud services: prompts and documents leave the machine.
"""

from __future__ import annotations

from examgen.adapters.llm import GeminiLLM

__all__ = [
    "GeminiLLM",
]

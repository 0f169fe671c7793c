"""JSON parsing utilities for backend responses.

Models asked for raw JSON still sometimes wrap it in a Markdown code
fence. These helpers strip the fence and parse the remainder.
"""

from __future__ import annotations

import json
import re
from typing import Any

_OPENING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_CLOSING_FENCE = re.compile(r"\s*```$")


def clean_json_text(text: str | None) -> str:
    """Strip a Markdown code fence and surrounding whitespace.

    Args:
        text: The raw backend payload.

    Returns:
        The text between the fences, or the trimmed text if unfenced.

    Example:
        >>> clean_json_text('```json\\n{"a": 1}\\n```')
        '{"a": 1}'
        >>> clean_json_text('  {"a": 1}  ')
        '{"a": 1}'
    """
    if not text:
        return ""
    cleaned = _OPENING_FENCE.sub("", text.strip())
    cleaned = _CLOSING_FENCE.sub("", cleaned)
    return cleaned.strip()


def parse_json_payload(text: str | None) -> Any:
    """Clean a backend payload and parse it as JSON.

    Args:
        text: The raw backend payload.

    Returns:
        The parsed JSON value.

    Raises:
        ValueError: If the cleaned text is not valid JSON (json.JSONDecodeError)
            or holds an integer beyond the interpreter's digit limit.
        RecursionError: If arrays or objects are nested too deeply to decode.

    Example:
        >>> parse_json_payload('```json\\n{"a": 1}\\n```')
        {'a': 1}
    """
    return json.loads(clean_json_text(text))

"""Protocol definitions for examgen.

This module defines the abstract interfaces (protocols) that adapters
must implement. Using protocols enables duck typing and loose coupling.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class GenerativeBackendProtocol(Protocol):
    """Protocol for generative-content backends.

    Any class implementing this method can serve the invocation pipeline,
    without needing to inherit from a base class.

    Example:
        >>> class EchoBackend:
        ...     async def generate_content(
        ...         self,
        ...         model: str,
        ...         prompt: str,
        ...         *,
        ...         system_instruction: str | None = None,
        ...         response_mime_type: str = "application/json",
        ...     ) -> str | None:
        ...         return '{"echo": true}'
        ...
        >>> assert isinstance(EchoBackend(), GenerativeBackendProtocol)
    """

    async def generate_content(
        self,
        model: str,
        prompt: str,
        *,
        system_instruction: str | None = None,
        response_mime_type: str = "application/json",
    ) -> str | None:
        """Issue one generation request against a specific model.

        Args:
            model: Identifier of the model to use.
            prompt: The user prompt.
            system_instruction: Optional system instruction.
            response_mime_type: Requested response format.

        Returns:
            The text payload, or None if the backend returned no text.

        Raises:
            LLMConnectionError: If the request fails.
        """
        ...


@runtime_checkable
class SettingsProvider(Protocol):
    """Protocol for local key/value settings stores.

    Example:
        >>> class DictSettings:
        ...     def __init__(self) -> None:
        ...         self.values: dict[str, str] = {}
        ...
        ...     def get(self, key: str) -> str | None:
        ...         return self.values.get(key)
        ...
        ...     def set(self, key: str, value: str) -> None:
        ...         self.values[key] = value
        ...
        >>> assert isinstance(DictSettings(), SettingsProvider)
    """

    def get(self, key: str) -> str | None:
        """Return the stored value for key, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key."""
        ...

"""Custom exceptions for examgen.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from ExamGenError for easy catching.

Errors raised by the invocation pipeline derive from PipelineError and carry
an ErrorKind, so callers can branch on the category while still showing the
human-readable message to the end user.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from examgen.core.pipeline import AttemptFailure


class ErrorKind(str, Enum):
    """Classified categories of pipeline failures."""

    MISSING_CREDENTIAL = "missing_credential"
    EMPTY_RESPONSE = "empty_response"
    MALFORMED_JSON = "malformed_json"
    NETWORK_FAILURE = "network_failure"
    INVALID_CREDENTIAL = "invalid_credential"
    QUOTA_EXCEEDED = "quota_exceeded"
    ALL_MODELS_FAILED = "all_models_failed"


class ExamGenError(Exception):
    """Base exception for all examgen errors.

    Example:
        >>> try:
        ...     exam = await generate(matrix, analysis, config)
        ... except ExamGenError as e:
        ...     print(f"examgen error: {e}")
    """


class LLMConnectionError(ExamGenError):
    """Raised when a request to the generative backend fails.

    Adapters wrap transport and HTTP status errors into this exception.
    The message keeps the underlying detail so the pipeline can classify it.

    Example:
        >>> raise LLMConnectionError("Failed to connect to Gemini at generativelanguage.googleapis.com")
    """


class EmptyInputError(ExamGenError):
    """Raised when a request builder receives blank input text.

    Raised before any backend call is made.
    """


class DocumentError(ExamGenError):
    """Raised when a document cannot be read, parsed, or written."""


class PipelineError(ExamGenError):
    """Base class for classified invocation pipeline failures.

    Attributes:
        kind: The classified category of the failure.
        model: Identifier of the model the failure was observed on, if any.
        attempts: Per-model failures recorded before this error was raised.
            Only populated on the error that escapes the pipeline.
    """

    kind: ErrorKind = ErrorKind.ALL_MODELS_FAILED
    default_message = "The request to the generation backend failed."

    def __init__(self, message: str | None = None, *, model: str | None = None) -> None:
        self.model = model
        self.attempts: list[AttemptFailure] = []
        super().__init__(message or self.default_message)


class MissingCredentialError(PipelineError):
    """Raised when no API key is configured. No backend call is made."""

    kind = ErrorKind.MISSING_CREDENTIAL
    default_message = "Please enter an API key in the settings."


class EmptyResponseError(PipelineError):
    """Raised when a model returns no text payload."""

    kind = ErrorKind.EMPTY_RESPONSE

    def __init__(self, message: str | None = None, *, model: str | None = None) -> None:
        super().__init__(message or f"No text returned from {model}.", model=model)


class MalformedJsonError(PipelineError):
    """Raised when a model returns text that is not the expected JSON document."""

    kind = ErrorKind.MALFORMED_JSON

    def __init__(self, message: str | None = None, *, model: str | None = None) -> None:
        super().__init__(message or f"Model {model} returned data that is not valid JSON.", model=model)


class NetworkFailureError(PipelineError):
    """Raised when the backend cannot be reached."""

    kind = ErrorKind.NETWORK_FAILURE
    default_message = "Network connection error. Please check your internet connection and try again."


class InvalidCredentialError(PipelineError):
    """Raised when the backend rejects the API key."""

    kind = ErrorKind.INVALID_CREDENTIAL
    default_message = "The API key is not valid. Please check it in the settings."


class QuotaExceededError(PipelineError):
    """Raised when the backend reports rate or quota limiting."""

    kind = ErrorKind.QUOTA_EXCEEDED
    default_message = "API usage limit exceeded. Please try again in a few seconds."


class AllModelsFailedError(PipelineError):
    """Raised when every model in the attempt sequence failed without a more specific cause."""

    kind = ErrorKind.ALL_MODELS_FAILED
    default_message = "All models failed. Please check your API key or try again later."

"""Core module for examgen.

This module contains the fundamental types, protocols, exceptions,
configuration and the invocation pipeline used throughout the library.
"""

from __future__ import annotations

from examgen.core.config import Settings
from examgen.core.exceptions import (
    AllModelsFailedError,
    DocumentError,
    EmptyInputError,
    EmptyResponseError,
    ErrorKind,
    ExamGenError,
    InvalidCredentialError,
    LLMConnectionError,
    MalformedJsonError,
    MissingCredentialError,
    NetworkFailureError,
    PipelineError,
    QuotaExceededError,
)
from examgen.core.pipeline import AttemptFailure, build_attempt_sequence, invoke
from examgen.core.protocols import GenerativeBackendProtocol, SettingsProvider
from examgen.core.types import (
    DEFAULT_FALLBACK_CHAIN,
    DEFAULT_MODEL,
    AnalysisResult,
    ExamData,
    GenerationConfig,
    ModelIdentifier,
    PassageStats,
    Question,
    QuestionType,
    Section,
)

__all__ = [
    "DEFAULT_FALLBACK_CHAIN",
    "DEFAULT_MODEL",
    "AllModelsFailedError",
    "AnalysisResult",
    "AttemptFailure",
    "DocumentError",
    "EmptyInputError",
    "EmptyResponseError",
    "ErrorKind",
    "ExamData",
    "ExamGenError",
    "GenerationConfig",
    "GenerativeBackendProtocol",
    "InvalidCredentialError",
    "LLMConnectionError",
    "MalformedJsonError",
    "MissingCredentialError",
    "ModelIdentifier",
    "NetworkFailureError",
    "PassageStats",
    "PipelineError",
    "QuestionType",
    "Question",
    "QuotaExceededError",
    "Section",
    "Settings",
    "SettingsProvider",
    "build_attempt_sequence",
    "invoke",
]

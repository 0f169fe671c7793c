"""Invocation pipeline for examgen.

Both request builders go through :func:`invoke`. It tries the caller's
preferred model, then the remaining models of the default fallback
chain, one request each, and returns the first response that parses
as JSON (and validates against ``response_model`` when given).

When every model fails, the single most informative classified error
is raised; earlier failures are attached to it as ``attempts``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ValidationError

from examgen.core.exceptions import (
    AllModelsFailedError,
    EmptyResponseError,
    ErrorKind,
    InvalidCredentialError,
    MalformedJsonError,
    MissingCredentialError,
    NetworkFailureError,
    PipelineError,
    QuotaExceededError,
)
from examgen.core.parsing import parse_json_payload
from examgen.core.types import DEFAULT_FALLBACK_CHAIN, ModelIdentifier

if TYPE_CHECKING:
    from examgen.core.protocols import GenerativeBackendProtocol
    from examgen.core.types import GenerationConfig

logger = logging.getLogger(__name__)

JSON_MIME_TYPE = "application/json"

# Message fragments (lowercase) used to recognize backend failures, checked in this order.
NETWORK_PATTERNS: tuple[str, ...] = (
    "failed to fetch",
    "networkerror",
    "failed to connect",
    "connection",
    "timed out",
)
CREDENTIAL_PATTERNS: tuple[str, ...] = (
    "api key",
    "api_key",
    "unauthenticated",
    "permission_denied",
    "api error: 401",
    "api error: 403",
)
QUOTA_PATTERNS: tuple[str, ...] = (
    "quota",
    "rate limit",
    "rate_limit",
    "resource_exhausted",
    "resource has been exhausted",
    "too many requests",
    "api error: 429",
)

RECOGNIZED_KINDS = frozenset(
    {
        ErrorKind.NETWORK_FAILURE,
        ErrorKind.INVALID_CREDENTIAL,
        ErrorKind.QUOTA_EXCEEDED,
    }
)


@dataclass
class AttemptFailure:
    """A failed attempt against one model.

    Attributes:
        model: The model identifier that was tried.
        error: The classified error for this attempt.
        cause: The underlying exception, if the backend raised one.
    """

    model: str
    error: PipelineError
    cause: BaseException | None = None


def build_attempt_sequence(primary: ModelIdentifier | str) -> list[ModelIdentifier]:
    """Build the ordered list of models to try.

    The primary model comes first, followed by every model of the default
    fallback chain that is not the primary, in the chain's order.

    Args:
        primary: The caller's preferred model.

    Returns:
        Model identifiers, each appearing at most once.

    Example:
        >>> [m.value for m in build_attempt_sequence(ModelIdentifier.GEMINI_3_PRO)]
        ['gemini-3-pro-preview', 'gemini-3-flash-preview', 'gemini-2.5-flash']
    """
    primary = ModelIdentifier(primary)
    return [primary, *(model for model in DEFAULT_FALLBACK_CHAIN if model is not primary)]


def classify_backend_error(error: BaseException, model: str | None = None) -> PipelineError:
    """Translate a backend exception into a classified pipeline error.

    Classification matches fragments of the exception message; network
    failures are checked first, then credential problems, then quota.

    Args:
        error: The exception raised by the backend.
        model: The model the request targeted.

    Returns:
        A NetworkFailureError, InvalidCredentialError or QuotaExceededError
        when the message is recognized, otherwise an AllModelsFailedError
        carrying the original message.
    """
    message = str(error).lower()
    if any(pattern in message for pattern in NETWORK_PATTERNS):
        return NetworkFailureError(model=model)
    if any(pattern in message for pattern in CREDENTIAL_PATTERNS):
        return InvalidCredentialError(model=model)
    if any(pattern in message for pattern in QUOTA_PATTERNS):
        return QuotaExceededError(model=model)
    return AllModelsFailedError(str(error) or type(error).__name__, model=model)


def select_final_error(failures: list[AttemptFailure]) -> PipelineError:
    """Pick the error to raise once every attempt has failed.

    The last recognized category (network, credential, quota) wins, then
    the last malformed-JSON error, then a generic all-models-failed error.

    Args:
        failures: Failures in attempt order.

    Returns:
        The error to raise, with ``attempts`` populated.
    """
    recognized = [f for f in failures if f.error.kind in RECOGNIZED_KINDS]
    malformed = [f for f in failures if f.error.kind is ErrorKind.MALFORMED_JSON]

    final: PipelineError
    if recognized:
        final = recognized[-1].error
    elif malformed:
        final = malformed[-1].error
    else:
        final = AllModelsFailedError()
        causes = [f.cause for f in failures if f.cause is not None]
        if causes:
            final.__cause__ = causes[-1]

    final.attempts = list(failures)
    return final


async def _attempt(
    backend: GenerativeBackendProtocol,
    model: ModelIdentifier,
    prompt: str,
    system_instruction: str | None,
    response_model: type[BaseModel] | None,
) -> Any:
    """Run a single attempt; raise a PipelineError on any failure."""
    try:
        text = await backend.generate_content(
            model.value,
            prompt,
            system_instruction=system_instruction,
            response_mime_type=JSON_MIME_TYPE,
        )
    except Exception as e:
        raise classify_backend_error(e, model.value) from e

    if not text or not text.strip():
        raise EmptyResponseError(model=model.value)

    # Digit-limit and decode errors are ValueErrors; deep nesting raises RecursionError
    try:
        data = parse_json_payload(text)
    except (ValueError, RecursionError) as e:
        raise MalformedJsonError(model=model.value) from e

    if response_model is None:
        return data

    try:
        return response_model.model_validate(data)
    except ValidationError as e:
        msg = f"Model {model.value} returned JSON that does not match the expected structure: {e.error_count()} error(s)."
        raise MalformedJsonError(msg, model=model.value) from e


async def _run_attempts(
    backend: GenerativeBackendProtocol,
    config: GenerationConfig,
    prompt: str,
    system_instruction: str | None,
    response_model: type[BaseModel] | None,
) -> Any:
    failures: list[AttemptFailure] = []

    for model in build_attempt_sequence(config.primary_model):
        logger.info(f"Attempting with model: {model.value}")
        try:
            return await _attempt(backend, model, prompt, system_instruction, response_model)
        except PipelineError as e:
            logger.warning(f"Model {model.value} failed ({e.kind.value}): {e.__cause__ or e}")
            failures.append(AttemptFailure(model=model.value, error=e, cause=e.__cause__))

    raise select_final_error(failures)


async def invoke(
    config: GenerationConfig,
    prompt: str,
    system_instruction: str | None = None,
    *,
    response_model: type[BaseModel] | None = None,
    backend: GenerativeBackendProtocol | None = None,
) -> Any:
    """Execute a JSON request against the backend with ordered model fallback.

    Args:
        config: Credential and preferred model for this call.
        prompt: The user prompt.
        system_instruction: Optional system instruction.
        response_model: Optional pydantic model the JSON must validate against.
            A payload that fails validation counts as malformed JSON for
            that attempt.
        backend: Backend to use. Defaults to a GeminiLLM built from the
            config's credential, opened for the duration of the call.

    Returns:
        The parsed JSON value, or an instance of ``response_model``.

    Raises:
        MissingCredentialError: If the credential is blank. No request is made.
        PipelineError: The most informative classified error once every
            model has failed.

    Example:
        >>> config = GenerationConfig(credential="AIza...")
        >>> data = await invoke(config, "Return {\\"ok\\": true} as JSON.")
        >>> data
        {'ok': True}
    """
    if not config.credential or not config.credential.strip():
        raise MissingCredentialError()

    if backend is not None:
        return await _run_attempts(backend, config, prompt, system_instruction, response_model)

    from examgen.adapters.llm.gemini import GeminiLLM

    async with GeminiLLM(api_key=config.credential) as gemini:
        return await _run_attempts(gemini, config, prompt, system_instruction, response_model)

"""Sample exam analysis for examgen.

This module asks the backend for a structured assessment of an existing
exam: its difficulty, structure, CEFR level and passage lengths.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from examgen.core.exceptions import EmptyInputError
from examgen.core.pipeline import invoke
from examgen.core.types import AnalysisResult
from examgen.generators.prompts import ANALYSIS_PROMPT

if TYPE_CHECKING:
    from examgen.core.protocols import GenerativeBackendProtocol
    from examgen.core.types import GenerationConfig

logger = logging.getLogger(__name__)

# Only the beginning of very long documents is sent to the backend
MAX_ANALYSIS_CHARS = 15_000


def build_analysis_prompt(text: str) -> str:
    """Build the analysis prompt for an exam text.

    Args:
        text: Text extracted from the sample exam.

    Returns:
        The prompt, embedding at most MAX_ANALYSIS_CHARS characters of text.
    """
    return ANALYSIS_PROMPT.format(exam_text=text[:MAX_ANALYSIS_CHARS])


async def analyze_exam(
    text: str,
    config: GenerationConfig,
    *,
    backend: GenerativeBackendProtocol | None = None,
) -> AnalysisResult:
    """Analyze a sample exam.

    Args:
        text: Text extracted from the sample exam document.
        config: Credential and preferred model.
        backend: Optional backend override, mainly for tests.

    Returns:
        The validated analysis result.

    Raises:
        EmptyInputError: If the text is blank. No request is made.
        PipelineError: If every model failed; propagated unchanged.

    Example:
        >>> analysis = await analyze_exam(extract_text("sample.docx"), config)
        >>> analysis.cefr_level
        'B1'
    """
    if not text or not text.strip():
        msg = "No text content found in the document."
        raise EmptyInputError(msg)

    if len(text) > MAX_ANALYSIS_CHARS:
        logger.info(f"Exam text truncated from {len(text)} to {MAX_ANALYSIS_CHARS} characters")

    result: AnalysisResult = await invoke(
        config,
        build_analysis_prompt(text),
        response_model=AnalysisResult,
        backend=backend,
    )
    return result

"""Exam generation for examgen.

This module turns an exam matrix and the analysis of a sample exam
into a complete, structurally equivalent exam.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from examgen.core.exceptions import EmptyInputError
from examgen.core.pipeline import invoke
from examgen.core.types import ExamData, QuestionType
from examgen.generators.prompts import (
    EXAM_GENERATION_PROMPT,
    EXAM_SYSTEM_INSTRUCTION,
    word_count_bounds,
)

if TYPE_CHECKING:
    from examgen.core.protocols import GenerativeBackendProtocol
    from examgen.core.types import AnalysisResult, GenerationConfig


def build_exam_prompt(matrix_text: str, analysis: AnalysisResult) -> str:
    """Build the generation prompt from a matrix and an analysis.

    When the sample exam had no cloze passage, the reading statistics
    are used as the cloze target too.

    Args:
        matrix_text: The user-edited exam matrix.
        analysis: Analysis of the sample exam.

    Returns:
        The formatted prompt.
    """
    reading = analysis.reading_stats
    cloze = analysis.cloze_stats or reading
    reading_min, reading_max = word_count_bounds(reading.avg_word_count)
    cloze_min, cloze_max = word_count_bounds(cloze.avg_word_count)

    return EXAM_GENERATION_PROMPT.format(
        difficulty=analysis.difficulty,
        cefr_level=analysis.cefr_level,
        reading_words=reading.avg_word_count,
        reading_min=reading_min,
        reading_max=reading_max,
        cloze_words=cloze.avg_word_count,
        cloze_min=cloze_min,
        cloze_max=cloze_max,
        reading_desc=reading.difficulty_desc,
        matrix=matrix_text.strip(),
        question_types=", ".join(f'"{t.value}"' for t in QuestionType),
    )


async def generate_exam(
    matrix_text: str,
    analysis: AnalysisResult,
    config: GenerationConfig,
    *,
    backend: GenerativeBackendProtocol | None = None,
) -> ExamData:
    """Generate a complete exam.

    Args:
        matrix_text: The user-edited exam matrix.
        analysis: Analysis of the sample exam.
        config: Credential and preferred model.
        backend: Optional backend override, mainly for tests.

    Returns:
        The validated exam.

    Raises:
        EmptyInputError: If the matrix is blank. No request is made.
        PipelineError: If every model failed; propagated unchanged.
    """
    if not matrix_text or not matrix_text.strip():
        msg = "The exam matrix is empty."
        raise EmptyInputError(msg)

    exam: ExamData = await invoke(
        config,
        build_exam_prompt(matrix_text, analysis),
        EXAM_SYSTEM_INSTRUCTION,
        response_model=ExamData,
        backend=backend,
    )
    return exam

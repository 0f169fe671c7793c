"""Core type definitions for examgen.

This module defines the data structures exchanged with the generation
backend: the generation configuration, the analysis of a sample exam,
and the generated exam itself.

Python attributes are snake_case. The JSON shape (backend payloads and
files on disk) is camelCase, handled by a pydantic alias generator:

    >>> AnalysisResult.model_validate({"structureSummary": ...})
    >>> result.model_dump(by_alias=True)
"""

from __future__ import annotations

import re
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from collections.abc import Iterator

# Gap markers are small numbers; "(2018)" in the dialogue is not a gap
GAP_MARKER_PATTERN = re.compile(r"\((\d{1,2})\)")


class ModelIdentifier(str, Enum):
    """Backend models that can serve a request.

    Each member is a different cost/capability/latency tradeoff.
    """

    GEMINI_3_FLASH = "gemini-3-flash-preview"
    GEMINI_3_PRO = "gemini-3-pro-preview"
    GEMINI_25_FLASH = "gemini-2.5-flash"


DEFAULT_MODEL = ModelIdentifier.GEMINI_3_FLASH

# Order in which models are tried after the caller's preferred model.
DEFAULT_FALLBACK_CHAIN: tuple[ModelIdentifier, ...] = (
    ModelIdentifier.GEMINI_3_FLASH,
    ModelIdentifier.GEMINI_3_PRO,
    ModelIdentifier.GEMINI_25_FLASH,
)

MODEL_DESCRIPTIONS: dict[ModelIdentifier, str] = {
    ModelIdentifier.GEMINI_3_FLASH: "Fast, near-instant responses. Recommended for most tasks.",
    ModelIdentifier.GEMINI_3_PRO: "Strongest reasoning. Use for hard or complex exams.",
    ModelIdentifier.GEMINI_25_FLASH: "Older stable release, lowest cost. Backup.",
}


class GenerationConfig(BaseModel):
    """Per-call configuration for the invocation pipeline.

    Attributes:
        credential: Backend API key. Hidden from repr.
        primary_model: The model tried first.

    Example:
        >>> config = GenerationConfig(credential="AIza...", primary_model=ModelIdentifier.GEMINI_3_PRO)
    """

    model_config = {"frozen": True}

    credential: str = Field(default="", repr=False, description="Backend API key")
    primary_model: ModelIdentifier = Field(default=DEFAULT_MODEL, description="Model tried first")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PassageStats(_CamelModel):
    """Length and complexity of the passages of one exercise kind.

    Attributes:
        avg_word_count: Average number of words per passage.
        difficulty_desc: Short description of the language complexity.
    """

    avg_word_count: int = Field(..., ge=0, description="Average words per passage")
    difficulty_desc: str = Field(..., description="Description of passage complexity")

    @field_validator("avg_word_count", mode="before")
    @classmethod
    def _round_word_count(cls, value: Any) -> Any:
        if isinstance(value, float):
            return round(value)
        return value


class AnalysisResult(_CamelModel):
    """Structured assessment of a sample exam.

    Attributes:
        difficulty: Overall difficulty (easy, medium, fairly hard, hard).
        structure_summary: Main parts and question counts.
        cefr_level: Estimated CEFR level, e.g. "B1".
        reading_stats: Statistics for reading comprehension passages.
        cloze_stats: Statistics for cloze test passages, if the sample has any.

    Example:
        >>> analysis = AnalysisResult(
        ...     difficulty="Medium",
        ...     structure_summary="5 parts, 40 questions",
        ...     cefr_level="B1",
        ...     reading_stats=PassageStats(avg_word_count=250, difficulty_desc="Everyday topics"),
        ... )
    """

    difficulty: str = Field(..., description="Overall difficulty")
    structure_summary: str = Field(..., description="Summary of the exam structure")
    cefr_level: str = Field(..., description="Estimated CEFR level")
    reading_stats: PassageStats = Field(..., description="Reading comprehension statistics")
    cloze_stats: PassageStats | None = Field(default=None, description="Cloze test statistics")


class QuestionType(str, Enum):
    """Kinds of questions an exam may contain."""

    MULTIPLE_CHOICE = "multiple-choice"
    CONVERSATION_MATCHING = "conversation-matching"
    GAP_FILL = "gap-fill"
    SENTENCE_TRANSFORMATION = "sentence-transformation"
    WRITING = "writing"


class Question(_CamelModel):
    """A single question of a generated exam.

    A conversation-matching question stands for a whole multi-blank
    dialogue: ``content`` holds the dialogue with numbered gap markers
    ``(1)``, ``(2)`` ... and ``question_count`` the number of blanks.

    Attributes:
        id: Identifier of the question.
        part_name: Name of the exam part the question belongs to.
        type: Kind of question.
        content: Full question text. Never empty.
        options: Answer options, e.g. ["A. go", "B. goes"].
        correct_answer: Correct option, or "1-A, 2-C, ..." for matching questions.
        question_count: Number of blanks in a conversation-matching question.
        level: Cognitive level (recognition, comprehension, application...).
    """

    id: str = Field(..., description="Question identifier")
    part_name: str = Field(..., description="Exam part name")
    type: QuestionType = Field(..., description="Question kind")
    content: str = Field(..., description="Full question text")
    options: list[str] | None = Field(default=None, description="Answer options")
    correct_answer: str | None = Field(default=None, description="Correct answer")
    question_count: int | None = Field(default=None, ge=1, description="Number of blanks")
    level: str | None = Field(default=None, description="Cognitive level")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("content")
    @classmethod
    def _require_content(cls, value: str) -> str:
        if not value.strip():
            msg = "question content must not be empty"
            raise ValueError(msg)
        return value

    def gap_markers(self) -> list[int]:
        """Return the distinct gap marker numbers found in the content, sorted."""
        return sorted({int(n) for n in GAP_MARKER_PATTERN.findall(self.content)})

    def has_consistent_gaps(self) -> bool:
        """Check the gap markers of a conversation-matching question.

        Other question types are always consistent.

        Returns:
            True if the content embeds gap markers and, when question_count
            is set, their distinct count equals it.
        """
        if self.type is not QuestionType.CONVERSATION_MATCHING:
            return True
        markers = self.gap_markers()
        if not markers:
            return False
        return self.question_count is None or len(markers) == self.question_count


class Section(_CamelModel):
    """A part of the exam.

    Attributes:
        title: "Part N. <instructions>".
        passage_content: Reading or cloze passage shared by the questions.
        total_points: Points awarded for the section.
        questions: Questions in order.
    """

    title: str = Field(..., description="Part number and instructions")
    passage_content: str | None = Field(default=None, description="Shared passage")
    total_points: float = Field(..., description="Points for the section")
    questions: list[Question] = Field(default_factory=list, description="Questions in order")


class ExamData(_CamelModel):
    """A complete generated exam.

    Attributes:
        title: Exam title.
        subtitle: Subject and school year line.
        duration: Time allowed in minutes.
        sections: Sections in order.
    """

    title: str = Field(..., description="Exam title")
    subtitle: str = Field(..., description="Exam subtitle")
    duration: int = Field(..., ge=0, description="Time allowed in minutes")
    sections: list[Section] = Field(..., description="Sections in order")

    @field_validator("duration", mode="before")
    @classmethod
    def _round_duration(cls, value: Any) -> Any:
        if isinstance(value, float):
            return round(value)
        return value

    def iter_questions(self) -> Iterator[tuple[Section, Question]]:
        """Iterate over (section, question) pairs in exam order."""
        for section in self.sections:
            for question in section.questions:
                yield section, question

    @property
    def item_count(self) -> int:
        """Number of scored items; a matching question counts its blanks."""
        return sum(q.question_count or 1 for _, q in self.iter_questions())

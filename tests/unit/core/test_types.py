"""Unit tests for core types module (GenerationConfig, AnalysisResult, ExamData, etc.)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from examgen.core.types import (
    DEFAULT_FALLBACK_CHAIN,
    DEFAULT_MODEL,
    MODEL_DESCRIPTIONS,
    AnalysisResult,
    ExamData,
    GenerationConfig,
    ModelIdentifier,
    PassageStats,
    Question,
    QuestionType,
    Section,
)

# =============================================================================
# Models
# =============================================================================


class TestModelIdentifier:
    """Tests for ModelIdentifier and the fallback chain."""

    def test_values(self) -> None:
        """Enum values are the backend model ids."""
        assert ModelIdentifier("gemini-3-flash-preview") is ModelIdentifier.GEMINI_3_FLASH
        assert ModelIdentifier.GEMINI_25_FLASH.value == "gemini-2.5-flash"

    def test_unknown_id_rejected(self) -> None:
        """Unknown ids are not valid identifiers."""
        with pytest.raises(ValueError):
            ModelIdentifier("gemini-0.1")

    def test_default_chain(self) -> None:
        """The chain starts with the default model and covers every model once."""
        assert DEFAULT_FALLBACK_CHAIN[0] is DEFAULT_MODEL
        assert set(DEFAULT_FALLBACK_CHAIN) == set(ModelIdentifier)
        assert len(DEFAULT_FALLBACK_CHAIN) == len(ModelIdentifier)

    def test_every_model_described(self) -> None:
        """Every model has a description."""
        assert set(MODEL_DESCRIPTIONS) == set(ModelIdentifier)


# =============================================================================
# GenerationConfig
# =============================================================================


class TestGenerationConfig:
    """Tests for GenerationConfig model."""

    def test_defaults(self) -> None:
        """Config defaults to no credential and the default model."""
        config = GenerationConfig()
        assert config.credential == ""
        assert config.primary_model is DEFAULT_MODEL

    def test_model_from_string(self) -> None:
        """A model id string is coerced to ModelIdentifier."""
        config = GenerationConfig(credential="k", primary_model="gemini-3-pro-preview")
        assert config.primary_model is ModelIdentifier.GEMINI_3_PRO

    def test_invalid_model_rejected(self) -> None:
        """An unknown model id fails validation."""
        with pytest.raises(ValidationError):
            GenerationConfig(primary_model="gpt-4o")

    def test_is_frozen(self) -> None:
        """Config should be immutable."""
        config = GenerationConfig(credential="k")
        with pytest.raises(ValidationError):
            config.credential = "other"  # type: ignore[misc]

    def test_credential_hidden_from_repr(self) -> None:
        """The API key never appears in repr."""
        config = GenerationConfig(credential="AIza-secret")
        assert "AIza-secret" not in repr(config)


# =============================================================================
# AnalysisResult
# =============================================================================


class TestAnalysisResult:
    """Tests for AnalysisResult model."""

    def test_from_backend_json(self) -> None:
        """camelCase backend payloads validate."""
        result = AnalysisResult.model_validate(
            {
                "difficulty": "Fairly hard",
                "structureSummary": "6 parts, 40 questions",
                "cefrLevel": "B1",
                "clozeStats": {"avgWordCount": 150, "difficultyDesc": "Simple"},
                "readingStats": {"avgWordCount": 250.6, "difficultyDesc": "Everyday topics"},
            }
        )
        assert result.structure_summary == "6 parts, 40 questions"
        assert result.cloze_stats is not None
        assert result.cloze_stats.avg_word_count == 150
        assert result.reading_stats.avg_word_count == 251

    def test_cloze_stats_optional(self) -> None:
        """A sample without cloze passages has no cloze stats."""
        result = AnalysisResult(
            difficulty="Easy",
            structure_summary="3 parts",
            cefr_level="A2",
            reading_stats=PassageStats(avg_word_count=180, difficulty_desc="Short texts"),
        )
        assert result.cloze_stats is None

    def test_missing_reading_stats_rejected(self) -> None:
        """Reading stats are required."""
        with pytest.raises(ValidationError):
            AnalysisResult.model_validate({"difficulty": "Easy", "structureSummary": "x", "cefrLevel": "A2"})

    def test_dump_by_alias(self) -> None:
        """Dumping by alias gives back camelCase keys."""
        stats = PassageStats(avg_word_count=200, difficulty_desc="Plain")
        assert stats.model_dump(by_alias=True) == {"avgWordCount": 200, "difficultyDesc": "Plain"}

    def test_negative_word_count_rejected(self) -> None:
        """Word counts cannot be negative."""
        with pytest.raises(ValidationError):
            PassageStats(avg_word_count=-1, difficulty_desc="x")


# =============================================================================
# Question
# =============================================================================


class TestQuestion:
    """Tests for Question model."""

    def test_from_backend_json(self) -> None:
        """A multiple-choice question validates from camelCase."""
        question = Question.model_validate(
            {
                "id": 7,
                "partName": "Lexico-Grammar",
                "type": "multiple-choice",
                "content": "My sister _____ to school every day.",
                "options": ["A. go", "B. goes", "C. going", "D. went"],
                "correctAnswer": "B",
                "level": "Recognition",
            }
        )
        assert question.id == "7"
        assert question.type is QuestionType.MULTIPLE_CHOICE
        assert question.correct_answer == "B"

    def test_blank_content_rejected(self) -> None:
        """Every question needs content."""
        with pytest.raises(ValidationError):
            Question(id="q1", part_name="Part", type=QuestionType.WRITING, content="   ")

    def test_unknown_type_rejected(self) -> None:
        """Question types are a closed set."""
        with pytest.raises(ValidationError):
            Question.model_validate({"id": "q1", "partName": "Part", "type": "essay", "content": "Write."})

    def test_gap_markers_distinct_and_sorted(self) -> None:
        """Gap markers are returned once each, in numeric order."""
        question = Question(
            id="conv",
            part_name="Conversation",
            type=QuestionType.CONVERSATION_MATCHING,
            content="A: Hi (2). B: Hello (1). A: (3)? B: Yes, (1) again.",
        )
        assert question.gap_markers() == [1, 2, 3]

    def test_gap_markers_ignore_long_numbers(self) -> None:
        """Only one- and two-digit numbers in parentheses are markers."""
        question = Question(
            id="conv",
            part_name="Conversation",
            type=QuestionType.CONVERSATION_MATCHING,
            content="A: Since (2018)? (1) B: Yes, for (10) years. (2)",
        )
        assert question.gap_markers() == [1, 2, 10]

    def test_consistent_gaps(self) -> None:
        """Distinct markers matching questionCount are consistent."""
        question = Question(
            id="conv",
            part_name="Conversation",
            type=QuestionType.CONVERSATION_MATCHING,
            content="A: (1) B: (2) A: (3)",
            question_count=3,
        )
        assert question.has_consistent_gaps()

    def test_count_mismatch(self) -> None:
        """A questionCount that differs from the marker count is inconsistent."""
        question = Question(
            id="conv",
            part_name="Conversation",
            type=QuestionType.CONVERSATION_MATCHING,
            content="A: (1) B: (2) A: (3)",
            question_count=5,
        )
        assert not question.has_consistent_gaps()

    def test_matching_without_markers(self) -> None:
        """A conversation-matching question must embed markers."""
        question = Question(
            id="conv",
            part_name="Conversation",
            type=QuestionType.CONVERSATION_MATCHING,
            content="A: Hello. B: Hi.",
        )
        assert not question.has_consistent_gaps()

    def test_other_types_always_consistent(self) -> None:
        """Gap rules apply only to conversation-matching questions."""
        question = Question(id="q", part_name="Cloze", type=QuestionType.MULTIPLE_CHOICE, content="Gap (1)")
        assert question.has_consistent_gaps()


# =============================================================================
# ExamData
# =============================================================================


class TestExamData:
    """Tests for ExamData model."""

    @pytest.fixture
    def exam(self) -> ExamData:
        """Exam with a matching question and two plain questions."""
        return ExamData(
            title="Entrance Examination",
            subtitle="English",
            duration=60,
            sections=[
                Section(
                    title="Part 1. Choose the correct answer.",
                    total_points=1.0,
                    questions=[
                        Question(id="1", part_name="Grammar", type=QuestionType.MULTIPLE_CHOICE, content="Q1"),
                        Question(id="2", part_name="Grammar", type=QuestionType.MULTIPLE_CHOICE, content="Q2"),
                    ],
                ),
                Section(
                    title="Part 2. Complete the conversation.",
                    total_points=1.25,
                    questions=[
                        Question(
                            id="conv",
                            part_name="Conversation",
                            type=QuestionType.CONVERSATION_MATCHING,
                            content="(1) (2) (3) (4) (5)",
                            question_count=5,
                        )
                    ],
                ),
            ],
        )

    def test_iter_questions_in_order(self, exam: ExamData) -> None:
        """Questions are yielded in exam order with their section."""
        pairs = list(exam.iter_questions())
        assert [q.id for _, q in pairs] == ["1", "2", "conv"]
        assert pairs[2][0].title.startswith("Part 2")

    def test_item_count(self, exam: ExamData) -> None:
        """A matching question counts each blank."""
        assert exam.item_count == 7

    def test_duration_rounded(self) -> None:
        """Fractional durations from the backend are rounded."""
        exam = ExamData.model_validate({"title": "T", "subtitle": "S", "duration": 59.6, "sections": []})
        assert exam.duration == 60

    def test_passage_content_alias(self) -> None:
        """Section passages use the passageContent key."""
        section = Section.model_validate(
            {"title": "Part 5. Read.", "passageContent": "Once upon a time", "totalPoints": 1, "questions": []}
        )
        assert section.passage_content == "Once upon a time"
        assert section.total_points == 1.0

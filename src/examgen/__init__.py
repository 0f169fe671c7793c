"""examgen: LLM-assisted generation of English exams from a sample exam."""

from __future__ import annotations

from examgen.core.exceptions import ErrorKind, ExamGenError, PipelineError
from examgen.core.pipeline import invoke
from examgen.core.types import (
    AnalysisResult,
    ExamData,
    GenerationConfig,
    ModelIdentifier,
    Question,
    QuestionType,
    Section,
)
from examgen.generators.analysis import analyze_exam
from examgen.generators.exam import generate_exam

# Caller-facing names for the two stages
analyze = analyze_exam
generate = generate_exam

__version__ = "0.1.0"
__all__ = [
    # Stages
    "analyze",
    "analyze_exam",
    "generate",
    "generate_exam",
    "invoke",
    # Types
    "AnalysisResult",
    "ExamData",
    "GenerationConfig",
    "ModelIdentifier",
    "Question",
    "QuestionType",
    "Section",
    # Errors
    "ErrorKind",
    "ExamGenError",
    "PipelineError",
    # Version
    "__version__",
]

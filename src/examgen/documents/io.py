"""I/O utilities for analyses and exams.

Analyses and exams are stored as camelCase JSON, the same shape the
backend produces, so they can be edited by hand between stages.
"""

from __future__ import annotations

from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from examgen.core.exceptions import DocumentError
from examgen.core.types import AnalysisResult, ExamData

ModelT = TypeVar("ModelT", bound=BaseModel)


def _save(model: BaseModel, path: Path | str) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        model.model_dump_json(by_alias=True, exclude_none=True, indent=2),
        encoding="utf-8",
    )


def _load(model_type: type[ModelT], path: Path | str) -> ModelT:
    path = Path(path)
    if not path.exists():
        msg = f"File not found: {path}"
        raise FileNotFoundError(msg)

    try:
        return model_type.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        msg = f"Invalid {model_type.__name__} file {path}: {e.error_count()} error(s)"
        raise DocumentError(msg) from e


def save_analysis(analysis: AnalysisResult, path: Path | str) -> None:
    """Save an analysis result to a JSON file.

    Args:
        analysis: The analysis to save.
        path: Output file path.
    """
    _save(analysis, path)


def load_analysis(path: Path | str) -> AnalysisResult:
    """Load an analysis result from a JSON file.

    Args:
        path: Input file path.

    Returns:
        Loaded AnalysisResult.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        DocumentError: If the file content is not a valid analysis.
    """
    return _load(AnalysisResult, path)


def save_exam(exam: ExamData, path: Path | str) -> None:
    """Save an exam to a JSON file.

    Args:
        exam: The exam to save.
        path: Output file path.
    """
    _save(exam, path)


def load_exam(path: Path | str) -> ExamData:
    """Load an exam from a JSON file.

    Args:
        path: Input file path.

    Returns:
        Loaded ExamData.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        DocumentError: If the file content is not a valid exam.
    """
    return _load(ExamData, path)

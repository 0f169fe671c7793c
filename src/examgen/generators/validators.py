"""Contract checks for generated exams.

The pipeline validates the shape of an exam but not every rule the
prompt asks for. These checks report the remaining violations without
raising, so callers can warn the user before exporting.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from examgen.core.types import QuestionType

if TYPE_CHECKING:
    from examgen.core.types import ExamData, Question, Section

SECTION_TITLE_PATTERN = re.compile(r"^\s*Part\s+\d+\s*[.:]\s*\S")


@dataclass(frozen=True)
class ContractViolation:
    """A rule a generated exam breaks.

    Attributes:
        section_index: Zero-based index of the offending section.
        question_id: Id of the offending question, if the rule is per question.
        message: Human-readable description.
    """

    section_index: int
    question_id: str | None
    message: str


def check_question(question: Question, section_index: int) -> ContractViolation | None:
    """Check the gap markers of a conversation-matching question.

    Args:
        question: The question to check.
        section_index: Index of the section containing it.

    Returns:
        A violation, or None if the question is consistent.
    """
    if question.type is not QuestionType.CONVERSATION_MATCHING or question.has_consistent_gaps():
        return None

    markers = question.gap_markers()
    if not markers:
        message = "conversation-matching question has no numbered gap markers"
    else:
        message = f"conversation-matching question has {len(markers)} gap markers but questionCount is {question.question_count}"
    return ContractViolation(section_index=section_index, question_id=question.id, message=message)


def check_section_title(section: Section, section_index: int) -> ContractViolation | None:
    """Check that a section title reads "Part N. <instructions>".

    Args:
        section: The section to check.
        section_index: Index of the section.

    Returns:
        A violation, or None if the title is well formed.
    """
    if SECTION_TITLE_PATTERN.match(section.title):
        return None
    return ContractViolation(
        section_index=section_index,
        question_id=None,
        message=f"section title does not start with a part number and instructions: {section.title!r}",
    )


def check_exam(exam: ExamData) -> list[ContractViolation]:
    """Collect every contract violation in an exam.

    Args:
        exam: The generated exam.

    Returns:
        Violations in exam order; empty if the exam is consistent.

    Example:
        >>> for violation in check_exam(exam):
        ...     print(violation.message)
    """
    violations: list[ContractViolation] = []
    for index, section in enumerate(exam.sections):
        title_violation = check_section_title(section, index)
        if title_violation:
            violations.append(title_violation)
        for question in section.questions:
            question_violation = check_question(question, index)
            if question_violation:
                violations.append(question_violation)
    return violations

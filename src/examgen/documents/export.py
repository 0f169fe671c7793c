"""DOCX export of generated exams.

Builds a printable Word document: a centered header, one block per
section, and an answer key table on a separate page.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import docx
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Pt

from examgen.core.exceptions import DocumentError
from examgen.core.types import QuestionType

if TYPE_CHECKING:
    from docx.document import Document

    from examgen.core.types import ExamData, Question, Section

logger = logging.getLogger(__name__)

FONT_NAME = "Times New Roman"
BODY_SIZE = Pt(12)
HEADER_SIZE = Pt(13)
OPTION_INDENT = Inches(0.5)

# Options shorter than this (joined) share a single line
INLINE_OPTIONS_MAX_LENGTH = 40
OPTION_SEPARATOR = "       "
ANSWER_REF_MAX_LENGTH = 50


def _answer_reference(content: str) -> str:
    """Shorten question content for the answer key."""
    if len(content) <= ANSWER_REF_MAX_LENGTH:
        return content
    return content[:ANSWER_REF_MAX_LENGTH] + "..."


def _configure_styles(document: Document) -> None:
    normal = document.styles["Normal"]
    normal.font.name = FONT_NAME
    normal.font.size = BODY_SIZE
    normal.paragraph_format.line_spacing = 1.15


def _add_header(document: Document, exam: ExamData) -> None:
    for text in (exam.title, exam.subtitle):
        paragraph = document.add_paragraph()
        paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
        paragraph.paragraph_format.space_after = Pt(6)
        run = paragraph.add_run(text.upper())
        run.bold = True
        run.font.size = HEADER_SIZE

    paragraph = document.add_paragraph()
    paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
    paragraph.paragraph_format.space_after = Pt(20)
    paragraph.add_run(f"Time allowed: {exam.duration} minutes").italic = True


def _add_options(document: Document, options: list[str]) -> None:
    if len("".join(options)) < INLINE_OPTIONS_MAX_LENGTH:
        document.add_paragraph(OPTION_SEPARATOR.join(options)).paragraph_format.left_indent = OPTION_INDENT
        return
    for option in options:
        document.add_paragraph(option).paragraph_format.left_indent = OPTION_INDENT


def _add_question(document: Document, question: Question, number: int | None) -> None:
    paragraph = document.add_paragraph()
    if number is not None:
        paragraph.add_run(f"Question {number}: ").bold = True
    paragraph.add_run(question.content)

    if question.options:
        _add_options(document, question.options)

    document.add_paragraph().paragraph_format.space_after = Pt(6)


def _add_section(document: Document, section: Section, next_number: int) -> int:
    """Add one section; return the next question number."""
    title = document.add_paragraph()
    title.paragraph_format.space_before = Pt(12)
    title.paragraph_format.space_after = Pt(6)
    title.add_run(section.title).bold = True

    if section.passage_content:
        passage = document.add_paragraph()
        passage.paragraph_format.space_before = Pt(6)
        passage.paragraph_format.space_after = Pt(12)
        passage.add_run(section.passage_content).italic = True

    for question in section.questions:
        if question.type is QuestionType.CONVERSATION_MATCHING:
            _add_question(document, question, None)
        else:
            _add_question(document, question, next_number)
            next_number += 1
    return next_number


def _add_answer_key(document: Document, exam: ExamData) -> None:
    heading = document.add_heading("ANSWER KEY", level=1)
    heading.alignment = WD_ALIGN_PARAGRAPH.CENTER
    heading.paragraph_format.page_break_before = True

    table = document.add_table(rows=0, cols=2)
    table.style = "Table Grid"
    for section in exam.sections:
        row = table.add_row()
        merged = row.cells[0].merge(row.cells[1])
        merged.paragraphs[0].add_run(section.title).bold = True

        for question in section.questions:
            cells = table.add_row().cells
            cells[0].text = _answer_reference(question.content)
            cells[1].paragraphs[0].add_run(question.correct_answer or "").bold = True


def build_exam_document(exam: ExamData) -> Document:
    """Build the Word document for an exam.

    Args:
        exam: The exam to render.

    Returns:
        An unsaved python-docx Document.
    """
    document = docx.Document()
    _configure_styles(document)
    _add_header(document, exam)

    next_number = 1
    for section in exam.sections:
        next_number = _add_section(document, section, next_number)

    _add_answer_key(document, exam)
    return document


def export_exam_to_docx(exam: ExamData, path: str | Path = "english_exam.docx") -> Path:
    """Export an exam to a .docx file.

    Args:
        exam: The exam to export.
        path: Output file path.

    Returns:
        The path written.

    Raises:
        DocumentError: If the document cannot be written.

    Example:
        >>> export_exam_to_docx(exam, "exam.docx")
        PosixPath('exam.docx')
    """
    path = Path(path)
    document = build_exam_document(exam)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        document.save(str(path))
    except OSError as e:
        msg = f"Error creating the Word file {path}: {e}"
        raise DocumentError(msg) from e

    logger.info(f"Exported exam to {path}")
    return path

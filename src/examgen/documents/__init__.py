"""Documents module for examgen.

This module reads sample exams, stores analyses and exams as JSON,
and exports exams to Word documents.
"""

from __future__ import annotations

from examgen.documents.export import build_exam_document, export_exam_to_docx
from examgen.documents.extract import SUPPORTED_EXTENSIONS, extract_text
from examgen.documents.io import load_analysis, load_exam, save_analysis, save_exam

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "build_exam_document",
    "export_exam_to_docx",
    "extract_text",
    "load_analysis",
    "load_exam",
    "save_analysis",
    "save_exam",
]

"""Generators module for examgen.

This module provides the two request builders, sample exam analysis
and full exam generation, plus contract checks for generated exams.
"""

from __future__ import annotations

from examgen.generators.analysis import MAX_ANALYSIS_CHARS, analyze_exam
from examgen.generators.exam import generate_exam
from examgen.generators.prompts import DEFAULT_MATRIX
from examgen.generators.validators import ContractViolation, check_exam

__all__ = [
    "DEFAULT_MATRIX",
    "MAX_ANALYSIS_CHARS",
    "ContractViolation",
    "analyze_exam",
    "check_exam",
    "generate_exam",
]

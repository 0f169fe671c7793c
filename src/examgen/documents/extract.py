"""Text extraction from sample exam documents.

Supports Word documents (.docx, via python-docx) and plain text files.
"""

from __future__ import annotations

import logging
from pathlib import Path

import docx
from docx.table import Table

from examgen.core.exceptions import DocumentError

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = frozenset({".txt", ".md"})
SUPPORTED_EXTENSIONS = frozenset({".docx"}) | TEXT_EXTENSIONS


def _extract_docx(path: Path) -> str:
    """Extract paragraphs and table rows in document order."""
    try:
        document = docx.Document(str(path))
    except Exception as e:
        msg = f"Cannot read the Word document {path.name}. Please make sure the file is not damaged."
        raise DocumentError(msg) from e

    lines: list[str] = []
    for block in document.iter_inner_content():
        if isinstance(block, Table):
            for row in block.rows:
                cells = [cell.text.strip() for cell in row.cells]
                lines.append(" | ".join(c for c in cells if c))
        else:
            lines.append(block.text)
    return "\n".join(lines)


def extract_text(path: str | Path) -> str:
    """Extract the raw text of an exam document.

    Args:
        path: Path to a .docx, .txt or .md file.

    Returns:
        The document text. May be blank; callers decide whether that is an error.

    Raises:
        DocumentError: If the file is missing, of an unsupported type, or unreadable.

    Example:
        >>> text = extract_text("sample_exam.docx")
    """
    path = Path(path)
    if not path.is_file():
        msg = f"File not found: {path}"
        raise DocumentError(msg)

    extension = path.suffix.lower()
    if extension not in SUPPORTED_EXTENSIONS:
        supported = ", ".join(sorted(SUPPORTED_EXTENSIONS))
        msg = f"Unsupported file type '{extension}'. Supported: {supported}"
        raise DocumentError(msg)

    if extension == ".docx":
        text = _extract_docx(path)
    else:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Cannot read {path.name}: {e}"
            raise DocumentError(msg) from e

    logger.info(f"Extracted {len(text)} characters from {path.name}")
    return text

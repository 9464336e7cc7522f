"""Plain-text extraction from uploaded documents.

PDF pages are read with PyMuPDF (fitz), Word documents with python-docx.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import docx
import fitz  # PyMuPDF

from plagscan.errors import ExtractionError
from plagscan.models import Document
from plagscan.utils.text import normalize_whitespace

LOGGER = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".docx", ".pdf", ".txt")


def is_supported(filename: str | Path) -> bool:
    return Path(filename).suffix.lower() in SUPPORTED_SUFFIXES


def iter_pdf_text_parts(path: Path) -> Iterator[str]:
    """Yield text content from a PDF file page by page."""
    try:
        doc = fitz.open(path)
    except Exception as exc:
        raise ExtractionError(f"Failed to open PDF {path}: {exc}") from exc

    try:
        for index in range(len(doc)):
            try:
                text = doc[index].get_text() or ""
            except Exception as exc:  # pragma: no cover - defensive path
                LOGGER.warning("Failed to read page %s in %s: %s", index, path, exc)
                continue
            normalized = normalize_whitespace(text.splitlines())
            if normalized:
                yield normalized + "\n"
    finally:
        doc.close()


def extract_docx_text(path: Path) -> str:
    """Return the paragraph text of a .docx file, one paragraph per line."""
    try:
        document = docx.Document(str(path))
    except Exception as exc:
        raise ExtractionError(f"Failed to open DOCX {path}: {exc}") from exc
    return normalize_whitespace(paragraph.text for paragraph in document.paragraphs)


def extract_text(path: Path) -> str:
    """Extract plain text from a supported document."""
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ExtractionError(
            f"Unsupported file type '{suffix or path.name}'. "
            f"Allowed: {', '.join(SUPPORTED_SUFFIXES)}"
        )
    if suffix == ".docx":
        return extract_docx_text(path)
    if suffix == ".pdf":
        return "".join(iter_pdf_text_parts(path)).strip()
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ExtractionError(f"Failed to read {path}: {exc}") from exc


def load_document(path: Path, name: str | None = None) -> Document:
    """Extract a document's text and wrap it as a :class:`Document`."""
    text = extract_text(path)
    LOGGER.debug("Extracted %d characters from %s", len(text), path)
    return Document(text=text, name=name or path.name)

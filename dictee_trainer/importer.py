"""Document import pipeline: file bytes → named word lists."""
from __future__ import annotations

import logging
from pathlib import Path

from dictee_trainer.models import NO_WORDS_FOUND, ImportResult
from dictee_trainer.parsers.documents import extract_document
from dictee_trainer.parsers.word_detector import (
    dedupe_words,
    detect_sections,
    extract_words,
    sections_from_tables,
)

log = logging.getLogger("dictee_trainer.import")


def extract_words_from_file(filename: str, data: bytes) -> ImportResult:
    """Extract word lists from an uploaded document.

    Table-derived lists win over text-derived ones; text section detection
    is the fallback.  With several sections ``words`` is their union, with
    one it is that section's words, with none it is the flat word list of
    the whole text.  Extraction errors propagate; an empty result is
    reported through ``notice`` instead.
    """
    doc = extract_document(filename, data)

    sections = sections_from_tables(doc.tables) if doc.tables else []
    source = "tables"
    if not sections:
        sections = detect_sections(doc.text)
        source = "text"

    if len(sections) > 1:
        words = dedupe_words([w for s in sections for w in s.words])
    elif len(sections) == 1:
        words = list(sections[0].words)
    else:
        words = extract_words(doc.text)
        source = "flat"

    log.info("Import %s: %d word(s), %d section(s) from %s",
             filename, len(words), len(sections), source)
    return ImportResult(
        words=words,
        sections=sections,
        has_multiple_sections=len(sections) > 1,
        notice=None if words else NO_WORDS_FOUND,
    )


def extract_words_from_path(path: Path) -> ImportResult:
    return extract_words_from_file(path.name, path.read_bytes())

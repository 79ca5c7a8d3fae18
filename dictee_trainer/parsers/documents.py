"""Turn uploaded document bytes into text, and table grids where the format has them.

  .txt        decoded as-is
  .docx/.doc  python-docx, paragraphs and table cells in body order
  .odt        content.xml, paragraphs plus one grid per table
  .pdf        PyMuPDF, word fragments joined by spaces, one line per page
"""
from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path

from dictee_trainer.errors import InvalidDocument, UnsupportedFormat
from dictee_trainer.models import ExtractedDocument

log = logging.getLogger("dictee_trainer.import")


def read_text(data: bytes) -> ExtractedDocument:
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError:
        # Windows editors still save French text as cp1252
        text = data.decode("cp1252", errors="replace")
    return ExtractedDocument(text=text)


def read_word(data: bytes) -> ExtractedDocument:
    from docx import Document
    from docx.opc.exceptions import PackageNotFoundError
    from docx.oxml.ns import qn
    from docx.table import Table
    from docx.text.paragraph import Paragraph

    try:
        doc = Document(io.BytesIO(data))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
        raise InvalidDocument(f"Document Word illisible : {e}") from e

    lines: list[str] = []
    for block in doc.element.body.iterchildren():
        if block.tag == qn("w:p"):
            lines.append(Paragraph(block, doc).text)
        elif block.tag == qn("w:tbl"):
            for row in Table(block, doc).rows:
                seen = set()
                for cell in row.cells:
                    # merged cells are returned once per grid column
                    if id(cell._tc) in seen:
                        continue
                    seen.add(id(cell._tc))
                    lines.append(cell.text)
    return ExtractedDocument(text="\n".join(lines))


def read_odt(data: bytes) -> ExtractedDocument:
    from dictee_trainer.parsers.odt_parser import parse_odt

    return parse_odt(data)


def read_pdf(data: bytes) -> ExtractedDocument:
    import fitz  # PyMuPDF

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        raise InvalidDocument(f"PDF illisible : {e}") from e

    with doc:
        if doc.needs_pass:
            raise InvalidDocument("PDF protégé par un mot de passe")
        pages = []
        for page in doc:
            fragments = [w[4] for w in page.get_text("words")]
            pages.append(" ".join(fragments))
    return ExtractedDocument(text="\n".join(pages))


READERS = {
    ".txt": read_text,
    ".docx": read_word,
    ".doc": read_word,
    ".odt": read_odt,
    ".pdf": read_pdf,
}


def extract_document(filename: str, data: bytes) -> ExtractedDocument:
    """Dispatch on the file extension.

    Raises UnsupportedFormat for any other extension and InvalidDocument
    when the file cannot be read.
    """
    ext = Path(filename).suffix.lower()
    reader = READERS.get(ext)
    if reader is None:
        raise UnsupportedFormat(ext)
    doc = reader(data)
    log.info("Extracted %s: %d chars, %d table(s)", filename, len(doc.text), len(doc.tables))
    return doc

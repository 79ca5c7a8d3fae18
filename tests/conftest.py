"""Shared test fixtures."""
from __future__ import annotations

import io
import random
import zipfile

import pytest

from dictee_trainer.db import Database

ODT_NAMESPACES = (
    'xmlns:office="urn:oasis:names:tc:opendocument:xmlns:office:1.0" '
    'xmlns:text="urn:oasis:names:tc:opendocument:xmlns:text:1.0" '
    'xmlns:table="urn:oasis:names:tc:opendocument:xmlns:table:1.0"'
)


@pytest.fixture
def tmp_db(tmp_path):
    """Create a fresh temporary database."""
    db = Database(tmp_path / "test.db")
    yield db
    db.close()


@pytest.fixture
def rng():
    """A seeded random source so template and variant choices repeat."""
    return random.Random(1234)


@pytest.fixture
def sample_words():
    return ["chat", "maison", "dangereux", "actif", "absent(e)", "ordinateur"]


def make_odt(body: str) -> bytes:
    """Zip an office:text body into a minimal .odt archive."""
    content = (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f"<office:document-content {ODT_NAMESPACES}>"
        f"<office:body><office:text>{body}</office:text></office:body>"
        "</office:document-content>"
    )
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("mimetype", "application/vnd.oasis.opendocument.text")
        zf.writestr("content.xml", content)
    return buf.getvalue()


def odt_table(rows: list[list[str]]) -> str:
    """Render rows of plain cell strings as a table:table element."""
    xml = ["<table:table>"]
    for row in rows:
        xml.append("<table:table-row>")
        for cell in row:
            xml.append(f"<table:table-cell><text:p>{cell}</text:p></table:table-cell>")
        xml.append("</table:table-row>")
    xml.append("</table:table>")
    return "".join(xml)


def make_docx(paragraphs: list[str]) -> bytes:
    from docx import Document

    doc = Document()
    for p in paragraphs:
        doc.add_paragraph(p)
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


def make_pdf(pages: list[str]) -> bytes:
    import fitz

    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data

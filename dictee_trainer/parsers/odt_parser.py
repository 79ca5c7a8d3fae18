"""Read OpenDocument text files (.odt) into paragraphs and table grids.

The archive's ``content.xml`` is parsed with ElementTree using the
OpenDocument namespaces explicitly.  Table cells keep their column
position: ``table:number-columns-repeated="N"`` expands into N cells and
``table:covered-table-cell`` (the hidden part of a merged cell) becomes an
empty string, so a header spanning two columns still lines up with the
words below it.
"""
from __future__ import annotations

import io
import zipfile
import xml.etree.ElementTree as ET

from dictee_trainer.errors import InvalidDocument
from dictee_trainer.models import ExtractedDocument

NS = {
    "office": "urn:oasis:names:tc:opendocument:xmlns:office:1.0",
    "text": "urn:oasis:names:tc:opendocument:xmlns:text:1.0",
    "table": "urn:oasis:names:tc:opendocument:xmlns:table:1.0",
}


def _q(prefix: str, local: str) -> str:
    return f"{{{NS[prefix]}}}{local}"


P = _q("text", "p")
H = _q("text", "h")
SPACE = _q("text", "s")
TAB = _q("text", "tab")
LINE_BREAK = _q("text", "line-break")
NOTE = _q("text", "note")
TABLE = _q("table", "table")
ROW = _q("table", "table-row")
ROW_CONTAINERS = {_q("table", "table-header-rows"), _q("table", "table-rows"), _q("table", "table-row-group")}
CELL = _q("table", "table-cell")
COVERED_CELL = _q("table", "covered-table-cell")
COLS_REPEATED = _q("table", "number-columns-repeated")
ROWS_REPEATED = _q("table", "number-rows-repeated")
SPACE_COUNT = _q("text", "c")


def _text_of(el: ET.Element) -> str:
    """Visible text of a paragraph, rendering spacing elements."""
    parts = [el.text or ""]
    for child in el:
        if child.tag == SPACE:
            parts.append(" " * _repeat(child, SPACE_COUNT))
        elif child.tag == TAB:
            parts.append("\t")
        elif child.tag == LINE_BREAK:
            parts.append("\n")
        elif child.tag != NOTE:
            parts.append(_text_of(child))
        parts.append(child.tail or "")
    return "".join(parts)


def _repeat(el: ET.Element, attr: str) -> int:
    try:
        return max(1, int(el.get(attr, "1")))
    except ValueError:
        return 1


def _iter_rows(el: ET.Element):
    for child in el:
        if child.tag == ROW:
            yield child
        elif child.tag in ROW_CONTAINERS:
            yield from _iter_rows(child)


def _cell_text(cell: ET.Element) -> str:
    paragraphs = [_text_of(p) for p in cell.iter() if p.tag in (P, H)]
    return "\n".join(paragraphs).strip()


def _row_cells(row: ET.Element) -> list[str]:
    cells: list[str] = []
    for cell in row:
        if cell.tag == CELL:
            cells.extend([_cell_text(cell)] * _repeat(cell, COLS_REPEATED))
        elif cell.tag == COVERED_CELL:
            cells.extend([""] * _repeat(cell, COLS_REPEATED))
    # office suites pad rows with long runs of empty repeated cells
    while cells and not cells[-1]:
        cells.pop()
    return cells


def _table_grid(table: ET.Element) -> list[list[str]]:
    grid: list[list[str]] = []
    for row in _iter_rows(table):
        cells = _row_cells(row)
        copies = _repeat(row, ROWS_REPEATED) if cells else 1
        grid.extend(list(cells) for _ in range(copies))
    while grid and not grid[-1]:
        grid.pop()
    return grid


def parse_odt(data: bytes) -> ExtractedDocument:
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            content = zf.read("content.xml")
    except KeyError as e:
        raise InvalidDocument("content.xml introuvable dans le fichier .odt") from e
    except (zipfile.BadZipFile, RuntimeError, OSError) as e:
        raise InvalidDocument(f"Archive .odt illisible : {e}") from e

    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise InvalidDocument(f"content.xml invalide : {e}") from e

    paragraphs = [_text_of(el) for el in root.iter() if el.tag in (P, H)]
    tables = [grid for grid in (_table_grid(t) for t in root.iter(TABLE)) if grid]
    return ExtractedDocument(text="\n".join(paragraphs), tables=tables)

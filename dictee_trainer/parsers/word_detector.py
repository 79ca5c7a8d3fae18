"""Find vocabulary words and named word lists in extracted document content.

Teachers' documents are loosely structured: a PDF with "Dictée 1 ► mot -
mot - mot" on one line, a word processor table with "Liste 7 | | Liste 8"
headers, or just a column of words.  Three entry points cover them:

  extract_words            flat list from free text
  detect_sections          "Liste N"/"Dictée N" sections inside free text
  extract_lists_from_table header-driven lists from a 2-D grid of cells
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from dictee_trainer.lexicon import ACCENTED_KEYWORDS, DECORATIVE_GLYPHS, IGNORED_WORDS, SECTION_KEYWORDS
from dictee_trainer.models import DetectedSection

log = logging.getLogger("dictee_trainer.detect")

_KEYWORDS = "|".join(SECTION_KEYWORDS)

# Section start inside free text: "Dictée 3", "liste n°12", "Semaine 4".
SECTION_RE = re.compile(rf"\b({_KEYWORDS})\s*n?°?\s*(\d+)", re.IGNORECASE)

# The same phrase plus the punctuation that usually follows it.
SECTION_HEADER_RE = re.compile(rf"\b(?:{_KEYWORDS})\s*n?°?\s*\d+\s*[►▶:\-–—.]?\s*", re.IGNORECASE)

# Header cell of a table column group: "Liste 7", "Dictée 2", "Dict. 2", "n°3", "N° 3".
TABLE_HEADER_RE = re.compile(
    r"^\s*(?:(liste)|(dict(?:[ée]e)?\.?))\s*n?\s*°?\s*(\d+)\b"
    r"|^\s*n\s*°\s*(\d+)\b",
    re.IGNORECASE,
)

_TEXT_SEPARATORS = re.compile(r"\s+-\s*|\s*-\s+|\s*[–—]\s*|\s*[,;•·▶►]\s*|[\n\r\t]")
_CELL_SEPARATORS = re.compile(r"[,;\n\r]")
_ARTICLE_RE = re.compile(r"^(?:(?:le|la|les|un|une|des)\s+|l['’]\s*)", re.IGNORECASE)
_VARIANT_SUFFIX_RE = re.compile(r"\s*\([^()]*\)$")
_GLYPH_RE = re.compile(f"[{re.escape(DECORATIVE_GLYPHS)}]")

HEADER_SCAN_ROWS = 3


# ── Word-level helpers ────────────────────────────────────────────────────

def is_valid_word(token: str) -> bool:
    """Reject titles, instructions, numbering and page furniture."""
    stem = _VARIANT_SUFFIX_RE.sub("", token)
    if len(stem) < 2:
        return False
    if stem.isupper() and len(stem) > 2:
        return False
    if any(ch.isdigit() for ch in token):
        return False
    if token.lower() in IGNORED_WORDS or stem.lower() in IGNORED_WORDS:
        return False
    if _GLYPH_RE.search(token):
        return False
    if not any(ch.isalpha() for ch in token):
        return False
    return True


def _clean_once(token: str) -> str:
    s = token.strip()
    s = _ARTICLE_RE.sub("", s)
    start = 0
    while start < len(s) and not (s[start].isalpha() or s[start] == "("):
        start += 1
    end = len(s)
    while end > start and not (s[end - 1].isalpha() or s[end - 1] == ")"):
        end -= 1
    return s[start:end].strip()


def clean_word(token: str) -> str:
    """Strip whitespace, a leading article and surrounding punctuation.

    "  - la maison, " → "maison"; "(e)" markers survive: "absent(e)".
    Repeated until stable, so cleaning twice changes nothing.
    """
    current = token
    while True:
        cleaned = _clean_once(current)
        if cleaned == current:
            return cleaned
        current = cleaned


def dedupe_words(words: list[str]) -> list[str]:
    """Case-insensitive de-duplication keeping first-seen order."""
    seen: set[str] = set()
    out: list[str] = []
    for w in words:
        key = w.casefold()
        if key not in seen:
            seen.add(key)
            out.append(w)
    return out


def _clean_tokens(tokens: list[str]) -> list[str]:
    cleaned = (clean_word(t) for t in tokens)
    return [w for w in cleaned if is_valid_word(w)]


def section_id(title: str) -> str:
    return re.sub(r"[^\w]+", "-", title.lower()).strip("-")


# ── Free text ─────────────────────────────────────────────────────────────

def extract_words(text: str) -> list[str]:
    """Flat word list from *text*, ignoring any section headers it contains."""
    text = SECTION_HEADER_RE.sub(" ", text)
    return dedupe_words(_clean_tokens(_TEXT_SEPARATORS.split(text)))


@dataclass
class SectionSpan:
    start: int
    end: int
    keyword: str
    number: str

    @property
    def title(self) -> str:
        keyword = self.keyword.lower()
        return f"{ACCENTED_KEYWORDS.get(keyword, keyword).capitalize()} {self.number}"


def section_spans(text: str) -> list[SectionSpan]:
    """Each header starts a span running to the next header or end of text."""
    matches = list(SECTION_RE.finditer(text))
    spans = []
    for i, m in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        spans.append(SectionSpan(m.start(), end, m.group(1), m.group(2)))
    return spans


def _unique_id(title: str, used: set[str]) -> str:
    base = section_id(title)
    sid, n = base, 2
    while sid in used:
        sid = f"{base}-{n}"
        n += 1
    used.add(sid)
    return sid


def detect_sections(text: str) -> list[DetectedSection]:
    """Split *text* into named sections at "Liste N", "Dictée N", ... headers.

    Sections without any valid word are dropped.  Zero or one result means
    the caller should treat the text as a single list.
    """
    sections: list[DetectedSection] = []
    used: set[str] = set()
    for span in section_spans(text):
        words = extract_words(text[span.start:span.end])
        if words:
            sections.append(DetectedSection(_unique_id(span.title, used), span.title, words))
    log.debug("detect_sections: %d section(s) in %d chars", len(sections), len(text))
    return sections


# ── Tables ────────────────────────────────────────────────────────────────

def _header_title(cell: str) -> str | None:
    m = TABLE_HEADER_RE.match(cell)
    if not m:
        return None
    if m.group(1):
        return f"Liste {m.group(3)}"
    if m.group(2):
        return f"Dictée {m.group(3)}"
    return f"N° {m.group(4)}"


def find_header_row(grid: list[list[str]]) -> tuple[int, list[tuple[int, str]]] | None:
    """Locate the row naming the lists, scanning the first rows of *grid*.

    The first row with two or more header cells wins.  Otherwise the first
    row with exactly one header cell is used.  Returns ``(row_index,
    [(column, title), ...])`` or None.
    """
    fallback = None
    for r, row in enumerate(grid[:HEADER_SCAN_ROWS]):
        headers = [(c, t) for c, cell in enumerate(row) if (t := _header_title(cell))]
        if len(headers) >= 2:
            return r, headers
        if len(headers) == 1 and fallback is None:
            fallback = (r, headers)
    return fallback


def _collect(grid: list[list[str]], rows: range, cols: range) -> list[str]:
    words: list[str] = []
    for r in rows:
        row = grid[r]
        for c in cols:
            if c >= len(row):
                break
            cell = row[c].strip()
            if not cell or TABLE_HEADER_RE.match(cell):
                continue
            words.extend(_clean_tokens(_CELL_SEPARATORS.split(cell)))
    return dedupe_words(words)


def extract_lists_from_table(grid: list[list[str]]) -> list[DetectedSection]:
    """Named word lists from one table.

    Decision order: a header row in the first three rows (each header owns
    the columns up to the next header), else a side-by-side two-list layout
    when the table has four or more columns, else one list of every cell.
    """
    if not grid:
        return []
    n_cols = max((len(row) for row in grid), default=0)
    used: set[str] = set()

    header = find_header_row(grid)
    if header is not None:
        header_row, headers = header
        sections = []
        for i, (col, title) in enumerate(headers):
            end = headers[i + 1][0] if i + 1 < len(headers) else n_cols
            words = _collect(grid, range(header_row + 1, len(grid)), range(col, end))
            if words:
                sections.append(DetectedSection(_unique_id(title, used), title, words))
        log.debug("table: header row %d, %d list(s)", header_row, len(sections))
        return sections

    all_rows = range(len(grid))
    if n_cols >= 4:
        mid = n_cols // 2
        sections = []
        for title, cols in (("Liste 1", range(0, mid)), ("Liste 2", range(mid, n_cols))):
            words = _collect(grid, all_rows, cols)
            if words:
                sections.append(DetectedSection(_unique_id(title, used), title, words))
        log.debug("table: side-by-side layout, %d list(s)", len(sections))
        return sections

    words = _collect(grid, all_rows, range(n_cols))
    if not words:
        return []
    log.debug("table: flat layout, %d word(s)", len(words))
    return [DetectedSection("liste-1", "Liste 1", words)]


def sections_from_tables(tables: list[list[list[str]]]) -> list[DetectedSection]:
    """Pick the word lists of a multi-table document.

    A table whose header row names two or more lists is the main list table
    and beats earlier incidental tables (exercises, worksheets).  Without
    one, the first table yielding any list is used.
    """
    first_nonempty: list[DetectedSection] = []
    for i, grid in enumerate(tables):
        sections = extract_lists_from_table(grid)
        if not sections:
            continue
        header = find_header_row(grid)
        if header is not None and len(header[1]) >= 2:
            log.debug("tables: main list table is #%d", i)
            return sections
        if not first_nonempty:
            first_nonempty = sections
    return first_nonempty

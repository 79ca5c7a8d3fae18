"""Tests for the document import pipeline."""
from __future__ import annotations

import pytest

from conftest import make_odt, odt_table
from dictee_trainer.errors import UnsupportedFormat
from dictee_trainer.importer import extract_words_from_file, extract_words_from_path
from dictee_trainer.models import NO_WORDS_FOUND


class TestTextImport:
    def test_multiple_sections(self):
        result = extract_words_from_file("mots.txt", b"Liste 1: chat - chien\nListe 2: table - chien")
        assert result.has_multiple_sections
        assert [s.title for s in result.sections] == ["Liste 1", "Liste 2"]
        assert result.words == ["chat", "chien", "table"]
        assert result.notice is None

    def test_single_section(self):
        result = extract_words_from_file("mots.txt", "Dictée 4 : forêt, rivière".encode())
        assert not result.has_multiple_sections
        assert len(result.sections) == 1
        assert result.words == ["forêt", "rivière"]

    def test_no_sections(self):
        result = extract_words_from_file("mots.txt", b"chat\nchien\nlapin")
        assert result.sections == []
        assert result.words == ["chat", "chien", "lapin"]

    def test_nothing_usable(self):
        result = extract_words_from_file("mots.txt", b"LISTE DE MOTS\n12")
        assert result.words == []
        assert result.notice == NO_WORDS_FOUND

    def test_unsupported(self):
        with pytest.raises(UnsupportedFormat):
            extract_words_from_file("mots.xyz", b"chat")


class TestTableImport:
    def test_tables_win_over_text(self):
        body = "<text:p>Liste 1 : lune, soleil</text:p>" + odt_table(
            [["Liste 7", "", "Liste 8", ""], ["chat", "chien", "table", "chaise"]]
        )
        result = extract_words_from_file("mots.odt", make_odt(body))
        assert [s.title for s in result.sections] == ["Liste 7", "Liste 8"]
        assert result.words == ["chat", "chien", "table", "chaise"]
        assert result.has_multiple_sections

    def test_empty_table_falls_back_to_text(self):
        body = odt_table([["Consigne"]]) + "<text:p>Liste 1 : lune</text:p><text:p>Liste 2 : soleil</text:p>"
        result = extract_words_from_file("mots.odt", make_odt(body))
        assert [s.title for s in result.sections] == ["Liste 1", "Liste 2"]
        assert result.words == ["lune", "soleil"]


def test_extract_from_path(tmp_path):
    path = tmp_path / "liste.txt"
    path.write_text("Liste 1: chat\nListe 2: lune", encoding="utf-8")
    result = extract_words_from_path(path)
    assert result.words == ["chat", "lune"]


def test_result_serializes():
    d = extract_words_from_file("mots.txt", b"Liste 1: chat\nListe 2: lune").to_dict()
    assert d["has_multiple_sections"] is True
    assert d["sections"][0] == {"id": "liste-1", "title": "Liste 1", "words": ["chat"]}

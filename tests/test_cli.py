"""Tests for the command-line entry point."""
from __future__ import annotations

from unittest.mock import patch

import pytest

from dictee_trainer.__main__ import _parse_flag, main


def _run(*args):
    with patch("sys.argv", ["dictee_trainer", *args]):
        main()


def test_parse_flag():
    assert _parse_flag(["--port", "9000"], "--port", "8765") == "9000"
    assert _parse_flag(["--port"], "--port", "8765") == "8765"
    assert _parse_flag([], "--host", "127.0.0.1") == "127.0.0.1"


def test_import_sections(tmp_path, capsys):
    path = tmp_path / "mots.txt"
    path.write_text("Liste 1: chat - chien\nListe 2: lune", encoding="utf-8")
    _run("import", str(path))
    out = capsys.readouterr().out
    assert "2 lists detected" in out
    assert "chat, chien" in out


def test_import_unsupported(tmp_path, capsys):
    path = tmp_path / "mots.xyz"
    path.write_bytes(b"chat")
    with pytest.raises(SystemExit):
        _run("import", str(path))
    assert "Format non supporté" in capsys.readouterr().out


def test_dictation(capsys):
    _run("dictation", "chat", "lune")
    out = capsys.readouterr().out
    assert "_____" in out
    assert "(chat)" in out and "(lune)" in out


def test_choices(capsys):
    _run("choices", "papier")
    assert "papié" in capsys.readouterr().out


def test_unknown_command(capsys):
    with pytest.raises(SystemExit):
        _run("frobnicate")
    assert "Unknown command" in capsys.readouterr().out

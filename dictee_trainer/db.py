from __future__ import annotations

import secrets
import sqlite3
import string
from datetime import datetime, timezone
from pathlib import Path

from dictee_trainer.models import SessionSummary

SCHEMA = """
CREATE TABLE IF NOT EXISTS word_lists (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    owner_id TEXT,
    title TEXT NOT NULL,
    description TEXT,
    mode TEXT NOT NULL,
    share_code TEXT NOT NULL UNIQUE,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS words (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    list_id INTEGER NOT NULL REFERENCES word_lists(id) ON DELETE CASCADE,
    word TEXT NOT NULL,
    hint TEXT,
    position INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS training_sessions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    list_id INTEGER NOT NULL REFERENCES word_lists(id) ON DELETE CASCADE,
    student_name TEXT,
    mode_used TEXT NOT NULL,
    total_words INTEGER NOT NULL,
    correct_words INTEGER NOT NULL,
    percentage INTEGER NOT NULL,
    time_spent_seconds INTEGER NOT NULL,
    chrono_time_seconds INTEGER,
    finished_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS word_attempts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    session_id INTEGER NOT NULL REFERENCES training_sessions(id) ON DELETE CASCADE,
    word TEXT NOT NULL,
    user_answer TEXT NOT NULL,
    is_correct INTEGER NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_words_list ON words(list_id, position);
CREATE INDEX IF NOT EXISTS idx_sessions_list ON training_sessions(list_id);
"""

LIST_MODES = ("flashcard", "audio", "progression")

SHARE_CODE_LENGTH = 6
SHARE_CODE_ALPHABET = string.ascii_uppercase + string.digits


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_share_code() -> str:
    return "".join(secrets.choice(SHARE_CODE_ALPHABET) for _ in range(SHARE_CODE_LENGTH))


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.execute("PRAGMA foreign_keys=ON")
        self._init_schema()

    def _init_schema(self) -> None:
        self.conn.executescript(SCHEMA)
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()

    # ── Word lists ────────────────────────────────────────────────────────

    def create_word_list(
        self,
        owner_id: str | None,
        title: str,
        mode: str,
        words: list[str],
        description: str | None = None,
    ) -> dict:
        """Store a list and its words in order; assigns a unique share code."""
        if mode not in LIST_MODES:
            raise ValueError(f"Unknown list mode: {mode!r} (expected one of {', '.join(LIST_MODES)})")
        now = _now()
        while True:
            code = new_share_code()
            try:
                cur = self.conn.execute(
                    "INSERT INTO word_lists (owner_id, title, description, mode, share_code, created_at, updated_at) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (owner_id, title, description, mode, code, now, now),
                )
                break
            except sqlite3.IntegrityError:
                continue  # share code collision
        list_id = cur.lastrowid
        self.conn.executemany(
            "INSERT INTO words (list_id, word, position) VALUES (?, ?, ?)",
            [(list_id, w, i) for i, w in enumerate(words)],
        )
        self.conn.commit()
        return self.get_word_list(list_id)

    def get_word_list(self, list_id: int) -> dict | None:
        row = self.conn.execute("SELECT * FROM word_lists WHERE id = ?", (list_id,)).fetchone()
        if row is None:
            return None
        result = dict(row)
        result["words"] = self.get_list_words(list_id)
        return result

    def get_list_words(self, list_id: int) -> list[str]:
        rows = self.conn.execute(
            "SELECT word FROM words WHERE list_id = ? ORDER BY position", (list_id,)
        ).fetchall()
        return [r["word"] for r in rows]

    def find_list_by_share_code(self, code: str) -> dict | None:
        row = self.conn.execute(
            "SELECT id FROM word_lists WHERE share_code = ?", (code.strip().upper(),)
        ).fetchone()
        return self.get_word_list(row["id"]) if row else None

    def get_lists_by_owner(self, owner_id: str) -> list[dict]:
        rows = self.conn.execute(
            "SELECT id FROM word_lists WHERE owner_id = ? ORDER BY created_at DESC, id DESC",
            (owner_id,),
        ).fetchall()
        return [self.get_word_list(r["id"]) for r in rows]

    def delete_word_list(self, list_id: int) -> bool:
        cur = self.conn.execute("DELETE FROM word_lists WHERE id = ?", (list_id,))
        self.conn.commit()
        return cur.rowcount > 0

    # ── Sessions ──────────────────────────────────────────────────────────

    def record_session(self, summary: SessionSummary) -> int:
        cur = self.conn.execute(
            "INSERT INTO training_sessions (list_id, student_name, mode_used, total_words, correct_words, "
            "percentage, time_spent_seconds, chrono_time_seconds, finished_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                summary.list_id,
                summary.student_name,
                summary.mode_used,
                summary.total_words,
                summary.correct_words,
                summary.percentage,
                summary.time_spent_seconds,
                summary.chrono_time_seconds,
                _now(),
            ),
        )
        session_id = cur.lastrowid
        self.conn.executemany(
            "INSERT INTO word_attempts (session_id, word, user_answer, is_correct) VALUES (?, ?, ?, ?)",
            [(session_id, a.word, a.user_answer, int(a.is_correct)) for a in summary.attempts],
        )
        self.conn.commit()
        return session_id

    def get_sessions(self, list_id: int | None = None) -> list[dict]:
        if list_id is None:
            rows = self.conn.execute(
                "SELECT * FROM training_sessions ORDER BY finished_at DESC, id DESC"
            ).fetchall()
        else:
            rows = self.conn.execute(
                "SELECT * FROM training_sessions WHERE list_id = ? ORDER BY finished_at DESC, id DESC",
                (list_id,),
            ).fetchall()
        return [dict(r) for r in rows]

    def get_session_attempts(self, session_id: int) -> list[dict]:
        rows = self.conn.execute(
            "SELECT word, user_answer, is_correct FROM word_attempts WHERE session_id = ? ORDER BY id",
            (session_id,),
        ).fetchall()
        return [
            {"word": r["word"], "user_answer": r["user_answer"], "is_correct": bool(r["is_correct"])}
            for r in rows
        ]

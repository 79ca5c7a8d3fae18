"""FastAPI application: document import, word lists, dictations and sessions."""
from __future__ import annotations

import logging
import random
from dataclasses import asdict

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, File, HTTPException, Request, UploadFile

from dictee_trainer.config import Settings, load_settings, save_settings
from dictee_trainer.db import Database
from dictee_trainer.errors import InvalidDocument, UnsupportedFormat
from dictee_trainer.importer import extract_words_from_file
from dictee_trainer.models import GeneratedText, SessionSummary, WordAttempt
from dictee_trainer.morphology import check_blanks, is_correct_answer, spelling_choice, spelling_errors, word_variants
from dictee_trainer.providers.base import create_provider
from dictee_trainer.remote_synthesis import generate_text_with_ai
from dictee_trainer.text_generator import TextSynthesizer

app = FastAPI(title="Dictée Trainer")

# Global state (initialized on startup)
_db: Database | None = None
_settings: Settings | None = None
_rng = random.Random()

_log = logging.getLogger("dictee_trainer.app")


def get_db() -> Database:
    assert _db is not None
    return _db


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


def _get_llm():
    s = get_settings()
    return create_provider(s.llm_provider, s.api_key, s.llm_model, s.llm_base_url)


@app.on_event("startup")
async def startup():
    global _db, _settings
    if _db is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()
    _db = Database(_settings.db_full_path)


@app.on_event("shutdown")
async def shutdown():
    if _db:
        _db.close()


def _words_from_body(body: dict) -> list[str]:
    words = body.get("words")
    if not isinstance(words, list) or not all(isinstance(w, str) for w in words):
        raise HTTPException(400, "words must be a list of strings")
    words = [w.strip() for w in words if w.strip()]
    if not words:
        raise HTTPException(400, "No words provided")
    return words


# ── API: Import ───────────────────────────────────────────────────────────

@app.post("/api/import")
async def api_import(file: UploadFile = File(...)):
    s = get_settings()
    data = await file.read(s.max_upload_bytes + 1)
    if len(data) > s.max_upload_bytes:
        raise HTTPException(413, "Fichier trop volumineux")
    try:
        result = extract_words_from_file(file.filename or "", data)
    except UnsupportedFormat as e:
        raise HTTPException(415, str(e))
    except InvalidDocument as e:
        _log.warning("Invalid document %s: %s", file.filename, e)
        raise HTTPException(422, "Fichier invalide")
    return result.to_dict()


# ── API: Word lists ───────────────────────────────────────────────────────

@app.post("/api/lists")
async def api_create_list(request: Request):
    body = await request.json()
    title = (body.get("title") or "").strip()
    if not title:
        raise HTTPException(400, "No title provided")
    words = _words_from_body(body)
    try:
        return get_db().create_word_list(
            body.get("owner_id"),
            title,
            body.get("mode", "flashcard"),
            words,
            description=body.get("description"),
        )
    except ValueError as e:
        raise HTTPException(400, str(e))


@app.get("/api/lists/{share_code}")
async def api_get_list(share_code: str):
    word_list = get_db().find_list_by_share_code(share_code)
    if word_list is None:
        raise HTTPException(404, "List not found")
    return word_list


@app.delete("/api/lists/{share_code}")
async def api_delete_list(share_code: str):
    db = get_db()
    word_list = db.find_list_by_share_code(share_code)
    if word_list is None:
        raise HTTPException(404, "List not found")
    db.delete_word_list(word_list["id"])
    return {"deleted": word_list["share_code"]}


@app.get("/api/owners/{owner_id}/lists")
async def api_owner_lists(owner_id: str):
    return get_db().get_lists_by_owner(owner_id)


@app.get("/api/lists/{share_code}/sessions")
async def api_list_sessions(share_code: str):
    db = get_db()
    word_list = db.find_list_by_share_code(share_code)
    if word_list is None:
        raise HTTPException(404, "List not found")
    sessions = db.get_sessions(word_list["id"])
    for session in sessions:
        session["attempts"] = db.get_session_attempts(session["id"])
    return sessions


# ── API: Drills ───────────────────────────────────────────────────────────

@app.post("/api/dictation")
async def api_dictation(request: Request):
    body = await request.json()
    words = _words_from_body(body)
    s = get_settings()
    if body.get("remote") and s.api_key:
        generated = await generate_text_with_ai(
            words,
            s.api_key,
            llm=_get_llm(),
            timeout=s.remote_timeout,
            max_words=s.max_dictation_words,
            rng=_rng,
        )
    else:
        generated = TextSynthesizer(rng=_rng, max_words=s.max_dictation_words).generate(words)
    return generated.to_dict()


@app.post("/api/dictation/check")
async def api_dictation_check(request: Request):
    body = await request.json()
    try:
        generated = GeneratedText.from_dict(body["generated"])
    except (KeyError, TypeError) as e:
        raise HTTPException(400, f"Invalid generated text: {e}")
    attempts = check_blanks(generated, body.get("answers") or [])
    return {
        "results": [asdict(a) for a in attempts],
        "correct": sum(a.is_correct for a in attempts),
        "total": len(attempts),
    }


@app.post("/api/spelling-choices")
async def api_spelling_choices(request: Request):
    words = _words_from_body(await request.json())
    return [asdict(spelling_choice(w, _rng)) for w in words]


@app.post("/api/spelling-errors")
async def api_spelling_errors(request: Request):
    body = await request.json()
    word = (body.get("word") or "").strip()
    if not word:
        raise HTTPException(400, "No word provided")
    count = int(body.get("count", get_settings().spelling_error_count))
    return {"word": word, "errors": spelling_errors(word, count)}


@app.post("/api/variants")
async def api_variants(request: Request):
    body = await request.json()
    word = (body.get("word") or "").strip()
    if not word:
        raise HTTPException(400, "No word provided")
    return {"word": word, "variants": sorted(word_variants(word))}


@app.post("/api/check")
async def api_check(request: Request):
    body = await request.json()
    word = (body.get("word") or "").strip()
    if not word:
        raise HTTPException(400, "No word provided")
    answer = body.get("answer") or ""
    strict = body.get("strict_accents", True)
    return {
        "correct": is_correct_answer(word, answer, strict_accents=strict),
        "variants": sorted(word_variants(word)),
    }


# ── API: Sessions ─────────────────────────────────────────────────────────

@app.post("/api/sessions")
async def api_record_session(request: Request):
    body = await request.json()
    db = get_db()
    try:
        attempts = [
            WordAttempt(word=a["word"], user_answer=a.get("user_answer", ""), is_correct=bool(a["is_correct"]))
            for a in body.get("attempts", [])
        ]
        summary = SessionSummary(
            list_id=int(body["list_id"]),
            total_words=int(body["total_words"]),
            correct_words=int(body["correct_words"]),
            time_spent_seconds=int(body.get("time_spent_seconds", 0)),
            mode_used=body.get("mode_used", "audio"),
            student_name=body.get("student_name"),
            chrono_time_seconds=body.get("chrono_time_seconds"),
            attempts=attempts,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(400, f"Invalid session: {e}")
    if db.get_word_list(summary.list_id) is None:
        raise HTTPException(404, "List not found")
    session_id = db.record_session(summary)
    return {"id": session_id, "percentage": summary.percentage}


# ── API: Settings ─────────────────────────────────────────────────────────

@app.get("/api/settings")
async def api_get_settings():
    return get_settings().to_dict(include_secrets=False)


@app.put("/api/settings")
async def api_update_settings(request: Request):
    body = await request.json()
    s = get_settings()
    known = {f.name for f in Settings.__dataclass_fields__.values()}
    for k, v in body.items():
        if k in known:
            setattr(s, k, v)
    save_settings(s)
    return s.to_dict(include_secrets=False)

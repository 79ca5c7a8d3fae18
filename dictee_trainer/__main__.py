"""CLI entry point for dictee-trainer.

Usage:
  python -m dictee_trainer serve [--port PORT] [--host HOST]
  python -m dictee_trainer stop
  python -m dictee_trainer restart [--port PORT]
  python -m dictee_trainer status
  python -m dictee_trainer import FILE
  python -m dictee_trainer dictation WORD [WORD ...] [--remote]
  python -m dictee_trainer choices WORD [WORD ...]
"""
from __future__ import annotations

import asyncio
import os
import signal
import sys
from pathlib import Path

PID_FILE = Path(__file__).resolve().parent.parent / ".server.pid"


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "stop":
        _stop()
    elif command == "restart":
        _restart(args[1:])
    elif command == "status":
        _status()
    elif command == "import":
        _import_file(args[1:])
    elif command == "dictation":
        _dictation(args[1:])
    elif command == "choices":
        _choices(args[1:])
    else:
        print(f"Unknown command: {command}")
        print("Commands: serve, stop, restart, status, import, dictation, choices")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str) -> str:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _positional(args: list[str]) -> list[str]:
    return [a for a in args if not a.startswith("--")]


def _read_pid() -> int | None:
    """Read PID from file, return None if stale or missing."""
    if not PID_FILE.exists():
        return None
    try:
        pid = int(PID_FILE.read_text().strip())
        os.kill(pid, 0)
        return pid
    except (ValueError, ProcessLookupError, PermissionError):
        PID_FILE.unlink(missing_ok=True)
        return None


def _stop() -> bool:
    """Stop a running server. Returns True if a server was stopped."""
    pid = _read_pid()
    if pid is None:
        print("Server is not running.")
        return False
    try:
        os.kill(pid, signal.SIGTERM)
        print(f"Stopped server (PID {pid}).")
        PID_FILE.unlink(missing_ok=True)
        return True
    except ProcessLookupError:
        print("Server was not running (stale PID file removed).")
        PID_FILE.unlink(missing_ok=True)
        return False


def _status():
    pid = _read_pid()
    if pid is None:
        print("Server is not running.")
    else:
        print(f"Server is running (PID {pid}).")


def _restart(args: list[str]):
    import time
    _stop()
    time.sleep(1)
    _serve(args)


def _serve(args: list[str]):
    import uvicorn

    existing = _read_pid()
    if existing is not None:
        print(f"Server already running (PID {existing}). Use 'restart' or 'stop' first.")
        sys.exit(1)

    port = int(_parse_flag(args, "--port", "8765"))
    host = _parse_flag(args, "--host", "127.0.0.1")
    PID_FILE.write_text(str(os.getpid()))

    print(f"Starting Dictée Trainer on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")
    try:
        uvicorn.run(
            "dictee_trainer.app:app",
            host=host,
            port=port,
            reload=False,
            timeout_graceful_shutdown=5,
        )
    finally:
        PID_FILE.unlink(missing_ok=True)


def _import_file(args: list[str]):
    from dictee_trainer.errors import DocumentError
    from dictee_trainer.importer import extract_words_from_path

    files = _positional(args)
    if not files:
        print("Usage: import FILE")
        sys.exit(1)
    path = Path(files[0])
    if not path.exists():
        print(f"File not found: {path}")
        sys.exit(1)

    try:
        result = extract_words_from_path(path)
    except DocumentError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if not result.words:
        print("No words found in this document.")
        return
    if result.has_multiple_sections:
        print(f"{len(result.sections)} lists detected:")
        for section in result.sections:
            print(f"\n  {section.title} ({len(section.words)} words)")
            print("    " + ", ".join(section.words))
    else:
        print(f"{len(result.words)} words:")
        print("  " + ", ".join(result.words))


def _dictation(args: list[str]):
    from dictee_trainer.config import load_settings
    from dictee_trainer.providers.base import create_provider
    from dictee_trainer.remote_synthesis import generate_text_with_ai
    from dictee_trainer.text_generator import generate_text_with_blanks

    words = _positional(args)
    if not words:
        print("Usage: dictation WORD [WORD ...] [--remote]")
        sys.exit(1)

    if "--remote" in args:
        settings = load_settings()
        llm = None
        if settings.api_key:
            llm = create_provider(settings.llm_provider, settings.api_key, settings.llm_model, settings.llm_base_url)
        generated = asyncio.run(generate_text_with_ai(
            words,
            settings.api_key,
            llm=llm,
            timeout=settings.remote_timeout,
            max_words=settings.max_dictation_words,
        ))
    else:
        generated = generate_text_with_blanks(words)

    print(generated.full_text)
    print()
    print(generated.display_text)
    print()
    for blank in generated.blanks:
        print(f"  @{blank.position:<4d} {blank.word} ({blank.original_word})")


def _choices(args: list[str]):
    from dictee_trainer.morphology import spelling_choice

    words = _positional(args)
    if not words:
        print("Usage: choices WORD [WORD ...]")
        sys.exit(1)
    for word in words:
        choice = spelling_choice(word)
        left, right = (choice.correct, choice.wrong) if choice.position == "left" else (choice.wrong, choice.correct)
        print(f"  {word:20s} {left:20s} | {right}")


if __name__ == "__main__":
    main()

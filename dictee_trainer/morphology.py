"""Inflected forms and plausible misspellings of French vocabulary words."""
from __future__ import annotations

import random
import re
import unicodedata
from typing import TYPE_CHECKING

from dictee_trainer.lexicon import (
    ACCENTS,
    COMMON_MISSPELLINGS,
    CONSONANTS,
    DOUBLE_CONSONANTS,
    HOMOPHONES,
    PHONETIC_CONFUSIONS,
    SUFFIX_CONFUSIONS,
)
from dictee_trainer.models import SpellingChoice, WordAttempt

if TYPE_CHECKING:
    from dictee_trainer.models import GeneratedText

_VARIANT_MARKER = re.compile(r"^(.+?)\s*\(([^()]+)\)$")

# How many sound-alike candidates one matching sound may contribute.
MAX_PHONETIC_PER_SOUND = 2


def split_variant_marker(word: str) -> tuple[str, str | None]:
    """Split ``"absent(e)"`` into ``("absent", "e")``; plain words give ``(word, None)``."""
    m = _VARIANT_MARKER.match(word.strip())
    if m:
        return m.group(1), m.group(2)
    return word, None


def base_form(word: str) -> str:
    return split_variant_marker(word)[0]


def word_variants(word: str) -> set[str]:
    """Every acceptable surface form of *word*.

    ``"absent(e)"`` gives absent, absente, absents, absentes.  Plain words go
    through adjective heuristics: dangereux → dangereuse, actif → active,
    premier → première, lourd → lourde/lourds/lourdes.  The input itself is
    always a member.
    """
    variants = {word}
    base, suffix = split_variant_marker(word)
    if suffix is not None:
        variants.update((base, base + suffix))
        if not base.endswith(("s", "x")):
            variants.update((base + "s", base + suffix + "s"))
        return variants

    if word.endswith("eux"):
        variants.add(word[:-1] + "se")
    elif word.endswith("if"):
        variants.add(word[:-1] + "ve")
    elif word.endswith("er"):
        variants.add(word[:-2] + "ère")
    elif word and not word.endswith(("e", "s")):
        variants.update((word + "e", word + "s", word + "es"))
    return variants


def choose_variant(word: str, role: str | None = None, rng: random.Random | None = None) -> str:
    """Pick the form of *word* to embed in generated prose.

    ``role="base"`` forces the canonical form, ``role="plural"`` prefers a
    plural form, anything else draws a random variant.
    """
    rng = rng or random
    base, suffix = split_variant_marker(word)
    if role == "base":
        return base
    variants = sorted(word_variants(word))
    if suffix is not None:
        # the marker spelling itself is not prose
        variants = [v for v in variants if v != word]
    if role == "plural":
        if base.endswith(("s", "x")):
            return base
        plurals = [v for v in variants if v.endswith(("s", "x"))]
        preferred = base + "s"
        if preferred in plurals:
            return preferred
        return plurals[0] if plurals else base
    return rng.choice(variants)


def strip_accents(text: str) -> str:
    return "".join(ACCENTS.get(ch, ch) for ch in text)


def _match_case(candidate: str, model: str) -> str:
    if model[:1].isupper() and candidate:
        return candidate[0].upper() + candidate[1:]
    return candidate


def _suffix_candidates(lower: str) -> list[str]:
    for suffix, replacements in SUFFIX_CONFUSIONS:
        if lower.endswith(suffix) and len(lower) > len(suffix):
            stem = lower[: -len(suffix)]
            return [stem + r for r in replacements]
    return []


def _phonetic_candidates(lower: str) -> list[str]:
    out: list[str] = []
    for sound, alternatives in PHONETIC_CONFUSIONS:
        if sound not in lower:
            continue
        for alt in alternatives[:MAX_PHONETIC_PER_SOUND]:
            out.append(lower.replace(sound, alt, 1))
    return out


def _silent_letter_candidates(lower: str) -> list[str]:
    if len(lower) <= 3 or not lower.endswith(("t", "d", "s")):
        return []
    if lower.endswith("s") and lower.endswith(("ous", "ais")):
        return []
    return [lower[:-1]]


def spelling_errors(word: str, count: int = 3) -> list[str]:
    """Plausible misspellings of *word*, most realistic first.

    Ranking: suffix confusion (first matching ending only), homophones and
    known misspellings, accent stripping, sound-alike substitutions and
    dropped silent final letters, then doubled-consonant reduction and naive
    plural.  Results are unique, differ from *word* case-insensitively and
    are longer than one character.  May be empty for very short words; use
    :func:`fallback_error` then.
    """
    lower = word.strip().lower()
    if not lower or count <= 0:
        return []

    candidates: list[str] = []
    candidates += _suffix_candidates(lower)
    candidates += HOMOPHONES.get(lower, ())
    candidates += COMMON_MISSPELLINGS.get(lower, ())
    stripped = strip_accents(lower)
    if stripped != lower:
        candidates.append(stripped)
    candidates += _phonetic_candidates(lower)
    candidates += _silent_letter_candidates(lower)
    for dc in DOUBLE_CONSONANTS:
        if dc in lower:
            candidates.append(lower.replace(dc, dc[0], 1))
    if len(lower) > 2 and not lower.endswith(("s", "x")):
        candidates.append(lower + "s")

    seen = {lower}
    errors: list[str] = []
    for c in candidates:
        if len(c) <= 1 or c in seen:
            continue
        seen.add(c)
        errors.append(_match_case(c, word.strip()))
        if len(errors) >= count:
            break
    return errors


def fallback_error(word: str, rng: random.Random | None = None) -> str:
    """A misspelling that is guaranteed to differ from *word*."""
    rng = rng or random

    def double_consonant() -> str:
        for i, ch in enumerate(word):
            if ch.lower() in CONSONANTS:
                return word[: i + 1] + ch + word[i + 1:]
        return word

    def drop_letter() -> str:
        if len(word) > 3:
            i = rng.randint(1, len(word) - 2)
            return word[:i] + word[i + 1:]
        return word

    def toggle_accent() -> str:
        if "e" in word:
            return word.replace("e", "é", 1)
        if "é" in word:
            return word.replace("é", "e", 1)
        return word

    strategy = rng.choice((double_consonant, drop_letter, toggle_accent))
    result = strategy()
    return result if result != word else word + "s"


def spelling_choice(word: str, rng: random.Random | None = None) -> SpellingChoice:
    rng = rng or random
    errors = spelling_errors(word, 1)
    wrong = errors[0] if errors else fallback_error(word, rng)
    return SpellingChoice(
        word=word,
        correct=word,
        wrong=wrong,
        position=rng.choice(("left", "right")),
    )


# ── Answer checking ───────────────────────────────────────────────────────

def normalize_answer(text: str) -> str:
    """Lowercase, trim and drop accents: "  Élève " → "eleve"."""
    decomposed = unicodedata.normalize("NFD", text.strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def is_correct_answer(word: str, answer: str, strict_accents: bool = True) -> bool:
    """True when *answer* spells any acceptable variant of *word*."""
    answer = answer.strip()
    if not answer:
        return False
    if strict_accents:
        target = answer.lower()
        return any(v.lower() == target for v in word_variants(word))
    target = normalize_answer(answer)
    return any(normalize_answer(v) == target for v in word_variants(word))


def find_source_word(surface: str, words: list[str]) -> str | None:
    """Map an embedded surface form back to the vocabulary entry it came from."""
    target = surface.lower()
    for w in words:
        if any(v.lower() == target for v in word_variants(w)):
            return w
    return None


def check_blanks(generated: GeneratedText, answers: list[str]) -> list[WordAttempt]:
    """Score a fill-in-the-blank submission; missing answers count as wrong."""
    attempts = []
    for i, blank in enumerate(generated.blanks):
        given = answers[i].strip() if i < len(answers) and answers[i] else ""
        correct = bool(given) and given.lower() == blank.word.lower()
        attempts.append(WordAttempt(word=blank.original_word, user_answer=given, is_correct=correct))
    return attempts

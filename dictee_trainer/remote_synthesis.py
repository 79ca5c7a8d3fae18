"""Dictation text from a remote language model, with local fallback.

The remote path is best effort: no key, a network error, a timeout or an
empty reply all fall back to :class:`TextSynthesizer`, and a word
the model did not use is simply left without a blank.
"""
from __future__ import annotations

import asyncio
import logging
import random
import re
from typing import TYPE_CHECKING

from dictee_trainer.errors import RemoteSynthesisFailure
from dictee_trainer.models import Blank, GeneratedText
from dictee_trainer.morphology import base_form, word_variants
from dictee_trainer.prompts import DICTATION_SYSTEM_PROMPT, build_dictation_prompt
from dictee_trainer.text_generator import MAX_WORDS, TextSynthesizer, mask_blanks

if TYPE_CHECKING:
    from dictee_trainer.providers.base import LLMProvider

_log = logging.getLogger("dictee_trainer.remote")

DEFAULT_TIMEOUT = 20.0

QUOTE_PAIRS = (("«", "»"), ('"', '"'), ("“", "”"))


def clean_response(text: str) -> str:
    """Drop reasoning blocks, code fences and wrapping quotes from a reply."""
    text = re.sub(r"<think>.*?</think>", "", text, flags=re.DOTALL)
    text = re.sub(r"^```[a-zA-Z]*\s*\n?|\n?```\s*$", "", text.strip())
    text = text.strip()
    for opening, closing in QUOTE_PAIRS:
        inner = text[len(opening):-len(closing)]
        if (len(text) > len(opening) + len(closing) and text.startswith(opening) and text.endswith(closing)
                and opening not in inner and closing not in inner):
            return inner.strip()
    return text


def _variant_order(word: str) -> list[str]:
    base = base_form(word)
    others = sorted((v for v in word_variants(word) if v not in (word, base)), key=lambda v: (-len(v), v))
    return [base, *others]


def _find_free(text: str, variant: str, claimed: list[tuple[int, int]]) -> re.Match | None:
    pattern = re.compile(rf"(?<!\w){re.escape(variant)}(?!\w)", re.IGNORECASE)
    for m in pattern.finditer(text):
        if not any(m.start() < end and start < m.end() for start, end in claimed):
            return m
    return None


def reconcile_text(text: str, words: list[str]) -> GeneratedText:
    """Locate each vocabulary word (any variant, whole word, any case) in *text*."""
    blanks: list[Blank] = []
    claimed: list[tuple[int, int]] = []
    for word in words:
        for variant in _variant_order(word):
            m = _find_free(text, variant, claimed)
            if m:
                blanks.append(Blank(word=m.group(0), original_word=word, position=m.start()))
                claimed.append(m.span())
                break
        else:
            _log.info("  '%s' not found in generated text, no blank", word)

    blanks.sort(key=lambda b: b.position)
    return GeneratedText(full_text=text, display_text=mask_blanks(text, blanks), blanks=blanks)


async def _request_text(llm: LLMProvider, words: list[str], timeout: float) -> str:
    try:
        response = await asyncio.wait_for(
            llm.generate(build_dictation_prompt(words), temperature=0.7, system=DICTATION_SYSTEM_PROMPT),
            timeout,
        )
    except asyncio.TimeoutError as e:
        raise RemoteSynthesisFailure(f"no reply after {timeout:.0f}s") from e
    except Exception as e:
        raise RemoteSynthesisFailure(f"{type(e).__name__}: {e}") from e

    text = clean_response(response or "")
    if not text:
        raise RemoteSynthesisFailure("empty reply")
    return text


async def generate_text_with_ai(
    words: list[str],
    api_key: str | None,
    llm: LLMProvider | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    max_words: int = MAX_WORDS,
    rng: random.Random | None = None,
) -> GeneratedText:
    """Generate a dictation remotely, falling back to local templates.

    Without *api_key* no request is made.  *llm* defaults to the DeepSeek
    provider built from the key.
    """
    if not api_key:
        return TextSynthesizer(rng=rng, max_words=max_words).generate(words)

    words = [w.strip() for w in words if w and w.strip()][:max_words]
    if llm is None:
        from dictee_trainer.providers.llm_deepseek import DeepSeekProvider
        llm = DeepSeekProvider(api_key=api_key)

    try:
        _log.info("Remote dictation with %s (%d words)", llm.name(), len(words))
        text = await _request_text(llm, words, timeout)
    except RemoteSynthesisFailure as e:
        _log.warning("Remote dictation failed (%s), using local templates", e)
        return TextSynthesizer(rng=rng, max_words=max_words).generate(words)

    result = reconcile_text(text, words)
    _log.info("  %d/%d word(s) placed", len(result.blanks), len(words))
    return result

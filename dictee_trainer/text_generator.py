"""Local dictation synthesis: a short story embedding every vocabulary word.

The story is assembled from a template, then every embedded word is
located again in the final text so that each Blank's ``position`` points
exactly at its ``word`` in ``full_text``.
"""
from __future__ import annotations

import logging
import random

from dictee_trainer.models import Blank, GeneratedText
from dictee_trainer.morphology import choose_variant
from dictee_trainer.templates import FILLER_SENTENCES, STORY_TEMPLATES, StoryTemplate, TemplateSentence

log = logging.getLogger("dictee_trainer.synth")

MAX_WORDS = 10
BLANK_CHAR = "_"
MIN_BLANK_WIDTH = 5


def mask_blanks(full_text: str, blanks: list[Blank]) -> str:
    """Replace every blank span with underscores (at least five).

    Applied from the last blank to the first so earlier offsets stay valid.
    """
    display = full_text
    for blank in sorted(blanks, key=lambda b: b.position, reverse=True):
        end = blank.position + len(blank.word)
        display = display[: blank.position] + BLANK_CHAR * max(MIN_BLANK_WIDTH, len(blank.word)) + display[end:]
    return display


def locate_words(full_text: str, embedded: list[tuple[str, str, int]]) -> list[Blank]:
    """Find each ``(form, original, earliest)`` in *full_text*, left to right.

    The search cursor moves past every match, so a word repeated in the
    text, or contained in another, resolves to distinct increasing
    positions.  *earliest* is the lowest offset the form may start at.
    """
    blanks: list[Blank] = []
    cursor = 0
    for form, original, earliest in embedded:
        pos = full_text.find(form, max(cursor, earliest))
        if pos < 0:
            log.warning("Embedded form %r not found after offset %d", form, cursor)
            continue
        blanks.append(Blank(word=form, original_word=original, position=pos))
        cursor = pos + len(form)
    return blanks


class TextSynthesizer:
    def __init__(
        self,
        templates: tuple[StoryTemplate, ...] = STORY_TEMPLATES,
        fillers: tuple[TemplateSentence, ...] = FILLER_SENTENCES,
        rng: random.Random | None = None,
        max_words: int = MAX_WORDS,
    ):
        if not templates or not fillers:
            raise ValueError("at least one template and one filler sentence are required")
        self.templates = templates
        self.fillers = fillers
        self.rng = rng or random.Random()
        self.max_words = max_words

    def generate(self, words: list[str]) -> GeneratedText:
        order = [w.strip() for w in words if w and w.strip()][: self.max_words]
        self.rng.shuffle(order)
        if not order:
            return GeneratedText(full_text="", display_text="", blanks=[])

        template = self.rng.choice(self.templates)
        slots = [template.intro, *template.middle][: len(order)]
        extra = order[len(slots):]
        slots += [self.fillers[i % len(self.fillers)] for i in range(len(extra))]

        sentences: list[str] = []
        embedded: list[tuple[str, str, int]] = []
        offset = 0
        for sentence, word in zip(slots, order):
            form = choose_variant(word, sentence.role, self.rng)
            embedded.append((form, word, offset + sentence.slot_offset))
            filled = sentence.fill(form)
            sentences.append(filled)
            offset += len(filled) + 1
        sentences.append(template.closing)

        full_text = " ".join(sentences)
        blanks = locate_words(full_text, embedded)
        log.info("Synthesized '%s' story: %d word(s), %d filler(s)", template.name, len(order), len(extra))
        return GeneratedText(
            full_text=full_text,
            display_text=mask_blanks(full_text, blanks),
            blanks=sorted(blanks, key=lambda b: b.position),
        )


def generate_text_with_blanks(words: list[str], rng: random.Random | None = None) -> GeneratedText:
    return TextSynthesizer(rng=rng).generate(words)

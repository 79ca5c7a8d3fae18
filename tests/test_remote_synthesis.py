"""Tests for remote dictation generation and its local fallback."""
from __future__ import annotations

import asyncio
import random

import httpx
import pytest

from dictee_trainer.prompts import DICTATION_SYSTEM_PROMPT, build_dictation_prompt, format_word_hints
from dictee_trainer.remote_synthesis import clean_response, generate_text_with_ai, reconcile_text


class FakeLLM:
    """Fake LLM returning a fixed reply and recording prompts."""

    def __init__(self, reply: str = "", delay: float = 0.0, error: Exception | None = None):
        self.reply = reply
        self.delay = delay
        self.error = error
        self.prompts: list[str] = []
        self.systems: list[str | None] = []

    async def generate(self, prompt: str, temperature: float = 0.7, system: str | None = None) -> str:
        self.prompts.append(prompt)
        self.systems.append(system)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.reply

    def name(self) -> str:
        return "fake-llm"


def _assert_exact(generated):
    for blank in generated.blanks:
        assert generated.full_text[blank.position:blank.position + len(blank.word)] == blank.word


class TestCleanResponse:
    def test_think_and_fences(self):
        raw = "<think>je réfléchis</think>\n```text\nLe chat dort.\n```"
        assert clean_response(raw) == "Le chat dort."

    def test_quotes(self):
        assert clean_response("« Le chat dort. »") == "Le chat dort."
        assert clean_response('"Le chat dort."') == "Le chat dort."

    def test_inner_quotes_kept(self):
        assert clean_response('Le chat a dit "miaou"') == 'Le chat a dit "miaou"'
        assert clean_response("« Viens ! » cria Léa.") == "« Viens ! » cria Léa."
        assert clean_response('"Viens", dit-elle, "vite"') == '"Viens", dit-elle, "vite"'


class TestReconcile:
    def test_variants_and_case(self):
        text = "Chat et chien jouent. Une bête dangereuse rôde près de la maison."
        g = reconcile_text(text, ["chat", "dangereux", "maison"])
        assert [(b.word, b.original_word) for b in g.blanks] == [
            ("Chat", "chat"),
            ("dangereuse", "dangereux"),
            ("maison", "maison"),
        ]
        _assert_exact(g)
        assert "dangereuse" not in g.display_text
        assert g.display_text.startswith("_____ et chien")

    def test_whole_word_only(self):
        text = "Le chaton joue avec le chat."
        g = reconcile_text(text, ["chat"])
        assert g.blanks[0].position == text.rindex("chat")

    def test_missing_word_omitted(self):
        g = reconcile_text("Le chat dort.", ["chat", "girafe"])
        assert [b.original_word for b in g.blanks] == ["chat"]

    def test_repeated_entries_use_distinct_occurrences(self):
        text = "Un chat noir croise un autre chat."
        g = reconcile_text(text, ["chat", "chat"])
        assert [b.position for b in g.blanks] == [3, text.rindex("chat")]

    def test_sorted_by_position(self):
        g = reconcile_text("La lune éclaire le jardin.", ["jardin", "lune"])
        assert [b.word for b in g.blanks] == ["lune", "jardin"]


class TestPrompts:
    def test_word_hints(self):
        hints = format_word_hints(["absent(e)", "table"])
        assert hints.splitlines() == [
            "- absent (formes possibles : absente, absentes, absents)",
            "- table",
        ]

    def test_prompt_counts_words(self):
        prompt = build_dictation_prompt(["chat", "table"])
        assert "(2)" in prompt
        assert "- table" in prompt


class TestGenerateTextWithAI:
    @pytest.mark.asyncio
    async def test_no_key_stays_local(self):
        llm = FakeLLM("Le chat dort.")
        g = await generate_text_with_ai(["chat", "lune"], None, llm=llm, rng=random.Random(1))
        assert llm.prompts == []
        assert len(g.blanks) == 2
        _assert_exact(g)

    @pytest.mark.asyncio
    async def test_remote_success(self):
        llm = FakeLLM("Le chat regarde la lune depuis la fenêtre.")
        g = await generate_text_with_ai(["chat", "lune"], "key", llm=llm)
        assert g.full_text == "Le chat regarde la lune depuis la fenêtre."
        assert [b.word for b in g.blanks] == ["chat", "lune"]
        assert llm.systems == [DICTATION_SYSTEM_PROMPT]
        _assert_exact(g)

    @pytest.mark.asyncio
    async def test_transport_error_falls_back(self):
        request = httpx.Request("POST", "https://api.deepseek.com/chat/completions")
        llm = FakeLLM(error=httpx.ConnectError("refused", request=request))
        g = await generate_text_with_ai(["chat", "lune"], "key", llm=llm, rng=random.Random(2))
        assert len(llm.prompts) == 1
        assert len(g.blanks) == 2
        _assert_exact(g)

    @pytest.mark.asyncio
    async def test_any_error_falls_back(self):
        llm = FakeLLM(error=RuntimeError("boom"))
        g = await generate_text_with_ai(["chat"], "key", llm=llm)
        assert len(g.blanks) == 1

    @pytest.mark.asyncio
    async def test_timeout_falls_back(self):
        llm = FakeLLM("Le chat dort.", delay=1.0)
        g = await generate_text_with_ai(["chat", "lune"], "key", llm=llm, timeout=0.05)
        assert g.full_text != "Le chat dort."
        assert len(g.blanks) == 2

    @pytest.mark.asyncio
    async def test_empty_reply_falls_back(self):
        llm = FakeLLM("```\n```")
        g = await generate_text_with_ai(["chat"], "key", llm=llm)
        assert len(g.blanks) == 1
        assert g.full_text

    @pytest.mark.asyncio
    async def test_capped_before_request(self):
        words = [f"mot{c}" for c in "abcdefghijkl"]
        llm = FakeLLM("Rien à voir.")
        g = await generate_text_with_ai(words, "key", llm=llm, max_words=10)
        assert "(10)" in llm.prompts[0]
        assert "motk" not in llm.prompts[0]
        assert g.blanks == []

    @pytest.mark.asyncio
    async def test_words_trimmed_before_request(self):
        llm = FakeLLM("Le chat dort.")
        g = await generate_text_with_ai(["  chat "], "key", llm=llm)
        assert "- chat (formes possibles" in llm.prompts[0]
        assert g.blanks[0].original_word == "chat"

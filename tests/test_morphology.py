"""Tests for inflected forms, misspellings and answer checking."""
from __future__ import annotations

import random

import pytest

from dictee_trainer.models import Blank, GeneratedText
from dictee_trainer.morphology import (
    base_form,
    check_blanks,
    choose_variant,
    fallback_error,
    find_source_word,
    is_correct_answer,
    normalize_answer,
    spelling_choice,
    spelling_errors,
    split_variant_marker,
    strip_accents,
    word_variants,
)


class TestVariantMarker:
    def test_split(self):
        assert split_variant_marker("absent(e)") == ("absent", "e")
        assert split_variant_marker("ami (e)") == ("ami", "e")

    def test_plain_word(self):
        assert split_variant_marker("chat") == ("chat", None)
        assert base_form("chat") == "chat"

    def test_base_form(self):
        assert base_form("absent(e)") == "absent"


class TestWordVariants:
    def test_marker_with_plurals(self):
        assert word_variants("absent(e)") == {"absent(e)", "absent", "absente", "absents", "absentes"}

    def test_marker_base_already_plural(self):
        assert word_variants("gris(e)") == {"gris(e)", "gris", "grise"}

    def test_eux_feminine(self):
        assert "dangereuse" in word_variants("dangereux")

    def test_if_feminine(self):
        assert "active" in word_variants("actif")

    def test_er_feminine(self):
        assert word_variants("premier") == {"premier", "première"}

    def test_generic_inflection(self):
        assert word_variants("lourd") == {"lourd", "lourde", "lourds", "lourdes"}

    def test_ending_in_e_unchanged(self):
        assert word_variants("table") == {"table"}

    @pytest.mark.parametrize("word", ["a", "chat", "table", "absent(e)", "gris", "x", "peut-être"])
    def test_always_contains_input(self, word):
        assert word in word_variants(word)


class TestChooseVariant:
    def test_base_role(self):
        assert choose_variant("absent(e)", "base") == "absent"

    def test_plural_role(self):
        assert choose_variant("chat", "plural") == "chats"
        assert choose_variant("gris(e)", "plural") == "gris"
        assert choose_variant("absent(e)", "plural") == "absents"

    def test_random_never_returns_marker(self):
        rng = random.Random(0)
        for _ in range(50):
            assert choose_variant("absent(e)", rng=rng) in {"absent", "absente", "absents", "absentes"}

    def test_random_is_a_variant(self):
        rng = random.Random(3)
        for _ in range(20):
            assert choose_variant("dangereux", rng=rng) in {"dangereux", "dangereuse"}


class TestSpellingErrors:
    def test_suffix_confusion_dominates(self):
        assert spelling_errors("papier", 3) == ["papié", "papiez", "papiers"]

    def test_tion_suffix(self):
        assert spelling_errors("nation", 3) == ["nassion", "nasion", "nacions"]

    def test_only_first_suffix_rule(self):
        # "ier" matches before "er": no "papé"
        assert "papé" not in spelling_errors("papier", 10)

    def test_homophones(self):
        assert spelling_errors("et", 3) == ["est", "ai"]

    def test_accent_stripping(self):
        assert spelling_errors("élève", 1) == ["eleve"]

    def test_keeps_capital(self):
        assert spelling_errors("Papier", 1) == ["Papié"]

    def test_too_short_gives_nothing(self):
        assert spelling_errors("a", 3) == []

    def test_count_respected(self):
        assert len(spelling_errors("beaucoup", 2)) == 2

    def test_zero_or_negative_count(self):
        assert spelling_errors("papier", 0) == []
        assert spelling_errors("papier", -1) == []

    def test_silent_letter_skipped_after_ous(self):
        assert "nou" not in spelling_errors("nous", 10)

    def test_double_consonant_reduction(self):
        assert "balon" in spelling_errors("ballon", 10)

    @pytest.mark.parametrize("word", ["chat", "maison", "été", "Bonjour", "ballon", "et", "beaucoup", "arbre"])
    def test_never_the_word_itself(self, word):
        errors = spelling_errors(word, 5)
        assert all(e.lower() != word.lower() for e in errors)
        assert len(errors) == len(set(errors))
        assert all(len(e) > 1 for e in errors)


class TestFallbackError:
    @pytest.mark.parametrize("word", ["a", "x", "le", "chat", "été", "aeiou"])
    def test_differs_from_word(self, word):
        for seed in range(20):
            assert fallback_error(word, random.Random(seed)) != word


class TestSpellingChoice:
    def test_fields(self):
        choice = spelling_choice("papier", random.Random(5))
        assert choice.word == "papier"
        assert choice.correct == "papier"
        assert choice.wrong == "papié"
        assert choice.position in ("left", "right")

    def test_short_word_uses_fallback(self):
        choice = spelling_choice("a", random.Random(1))
        assert choice.wrong != "a"

    def test_both_positions_occur(self):
        rng = random.Random(42)
        positions = {spelling_choice("chat", rng).position for _ in range(40)}
        assert positions == {"left", "right"}


class TestAnswerChecking:
    def test_strip_accents(self):
        assert strip_accents("où êtes-vous ?") == "ou etes-vous ?"

    def test_normalize(self):
        assert normalize_answer("  Élève ") == "eleve"

    def test_variant_accepted(self):
        assert is_correct_answer("absent(e)", "Absente")
        assert is_correct_answer("dangereux", "dangereuse")

    def test_wrong_answer(self):
        assert not is_correct_answer("chat", "chien")
        assert not is_correct_answer("chat", "   ")

    def test_accents_strict_by_default(self):
        assert not is_correct_answer("élève", "eleve")
        assert is_correct_answer("élève", "eleve", strict_accents=False)

    def test_find_source_word(self):
        words = ["chat", "dangereux"]
        assert find_source_word("Dangereuse", words) == "dangereux"
        assert find_source_word("girafe", words) is None

    def test_check_blanks(self):
        generated = GeneratedText(
            full_text="Le chat voit une bête dangereuse.",
            display_text="Le _____ voit une bête __________.",
            blanks=[Blank("chat", "chat", 3), Blank("dangereuse", "dangereux", 22)],
        )
        attempts = check_blanks(generated, ["Chat ", "dangereux"])
        assert [a.word for a in attempts] == ["chat", "dangereux"]
        assert [a.is_correct for a in attempts] == [True, False]
        assert attempts[0].user_answer == "Chat"

    def test_check_blanks_missing_answers(self):
        generated = GeneratedText("Le chat.", "Le _____.", [Blank("chat", "chat", 3)])
        attempts = check_blanks(generated, [])
        assert len(attempts) == 1
        assert not attempts[0].is_correct
        assert attempts[0].user_answer == ""

"""Tests for answer checking."""
from __future__ import annotations

from verb_drill.answers import check_answer
from verb_drill.models import Exercise


def _exercise(tense="pps", answer="fiz", alt=None):
    return Exercise(
        id=f"fazer_{tense}_tu",
        infinitive="fazer",
        target_tense=tense,
        target_person="tu",
        correct_answer=answer,
        correct_answer_alt=alt,
        question="",
    )


class TestTypedAnswers:
    def test_exact(self):
        assert check_answer(_exercise(), "fiz")

    def test_case_and_whitespace(self):
        assert check_answer(_exercise(), "  FIZ ")

    def test_wrong(self):
        assert not check_answer(_exercise(), "fez")

    def test_alt_accepted(self):
        ex = _exercise("imperativo_positivo", "faz", "faze")
        assert check_answer(ex, "faze")
        assert check_answer(ex, "faz")

    def test_negative_imperative_with_or_without_nao(self):
        ex = _exercise("imperativo_negativo", "faças")
        assert check_answer(ex, "faças")
        assert check_answer(ex, "não faças")
        assert check_answer(ex, "Não Faças")
        assert not check_answer(ex, "não fazes")

    def test_negative_imperative_stored_with_nao(self):
        ex = _exercise("imperativo_negativo", "não faças")
        assert check_answer(ex, "faças")
        assert check_answer(ex, "não faças")

    def test_nao_prefix_only_for_negative_imperative(self):
        assert not check_answer(_exercise(), "não fiz")


class TestMultipleChoice:
    def test_exact_option(self):
        assert check_answer(_exercise(), "fiz", multiple_choice=True)

    def test_case_insensitive(self):
        assert check_answer(_exercise(), "Fiz", multiple_choice=True)

    def test_not_trimmed(self):
        assert not check_answer(_exercise(), " fiz", multiple_choice=True)

    def test_no_nao_leniency(self):
        ex = _exercise("imperativo_negativo", "faças")
        assert not check_answer(ex, "não faças", multiple_choice=True)

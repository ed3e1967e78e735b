"""Tests for data models."""
from __future__ import annotations

from verb_drill.models import Exercise, Verb

from conftest import FAZER_ROW


class TestVerb:
    def test_from_row(self):
        v = Verb.from_row(FAZER_ROW)
        assert v.infinitive == "fazer"
        assert v.form("presente_indicativo", "eu") == "faço"
        assert v.alt_form("imperativo_positivo", "tu") == "faze"
        assert v.participio_passado == "feito"
        assert v.participio_passado_alt is None

    def test_missing_cells_absent(self):
        v = Verb.from_row(FAZER_ROW)
        assert v.form("conjuntivo_futuro", "eu") is None
        assert ("conjuntivo_futuro", "eu") not in v.forms
        assert v.alt_form("presente_indicativo", "eu") is None

    def test_blank_cells_are_null(self):
        v = Verb.from_row({"infinitive": "ir", "presente_ind_eu": "  ", "participio_passado": ""})
        assert v.forms == {}
        assert v.participio_passado is None

    def test_unrelated_keys_ignored(self):
        v = Verb.from_row({"infinitive": "ir", "created_at": "2024-01-01", "presente_ind_eu": "vou"})
        assert v.forms == {("presente_indicativo", "eu"): "vou"}

    def test_to_row(self):
        v = Verb.from_row(FAZER_ROW)
        row = v.to_row()
        assert row["presente_ind_eu"] == "faço"
        assert row["imp_pos_tu_alt"] == "faze"
        assert "conj_fut_eu" not in row
        assert Verb.from_row(row) == Verb.from_row(FAZER_ROW)


class TestExercise:
    def _exercise(self):
        return Exercise(
            id="fazer_pps_eu",
            infinitive="fazer",
            target_tense="pps",
            target_person="eu",
            correct_answer="fiz",
            question='Conjugue o verbo "fazer" no Pretérito Perfeito Simples, eu',
        )

    def test_to_dict(self):
        d = self._exercise().to_dict()
        assert d["targetTense"] == "pps"
        assert d["correctAnswer"] == "fiz"
        assert d["correctAnswerAlt"] is None
        assert "multipleChoiceOptions" not in d

    def test_to_dict_with_options(self):
        ex = self._exercise()
        ex.multiple_choice_options = ["fiz", "fez", "faço", "fazia"]
        assert ex.to_dict()["multipleChoiceOptions"] == ["fiz", "fez", "faço", "fazia"]

    def test_from_dict(self):
        ex = self._exercise()
        assert Exercise.from_dict(ex.to_dict()) == ex

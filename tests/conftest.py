"""Shared test fixtures."""
from __future__ import annotations

import random

import pytest

from verb_drill.db import Database
from verb_drill.models import Exercise, Verb
from verb_drill.store import VerbStore
from verb_drill.tenses import PERSON_DISPLAY_NAMES, TENSE_DISPLAY_NAMES

FAZER_ROW = {
    "infinitive": "fazer",
    "presente_ind_eu": "faço",
    "presente_ind_tu": "fazes",
    "presente_ind_ele_ela": "faz",
    "presente_ind_nos": "fazemos",
    "presente_ind_vos": "fazeis",
    "presente_ind_eles_elas": "fazem",
    "pps_eu": "fiz",
    "pps_tu": "fizeste",
    "pps_ele_ela": "fez",
    "pps_nos": "fizemos",
    "pps_vos": "fizestes",
    "pps_eles_elas": "fizeram",
    "pret_imp_eu": "fazia",
    "pret_imp_tu": "fazias",
    "pret_imp_ele_ela": "fazia",
    "pret_imp_nos": "fazíamos",
    "pret_imp_vos": "fazíeis",
    "pret_imp_eles_elas": "faziam",
    "imp_pos_tu": "faz",
    "imp_pos_tu_alt": "faze",
    "imp_pos_ele_ela": "faça",
    "imp_pos_nos": "façamos",
    "imp_pos_vos": "fazei",
    "imp_pos_eles_elas": "façam",
    "imp_neg_tu": "faças",
    "imp_neg_ele_ela": "faça",
    "imp_neg_nos": "façamos",
    "imp_neg_vos": "façais",
    "imp_neg_eles_elas": "façam",
    "fut_imp_eu": "farei",
    "fut_imp_tu": "farás",
    "fut_imp_ele_ela": "fará",
    "cond_pres_eu": "faria",
    "cond_pres_tu": "farias",
    "cond_pres_ele_ela": "faria",
    "conj_pres_eu": "faça",
    "conj_pres_tu": "faças",
    "conj_pres_ele_ela": "faça",
    "conj_pres_nos": "façamos",
    "conj_pres_vos": "façais",
    "conj_pres_eles_elas": "façam",
    "participio_passado": "feito",
    "participio_passado_alt": None,
}

SER_ROW = {
    "infinitive": "ser",
    "presente_ind_eu": "sou",
    "presente_ind_tu": "és",
    "presente_ind_ele_ela": "é",
    "presente_ind_nos": "somos",
    "presente_ind_eles_elas": "são",
    "pps_eu": "fui",
    "pps_tu": "foste",
    "pps_ele_ela": "foi",
    "pps_nos": "fomos",
    "pps_eles_elas": "foram",
    "imp_pos_tu": "sê",
    "imp_neg_tu": "sejas",
    "conj_pres_tu": "sejas",
    "participio_passado": "sido",
}

ESTAR_ROW = {
    "infinitive": "estar",
    "presente_ind_eu": "estou",
    "presente_ind_tu": "estás",
    "presente_ind_ele_ela": "está",
    "presente_ind_nos": "estamos",
    "presente_ind_eles_elas": "estão",
    "pps_eu": "estive",
    "pps_tu": "estiveste",
    "pps_ele_ela": "esteve",
    "participio_passado": "estado",
}

# Only one populated cell and no participle
SPARSE_ROW = {
    "infinitive": "xyzar",
    "presente_ind_eu": "xyz",
}


class MemoryVerbStore(VerbStore):
    """In-memory verb store with a seedable random source."""

    def __init__(self, verbs: list[Verb], seed: int = 0):
        self.verbs = {v.infinitive: v for v in verbs}
        self.rng = random.Random(seed)
        self.sample_calls: list[tuple[str, ...]] = []

    def get_all_verbs(self) -> list[Verb]:
        return [self.verbs[k] for k in sorted(self.verbs)]

    def get_verb_by_infinitive(self, infinitive: str) -> Verb | None:
        return self.verbs.get(infinitive)

    def sample_random_verb(self, excluding=()) -> Verb | None:
        excluded = tuple(excluding)
        self.sample_calls.append(excluded)
        pool = [v for v in self.get_all_verbs() if v.infinitive not in excluded]
        return self.rng.choice(pool) if pool else None

    def sample_other_verbs_with_participle(self, excluding: str, limit: int = 10) -> list[Verb]:
        pool = [
            v for v in self.get_all_verbs()
            if v.infinitive != excluding and v.participio_passado
        ]
        self.rng.shuffle(pool)
        return pool[:limit]


def make_exercise(verb: Verb, tense: str, person: str) -> Exercise:
    """Exercise for a populated (tense, person) cell of *verb*."""
    if tense == "participio_passado":
        return Exercise(
            id=f"{verb.infinitive}_participio_passado_participio",
            infinitive=verb.infinitive,
            target_tense=tense,
            target_person="eu",
            correct_answer=verb.participio_passado,
            correct_answer_alt=verb.participio_passado_alt,
            question=f'Qual é o particípio passado do verbo "{verb.infinitive}"?',
        )
    return Exercise(
        id=f"{verb.infinitive}_{tense}_{person}",
        infinitive=verb.infinitive,
        target_tense=tense,
        target_person=person,
        correct_answer=verb.form(tense, person),
        correct_answer_alt=verb.alt_form(tense, person),
        question=(
            f'Conjugue o verbo "{verb.infinitive}" no {TENSE_DISPLAY_NAMES[tense]}, '
            f"{PERSON_DISPLAY_NAMES[person]}"
        ),
    )


@pytest.fixture
def fazer():
    return Verb.from_row(FAZER_ROW)


@pytest.fixture
def sample_verbs():
    """fazer, ser and estar (decreasingly complete) plus a one-cell verb."""
    return [Verb.from_row(r) for r in (FAZER_ROW, SER_ROW, ESTAR_ROW, SPARSE_ROW)]


@pytest.fixture
def memory_store(sample_verbs):
    return MemoryVerbStore(sample_verbs)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def tmp_db(tmp_path):
    """Create a fresh temporary database."""
    db = Database(tmp_path / "test.db")
    yield db
    db.close()


@pytest.fixture
def populated_db(tmp_db, sample_verbs):
    """A database pre-loaded with the sample verbs."""
    tmp_db.import_verbs(sample_verbs)
    return tmp_db

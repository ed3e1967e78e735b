"""Multiple-choice distractors for conjugation exercises.

Candidates come from the tiers below, each used only when the previous ones
leave the option set short:

1. forms of the same verb that learners confuse with the target form
   (rules depend on the target tense and person);
2. a handful of other tenses of the same verb;
3. a fixed pool of very common irregular forms;
4. synthetic ``teste{n}`` placeholders.

Comparisons against the correct answer are exact (case-sensitive, untrimmed).
"""
from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from typing import TYPE_CHECKING

from verb_drill.tenses import CONJUGATED_TENSES, PARTICIPLE, persons_for_tense

if TYPE_CHECKING:
    from verb_drill.models import Exercise, Verb
    from verb_drill.store import VerbStore

_log = logging.getLogger("verb_drill.distractors")

DEFAULT_NUM_OPTIONS = 4
OTHER_VERBS_SAMPLE = 10

TOP_UP_TENSES = ("preterito_imperfeito", "futuro_imperfeito", "condicional_presente")
TOP_UP_PERSONS = ("eu", "tu", "ele_ela")

FALLBACK_POOL = [
    "sido", "feito", "dito", "visto", "dado", "vindo", "posto", "tido",
    "era", "foi", "está", "tinha", "faz", "vai", "vem", "dá", "diz", "pode",
]


def similarity_score(candidate: str, correct: str) -> float:
    """How much *candidate* looks like *correct*; higher is a better distractor."""
    a = candidate.lower()
    b = correct.lower()
    score = 0.0
    if len(a) == len(b):
        score += 2
    if a[-2:] == b[-2:]:
        score += 3
    if a[-3:] == b[-3:]:
        score += 1
    if a[:1] == b[:1]:
        score += 1
    score -= abs(len(a) - len(b)) * 0.5
    return score


def rank_candidates(candidates: Iterable[str], correct: str) -> list[str]:
    """Sort by descending similarity; ties keep their incoming order."""
    return sorted(candidates, key=lambda c: similarity_score(c, correct), reverse=True)


class _Candidates:
    """Ordered set of candidate forms that never admits the correct answer(s)."""

    def __init__(self, exercise: Exercise):
        self._blocked = {exercise.correct_answer}
        if exercise.correct_answer_alt:
            self._blocked.add(exercise.correct_answer_alt)
        self._items: dict[str, None] = {}

    def add(self, form: str | None) -> None:
        if form and form not in self._blocked:
            self._items.setdefault(form, None)

    def add_cell(self, verb: Verb, tense: str, person: str) -> None:
        self.add(verb.form(tense, person))
        self.add(verb.alt_form(tense, person))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, form: str) -> bool:
        return form in self._items or form in self._blocked

    def items(self) -> list[str]:
        return list(self._items)


def _participle_candidates(store: VerbStore, exercise: Exercise, cands: _Candidates) -> None:
    for other in store.sample_other_verbs_with_participle(exercise.infinitive, OTHER_VERBS_SAMPLE):
        cands.add(other.participio_passado)
        cands.add(other.participio_passado_alt)


def _same_person_candidates(
    verb: Verb, tenses: Iterable[str], person: str, cands: _Candidates
) -> None:
    for tense in tenses:
        cands.add_cell(verb, tense, person)


def _default_candidates(
    verb: Verb, exercise: Exercise, include_vos: bool, cands: _Candidates
) -> None:
    persons = persons_for_tense("presente_indicativo", include_vos)
    for tense in CONJUGATED_TENSES:
        if tense == exercise.target_tense:
            continue
        for person in persons:
            cands.add_cell(verb, tense, person)
    cands.add(verb.participio_passado)
    cands.add(verb.participio_passado_alt)


def _collect(
    store: VerbStore, verb: Verb | None, exercise: Exercise, include_vos: bool
) -> _Candidates:
    cands = _Candidates(exercise)
    tense, person = exercise.target_tense, exercise.target_person

    if tense == PARTICIPLE:
        _participle_candidates(store, exercise, cands)
        return cands
    if verb is None:
        return cands

    if tense == "imperativo_negativo":
        _same_person_candidates(
            verb, ("imperativo_positivo", "presente_indicativo", "pps"), "tu", cands
        )
    elif tense in ("imperativo_positivo", "conjuntivo_presente") and person == "tu":
        _same_person_candidates(
            verb, ("imperativo_negativo", "presente_indicativo", "pps"), "tu", cands
        )
    elif tense in ("imperativo_positivo", "conjuntivo_presente") and person == "ele_ela":
        # imperativo positivo and conjuntivo presente share the 3rd-person form
        tenses = ["presente_indicativo", "pps"]
        if tense != "imperativo_positivo":
            tenses.append("imperativo_positivo")
        _same_person_candidates(verb, tenses, "ele_ela", cands)
    else:
        _default_candidates(verb, exercise, include_vos, cands)
    return cands


def select_distractors(
    store: VerbStore,
    exercise: Exercise,
    num_options: int = DEFAULT_NUM_OPTIONS,
    include_vos: bool = False,
) -> list[str]:
    """Return exactly ``num_options - 1`` distinct wrong answers for *exercise*.

    None of them equals the exercise's correct answer or its alternative.
    """
    if num_options < 2:
        raise ValueError(f"num_options must be at least 2 (got {num_options})")
    wanted = num_options - 1

    verb = store.get_verb_by_infinitive(exercise.infinitive)
    if verb is None:
        _log.info("Verb '%s' not in store; using fallback distractors", exercise.infinitive)
    cands = _collect(store, verb, exercise, include_vos)

    if len(cands) < wanted and verb is not None:
        persons = list(TOP_UP_PERSONS)
        if include_vos:
            persons.append("vos")
        for tense in TOP_UP_TENSES:
            for person in persons:
                if len(cands) >= wanted:
                    break
                cands.add(verb.form(tense, person))

    distractors = rank_candidates(cands.items(), exercise.correct_answer)[:wanted]

    if len(distractors) < wanted:
        _log.info(
            "Only %d distractors for %s; topping up from the fallback pool",
            len(distractors), exercise.id,
        )
        for form in FALLBACK_POOL:
            if len(distractors) >= wanted:
                break
            if form not in cands and form not in distractors:
                distractors.append(form)

    n = 1
    while len(distractors) < wanted:
        placeholder = f"teste{n}"
        if placeholder not in cands and placeholder not in distractors:
            distractors.append(placeholder)
        n += 1

    return distractors


def multiple_choice_options(
    store: VerbStore,
    exercise: Exercise,
    num_options: int = DEFAULT_NUM_OPTIONS,
    include_vos: bool = False,
    *,
    rng: random.Random | None = None,
) -> list[str]:
    """The correct answer and its distractors, shuffled."""
    rng = rng or random.Random()
    options = [exercise.correct_answer, *select_distractors(store, exercise, num_options, include_vos)]
    rng.shuffle(options)
    return options

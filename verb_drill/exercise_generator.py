"""Pick a verb and a (tense, person) cell and turn it into a question."""
from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from verb_drill.models import Exercise
from verb_drill.tenses import (
    PARTICIPLE,
    PERSON_DISPLAY_NAMES,
    TENSE_DISPLAY_NAMES,
    persons_for_tense,
    validate_tenses,
)

if TYPE_CHECKING:
    from verb_drill.models import Verb
    from verb_drill.store import VerbStore

_log = logging.getLogger("verb_drill.exgen")

MAX_ATTEMPTS = 20
RECENT_VERBS_WINDOW = 10

# Participle questions have no person; the field is kept for a uniform shape.
PARTICIPLE_PERSON_PLACEHOLDER = "eu"


def _participle_exercise(verb: Verb) -> Exercise | None:
    if not verb.participio_passado:
        return None
    return Exercise(
        id=f"{verb.infinitive}_{PARTICIPLE}_participio",
        infinitive=verb.infinitive,
        target_tense=PARTICIPLE,
        target_person=PARTICIPLE_PERSON_PLACEHOLDER,
        correct_answer=verb.participio_passado,
        correct_answer_alt=verb.participio_passado_alt,
        question=f'Qual é o particípio passado do verbo "{verb.infinitive}"?',
    )


def _conjugation_exercise(verb: Verb, tense: str, person: str) -> Exercise | None:
    correct = verb.form(tense, person)
    if not correct:
        return None
    question = (
        f'Conjugue o verbo "{verb.infinitive}" no {TENSE_DISPLAY_NAMES[tense]}, '
        f"{PERSON_DISPLAY_NAMES[person]}"
    )
    return Exercise(
        id=f"{verb.infinitive}_{tense}_{person}",
        infinitive=verb.infinitive,
        target_tense=tense,
        target_person=person,
        correct_answer=correct,
        correct_answer_alt=verb.alt_form(tense, person),
        question=question,
    )


def _pick_verb(
    store: VerbStore, exclude: Sequence[str], infinitive: str | None
) -> Verb | None:
    if infinitive is not None:
        return store.get_verb_by_infinitive(infinitive)
    verb = store.sample_random_verb(exclude)
    if verb is None and exclude:
        # Exclusions cover the whole table: fall back to the full pool
        verb = store.sample_random_verb(())
    return verb


def generate_exercise(
    store: VerbStore,
    enabled_tenses: Iterable[str],
    exclude_recent_verbs: Iterable[str] = (),
    include_vos: bool = False,
    *,
    rng: random.Random | None = None,
    infinitive: str | None = None,
    max_attempts: int = MAX_ATTEMPTS,
) -> Exercise | None:
    """Generate one conjugation exercise, or ``None`` if nothing is available.

    A random verb (not in *exclude_recent_verbs*) and a random tense from
    *enabled_tenses* are drawn, then a person valid for that tense.  When that
    cell is empty the whole draw is repeated, up to *max_attempts* times.

    A participle draw on a verb without a participle returns ``None`` straight
    away instead of retrying; :func:`generate_with_fallback` handles that.

    *infinitive* pins the verb instead of sampling one.

    Raises :class:`~verb_drill.tenses.InvalidTenseError` for an empty or
    unknown tense selection.
    """
    tenses = validate_tenses(enabled_tenses)
    rng = rng or random.Random()
    exclude = list(exclude_recent_verbs)

    for attempt in range(max_attempts):
        verb = _pick_verb(store, exclude, infinitive)
        if verb is None:
            _log.info("No verbs available (pinned=%r)", infinitive)
            return None

        tense = rng.choice(tenses)
        if tense == PARTICIPLE:
            exercise = _participle_exercise(verb)
            if exercise is None:
                _log.debug("'%s' has no participle", verb.infinitive)
            return exercise

        person = rng.choice(persons_for_tense(tense, include_vos))
        exercise = _conjugation_exercise(verb, tense, person)
        if exercise is not None:
            return exercise
        _log.debug(
            "Empty cell %s/%s/%s (attempt %d/%d)",
            verb.infinitive, tense, person, attempt + 1, max_attempts,
        )

    _log.warning("No populated cell found after %d attempts", max_attempts)
    return None


def generate_with_fallback(
    store: VerbStore,
    enabled_tenses: Iterable[str],
    exclude_recent_verbs: Iterable[str] = (),
    include_vos: bool = False,
    *,
    attempts: int = 5,
    drop_exclusions_after: int = 3,
    rng: random.Random | None = None,
    infinitive: str | None = None,
    max_attempts: int = MAX_ATTEMPTS,
) -> Exercise | None:
    """Call :func:`generate_exercise` until it yields an exercise.

    After *drop_exclusions_after* failed calls, one extra call is made with no
    exclusions at all.
    """
    tenses = validate_tenses(enabled_tenses)
    exclude = list(exclude_recent_verbs)
    for attempt in range(1, attempts + 1):
        exercise = generate_exercise(
            store, tenses, exclude, include_vos,
            rng=rng, infinitive=infinitive, max_attempts=max_attempts,
        )
        if exercise is not None:
            return exercise
        if attempt == drop_exclusions_after and exclude:
            _log.info("Retrying without %d recent-verb exclusions", len(exclude))
            exercise = generate_exercise(
                store, tenses, (), include_vos,
                rng=rng, infinitive=infinitive, max_attempts=max_attempts,
            )
            if exercise is not None:
                return exercise
    return None


def update_recent_verbs(
    recent: Sequence[str], infinitive: str, window: int = RECENT_VERBS_WINDOW
) -> list[str]:
    """Most-recent-first list of the last *window* infinitives shown."""
    return [infinitive, *recent][:window]

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from verb_drill.models import Exercise

NEGATION = "não "


def check_answer(exercise: Exercise, answer: str, multiple_choice: bool = False) -> bool:
    """Whether *answer* is an accepted answer to *exercise*.

    Typed answers are trimmed; comparison is case-insensitive.  For the
    negative imperative a typed answer may include or omit the leading "não".
    """
    given = answer.lower() if multiple_choice else answer.strip().lower()
    accepted = {exercise.correct_answer.lower()}
    if exercise.correct_answer_alt:
        accepted.add(exercise.correct_answer_alt.lower())

    if given in accepted:
        return True
    if multiple_choice or exercise.target_tense != "imperativo_negativo":
        return False

    bare = given[len(NEGATION):] if given.startswith(NEGATION) else given
    return bare in accepted or any(a == NEGATION + bare for a in accepted)

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from verb_drill.tenses import CONJUGATED_TENSES, column_name, stored_persons


def _clean(value) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass
class Verb:
    infinitive: str
    forms: dict[tuple[str, str], str] = field(default_factory=dict)
    alt_forms: dict[tuple[str, str], str] = field(default_factory=dict)
    participio_passado: str | None = None
    participio_passado_alt: str | None = None
    source_file: str = ""

    def form(self, tense: str, person: str) -> str | None:
        return self.forms.get((tense, person))

    def alt_form(self, tense: str, person: str) -> str | None:
        return self.alt_forms.get((tense, person))

    @classmethod
    def from_row(cls, row: Mapping) -> Verb:
        """Build a verb from a flat ``{column: value}`` mapping.

        Missing, null and blank cells are left out of the form maps.
        """
        forms: dict[tuple[str, str], str] = {}
        alt_forms: dict[tuple[str, str], str] = {}
        for tense in CONJUGATED_TENSES:
            for person in stored_persons(tense):
                value = _clean(row.get(column_name(tense, person)))
                if value:
                    forms[(tense, person)] = value
                alt = _clean(row.get(column_name(tense, person, alt=True)))
                if alt:
                    alt_forms[(tense, person)] = alt
        return cls(
            infinitive=str(row["infinitive"]).strip(),
            forms=forms,
            alt_forms=alt_forms,
            participio_passado=_clean(row.get("participio_passado")),
            participio_passado_alt=_clean(row.get("participio_passado_alt")),
            source_file=row.get("source_file") or "",
        )

    def to_row(self) -> dict:
        row: dict = {"infinitive": self.infinitive}
        for (tense, person), value in self.forms.items():
            row[column_name(tense, person)] = value
        for (tense, person), value in self.alt_forms.items():
            row[column_name(tense, person, alt=True)] = value
        row["participio_passado"] = self.participio_passado
        row["participio_passado_alt"] = self.participio_passado_alt
        return row


@dataclass
class Exercise:
    id: str
    infinitive: str
    target_tense: str
    target_person: str
    correct_answer: str
    question: str
    correct_answer_alt: str | None = None
    multiple_choice_options: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "infinitive": self.infinitive,
            "targetTense": self.target_tense,
            "targetPerson": self.target_person,
            "correctAnswer": self.correct_answer,
            "correctAnswerAlt": self.correct_answer_alt,
            "question": self.question,
        }
        if self.multiple_choice_options:
            data["multipleChoiceOptions"] = list(self.multiple_choice_options)
        return data

    @classmethod
    def from_dict(cls, data: Mapping) -> Exercise:
        return cls(
            id=data.get("id", ""),
            infinitive=data["infinitive"],
            target_tense=data["targetTense"],
            target_person=data.get("targetPerson", "eu"),
            correct_answer=data["correctAnswer"],
            question=data.get("question", ""),
            correct_answer_alt=data.get("correctAnswerAlt"),
            multiple_choice_options=list(data.get("multipleChoiceOptions") or []),
        )

"""Tense and person identifiers, storage column prefixes and display names."""
from __future__ import annotations

from collections.abc import Iterable

TENSES = [
    "presente_indicativo",
    "pps",
    "preterito_imperfeito",
    "imperativo_positivo",
    "imperativo_negativo",
    "infinitivo_pessoal",
    "futuro_imperfeito",
    "condicional_presente",
    "conjuntivo_presente",
    "conjuntivo_passado",
    "conjuntivo_futuro",
    "participio_passado",
]

PARTICIPLE = "participio_passado"

# Tenses that carry a person dimension
CONJUGATED_TENSES = [t for t in TENSES if t != PARTICIPLE]

PERSONS = ["eu", "tu", "ele_ela", "nos", "vos", "eles_elas"]

TENSE_PREFIXES = {
    "presente_indicativo": "presente_ind",
    "pps": "pps",
    "preterito_imperfeito": "pret_imp",
    "imperativo_positivo": "imp_pos",
    "imperativo_negativo": "imp_neg",
    "infinitivo_pessoal": "inf_pes",
    "futuro_imperfeito": "fut_imp",
    "condicional_presente": "cond_pres",
    "conjuntivo_presente": "conj_pres",
    "conjuntivo_passado": "conj_pass",
    "conjuntivo_futuro": "conj_fut",
    "participio_passado": "participio_passado",
}

TENSE_DISPLAY_NAMES = {
    "presente_indicativo": "Presente Indicativo",
    "pps": "Pretérito Perfeito Simples",
    "preterito_imperfeito": "Pretérito Imperfeito",
    "imperativo_positivo": "Imperativo Positivo",
    "imperativo_negativo": "Imperativo Negativo",
    "infinitivo_pessoal": "Infinitivo Pessoal",
    "futuro_imperfeito": "Futuro Imperfeito",
    "condicional_presente": "Condicional Presente",
    "conjuntivo_presente": "Conjuntivo Presente",
    "conjuntivo_passado": "Conjuntivo Passado",
    "conjuntivo_futuro": "Conjuntivo Futuro",
    "participio_passado": "Particípio Passado",
}

PERSON_DISPLAY_NAMES = {
    "eu": "eu",
    "tu": "tu",
    "ele_ela": "ele/ela",
    "nos": "nós",
    "vos": "vós",
    "eles_elas": "eles/elas",
}

IMPERATIVES = ("imperativo_positivo", "imperativo_negativo")


class InvalidTenseError(ValueError):
    """Raised for an empty tense selection or an unknown tense identifier."""


def column_name(tense: str, person: str, alt: bool = False) -> str:
    """Storage column for a (tense, person) cell, e.g. ``pret_imp_nos_alt``."""
    name = f"{TENSE_PREFIXES[tense]}_{person}"
    return f"{name}_alt" if alt else name


def stored_persons(tense: str) -> list[str]:
    """Persons that have a storage column for *tense* (imperatives have no ``eu``)."""
    if tense in IMPERATIVES:
        return [p for p in PERSONS if p != "eu"]
    return list(PERSONS)


def persons_for_tense(tense: str, include_vos: bool = False) -> list[str]:
    """Persons a question may target for *tense*.

    The negative imperative is only asked in the 2nd person singular, and the
    positive imperative never in the 1st person singular.
    """
    if tense == "imperativo_negativo":
        return ["tu"]
    persons = ["eu", "tu", "ele_ela", "nos", "eles_elas"]
    if tense == "imperativo_positivo":
        persons.remove("eu")
    if include_vos:
        persons.append("vos")
    return persons


def validate_tenses(tenses: Iterable[str]) -> list[str]:
    result = list(tenses)
    if not result:
        raise InvalidTenseError("At least one tense must be enabled")
    unknown = [t for t in result if t not in TENSE_PREFIXES]
    if unknown:
        raise InvalidTenseError(f"Unknown tense(s): {', '.join(unknown)}")
    return result


def all_columns() -> list[str]:
    """Every form column of the verb table, in schema order."""
    columns: list[str] = []
    for tense in CONJUGATED_TENSES:
        persons = stored_persons(tense)
        columns.extend(column_name(tense, p) for p in persons)
        columns.extend(column_name(tense, p, alt=True) for p in persons)
    columns += ["participio_passado", "participio_passado_alt"]
    return columns

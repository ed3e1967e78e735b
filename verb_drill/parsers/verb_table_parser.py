"""Parse irregular-verb seed files into Verb objects.

A seed file is a JSON list of flat objects, one per infinitive, keyed by the
verb table's column names:

  [{"infinitive": "fazer", "presente_ind_eu": "faço", ...,
    "participio_passado": "feito"}]

Missing keys and empty strings mean "no such form".
"""
from __future__ import annotations

import json
from pathlib import Path

from verb_drill.models import Verb
from verb_drill.tenses import all_columns

KNOWN_KEYS = {"infinitive", *all_columns()}


def parse_verb_file(path: Path) -> list[Verb]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path.name}: expected a JSON list of verbs")

    verbs: list[Verb] = []
    seen: set[str] = set()
    for i, entry in enumerate(data):
        if not isinstance(entry, dict) or not str(entry.get("infinitive") or "").strip():
            raise ValueError(f"{path.name}: entry {i} has no infinitive")
        unknown = sorted(set(entry) - KNOWN_KEYS)
        if unknown:
            raise ValueError(
                f"{path.name}: '{entry['infinitive']}' has unknown key(s): {', '.join(unknown)}"
            )
        verb = Verb.from_row(entry)
        if verb.infinitive in seen:
            raise ValueError(f"{path.name}: duplicate infinitive '{verb.infinitive}'")
        seen.add(verb.infinitive)
        verb.source_file = path.name
        verbs.append(verb)
    return verbs

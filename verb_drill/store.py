from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from verb_drill.models import Verb


class VerbStore(ABC):
    """Read-only access to the irregular verb table."""

    @abstractmethod
    def get_all_verbs(self) -> list[Verb]:
        """All verbs, ordered by infinitive."""
        ...

    @abstractmethod
    def get_verb_by_infinitive(self, infinitive: str) -> Verb | None:
        ...

    @abstractmethod
    def sample_random_verb(self, excluding: Iterable[str] = ()) -> Verb | None:
        """A uniformly random verb whose infinitive is not in *excluding*."""
        ...

    @abstractmethod
    def sample_other_verbs_with_participle(self, excluding: str, limit: int = 10) -> list[Verb]:
        """Up to *limit* random verbs other than *excluding* that have a participle."""
        ...

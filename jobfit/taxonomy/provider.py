from __future__ import annotations

from typing import Protocol


class SynonymProvider(Protocol):
    def get_synonyms(self, term: str) -> frozenset[str]:
        """Return the term plus every direct and indirect equivalent."""

from __future__ import annotations

import json
from collections import defaultdict
from collections.abc import Iterable, Mapping
from pathlib import Path

from jobfit.normalize.tokenize import tokenize_text

from .provider import SynonymProvider


class SynonymIndex(SynonymProvider):
    """Bidirectional term-equivalence table.

    Every expansion is computed once at construction, so ``get_synonyms`` is a
    dictionary lookup in both directions. Terms are also reachable through their
    normalized token form ("databases" -> "databas" -> "database"), which is what
    the requirement matcher looks up. The index is never mutated afterwards.
    """

    def __init__(
        self,
        synonyms: Mapping[str, Iterable[str]] | None = None,
        synonyms_path: str | Path | None = None,
    ) -> None:
        if synonyms is None:
            path = Path(synonyms_path) if synonyms_path else Path(__file__).with_name("synonyms.json")
            synonyms = self._load_synonyms(path)

        self._table: dict[str, tuple[str, ...]] = {}
        for key, values in synonyms.items():
            normalized_key = str(key).strip().lower()
            if not normalized_key:
                continue
            merged = list(self._table.get(normalized_key, ()))
            for value in values:
                normalized_value = str(value).strip().lower()
                if normalized_value and normalized_value not in merged:
                    merged.append(normalized_value)
            self._table[normalized_key] = tuple(merged)

        reverse: dict[str, set[str]] = defaultdict(set)
        for key, values in self._table.items():
            for value in values:
                reverse[value].add(key)
        self._reverse: dict[str, frozenset[str]] = {value: frozenset(keys) for value, keys in reverse.items()}

        self._expanded: dict[str, frozenset[str]] = {
            term: self._expand(term) for term in sorted(set(self._table) | set(self._reverse))
        }

        aliases: dict[str, set[str]] = defaultdict(set)
        for term in self._expanded:
            form = " ".join(tokenize_text(term))
            if form and form != term:
                aliases[form].add(term)
        self._aliases: dict[str, frozenset[str]] = {form: frozenset(terms) for form, terms in aliases.items()}

    @staticmethod
    def _load_synonyms(path: Path) -> dict[str, list[str]]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, dict):
            raise RuntimeError(f"Invalid synonym table '{path}': expected a top-level mapping.")
        return {str(key): [str(value) for value in values] for key, values in raw.items()}

    def _expand(self, term: str) -> frozenset[str]:
        synonyms = {term}
        synonyms.update(self._table.get(term, ()))
        for key in self._reverse.get(term, ()):
            synonyms.add(key)
            synonyms.update(self._table.get(key, ()))
        return frozenset(synonyms)

    def get_synonyms(self, term: str) -> frozenset[str]:
        normalized = term.strip().lower()
        if not normalized:
            return frozenset()
        synonyms = {normalized}
        synonyms.update(self._expanded.get(normalized, ()))
        for alias in self._aliases.get(normalized, ()):
            synonyms.update(self._expanded[alias])
        return frozenset(synonyms)

    def __contains__(self, term: object) -> bool:
        return isinstance(term, str) and term.strip().lower() in self._expanded

    def __len__(self) -> int:
        return len(self._expanded)

from functools import lru_cache

from .provider import SynonymProvider
from .synonym_index import SynonymIndex


@lru_cache(maxsize=1)
def get_default_synonym_index() -> SynonymIndex:
    return SynonymIndex()


__all__ = ["SynonymProvider", "SynonymIndex", "get_default_synonym_index"]

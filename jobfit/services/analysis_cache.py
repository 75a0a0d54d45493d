from __future__ import annotations

import hashlib
import json
import logging
import threading
from collections import OrderedDict

from jobfit.schemas.analysis import AnalysisResult
from jobfit.schemas.profile import CandidateProfile

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 100


def create_analysis_hash(profile: CandidateProfile, job_text: str) -> str:
    """Content key for a (profile, posting) pair: sorted-key JSON of the profile plus the trimmed text."""
    payload = json.dumps(
        profile.model_dump(mode="json", by_alias=True),
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
    )
    digest = hashlib.sha256()
    digest.update(payload.encode("utf-8"))
    digest.update(b"\n")
    digest.update(job_text.strip().encode("utf-8"))
    return digest.hexdigest()


class ResultCache:
    """Bounded memo of finished analyses; the oldest insertion is evicted first."""

    def __init__(self, max_size: int = DEFAULT_CACHE_SIZE) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be greater than 0")
        self.max_size = max_size
        self._entries: OrderedDict[str, AnalysisResult] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> AnalysisResult | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, result: AnalysisResult) -> None:
        with self._lock:
            if key in self._entries:
                self._entries[key] = result
                return
            while len(self._entries) >= self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("analysis_cache_evicted key=%s", evicted[:12])
            self._entries[key] = result

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

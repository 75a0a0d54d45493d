from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from jobfit.core.config import settings

from .clustering import ATS_SCORE_BUCKETS, UNKNOWN_BUCKET

TOTAL = "total"
ROLE_CLUSTER = "role_cluster"
INDUSTRY_CLUSTER = "industry_cluster"
ATS_SCORE_BUCKET = "ats_score_bucket"


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _get_db_path() -> Path:
    return Path(settings.statistics_db_path)


def empty_statistics() -> dict[str, Any]:
    return {
        "total_analyses": 0,
        "role_cluster_counts": {},
        "industry_cluster_counts": {},
        "ats_score_buckets": {bucket: 0 for _, _, bucket in ATS_SCORE_BUCKETS} | {UNKNOWN_BUCKET: 0},
        "updated_at": None,
    }


def init_db() -> None:
    if not settings.statistics_enabled:
        return
    db_path = _get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS statistics_counters (
                category TEXT NOT NULL,
                bucket TEXT NOT NULL,
                count INTEGER NOT NULL DEFAULT 0,
                updated_at TEXT NOT NULL,
                PRIMARY KEY (category, bucket)
            )
            """
        )
        conn.commit()


def record_analysis(*, role_cluster: str, industry_cluster: str, ats_bucket: str) -> None:
    """Increment the anonymous counters for one finished analysis."""
    if not settings.statistics_enabled:
        return
    now = _utc_now()
    rows = [
        (TOTAL, TOTAL, now),
        (ROLE_CLUSTER, role_cluster, now),
        (INDUSTRY_CLUSTER, industry_cluster, now),
        (ATS_SCORE_BUCKET, ats_bucket, now),
    ]
    with sqlite3.connect(_get_db_path()) as conn:
        conn.executemany(
            """
            INSERT INTO statistics_counters (category, bucket, count, updated_at)
            VALUES (?, ?, 1, ?)
            ON CONFLICT (category, bucket)
            DO UPDATE SET count = count + 1, updated_at = excluded.updated_at
            """,
            rows,
        )
        conn.commit()


def get_statistics() -> dict[str, Any]:
    statistics = empty_statistics()
    if not settings.statistics_enabled:
        return statistics
    db_path = _get_db_path()
    if not db_path.exists():
        return statistics

    with sqlite3.connect(db_path) as conn:
        rows = conn.execute(
            "SELECT category, bucket, count, updated_at FROM statistics_counters ORDER BY category, bucket"
        ).fetchall()

    latest: str | None = None
    for category, bucket, count, updated_at in rows:
        if category == TOTAL:
            statistics["total_analyses"] = int(count)
        elif category == ROLE_CLUSTER:
            statistics["role_cluster_counts"][bucket] = int(count)
        elif category == INDUSTRY_CLUSTER:
            statistics["industry_cluster_counts"][bucket] = int(count)
        elif category == ATS_SCORE_BUCKET:
            statistics["ats_score_buckets"][bucket] = int(count)
        if latest is None or updated_at > latest:
            latest = updated_at
    statistics["updated_at"] = latest
    return statistics


def reset_statistics() -> int:
    if not settings.statistics_enabled:
        return 0
    with sqlite3.connect(_get_db_path()) as conn:
        cur = conn.execute("DELETE FROM statistics_counters")
        conn.commit()
        return int(cur.rowcount or 0)

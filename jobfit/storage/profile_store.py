from __future__ import annotations

import logging
import os
import re
import sqlite3
import threading
import uuid
from datetime import datetime, timezone

from jobfit.core.errors import InvalidInputError, ProfileNotFoundError
from jobfit.schemas.profile import ProfileRecord

logger = logging.getLogger(__name__)

_UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def validate_profile_id(profile_id: str | None) -> str:
    if not profile_id or not profile_id.strip():
        raise InvalidInputError("Profile id must not be empty.")
    if not _UUID_RE.match(profile_id):
        raise InvalidInputError(f'Invalid profile id "{profile_id}". Expected a UUID.')
    return profile_id


def _validate_record(record: ProfileRecord) -> None:
    if record.data is None:
        raise InvalidInputError("Profile data is required.")


class ProfileStore:
    """Key-value store of saved profiles, one JSON document per UUID."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        with self._lock:
            if self._conn is not None:
                return self._conn

            directory = os.path.dirname(self.db_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            conn = sqlite3.connect(
                self.db_path,
                check_same_thread=False,
                timeout=5,
                isolation_level=None,
            )
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA synchronous=NORMAL;")
            conn.execute("PRAGMA busy_timeout=5000;")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS profiles (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    payload_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS idx_profiles_created_at ON profiles (created_at);")
            self._conn = conn
            return conn

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def _write(self, record: ProfileRecord) -> None:
        conn = self._get_connection()
        payload = record.model_dump_json(by_alias=True)
        with self._lock:
            conn.execute(
                """
                INSERT INTO profiles (id, name, payload_json, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT (id) DO UPDATE SET
                    name = excluded.name,
                    payload_json = excluded.payload_json,
                    updated_at = excluded.updated_at
                """,
                (record.id, record.name, payload, record.created_at, record.updated_at),
            )

    def _insert(self, record: ProfileRecord) -> None:
        conn = self._get_connection()
        payload = record.model_dump_json(by_alias=True)
        with self._lock:
            try:
                conn.execute(
                    "INSERT INTO profiles (id, name, payload_json, created_at, updated_at) VALUES (?, ?, ?, ?, ?)",
                    (record.id, record.name, payload, record.created_at, record.updated_at),
                )
            except sqlite3.IntegrityError as exc:
                raise InvalidInputError(f'Profile "{record.id}" already exists.', status_code=409) from exc

    def create(self, record: ProfileRecord) -> ProfileRecord:
        """Save a new profile; a fresh UUID is assigned when none is given.

        An id that is already stored is rejected, use ``update`` to change it.
        """
        _validate_record(record)
        profile_id = validate_profile_id(record.id or str(uuid.uuid4()))
        now = _utc_now()
        saved = record.model_copy(update={"id": profile_id, "created_at": now, "updated_at": now})
        self._insert(saved)
        logger.info("profile_created id=%s", profile_id)
        return saved

    def get(self, profile_id: str) -> ProfileRecord | None:
        validate_profile_id(profile_id)
        conn = self._get_connection()
        with self._lock:
            row = conn.execute("SELECT payload_json FROM profiles WHERE id = ?", (profile_id,)).fetchone()
        if not row:
            return None
        return ProfileRecord.model_validate_json(row[0])

    def list_profiles(self) -> list[ProfileRecord]:
        conn = self._get_connection()
        with self._lock:
            rows = conn.execute("SELECT payload_json FROM profiles ORDER BY created_at DESC, rowid DESC").fetchall()
        return [ProfileRecord.model_validate_json(row[0]) for row in rows]

    def update(self, profile_id: str, record: ProfileRecord) -> ProfileRecord:
        validate_profile_id(profile_id)
        _validate_record(record)
        existing = self.get(profile_id)
        if existing is None:
            raise ProfileNotFoundError(profile_id)
        saved = record.model_copy(
            update={"id": profile_id, "created_at": existing.created_at, "updated_at": _utc_now()}
        )
        self._write(saved)
        logger.info("profile_updated id=%s", profile_id)
        return saved

    def delete(self, profile_id: str) -> bool:
        validate_profile_id(profile_id)
        conn = self._get_connection()
        with self._lock:
            cur = conn.execute("DELETE FROM profiles WHERE id = ?", (profile_id,))
        deleted = bool(cur.rowcount)
        if deleted:
            logger.info("profile_deleted id=%s", profile_id)
        return deleted

    def delete_all(self) -> int:
        conn = self._get_connection()
        with self._lock:
            cur = conn.execute("DELETE FROM profiles")
        logger.info("profiles_cleared count=%s", cur.rowcount)
        return int(cur.rowcount or 0)

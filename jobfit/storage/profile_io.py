from __future__ import annotations

import json
import re
from datetime import date

from pydantic import ValidationError

from jobfit.core.errors import InvalidInputError
from jobfit.schemas.profile import ProfileRecord

MAX_IMPORT_BYTES = 10 * 1024 * 1024
MAX_FILENAME_NAME_LENGTH = 50
FILENAME_PREFIX = "jobfit-profile"

_INVALID_FILENAME_CHARS_RE = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE_RE = re.compile(r"\s+")
_REPEATED_UNDERSCORE_RE = re.compile(r"_{2,}")


def sanitize_filename(name: str) -> str:
    cleaned = _INVALID_FILENAME_CHARS_RE.sub("_", name)
    cleaned = _WHITESPACE_RE.sub("_", cleaned)
    cleaned = _REPEATED_UNDERSCORE_RE.sub("_", cleaned).strip("_")
    return cleaned[:MAX_FILENAME_NAME_LENGTH] or "profile"


def export_filename(record: ProfileRecord, today: date | None = None) -> str:
    day = (today or date.today()).isoformat()
    return f"{FILENAME_PREFIX}-{sanitize_filename(record.name)}-{day}.json"


def export_profile(record: ProfileRecord, today: date | None = None) -> tuple[str, str]:
    """Return ``(filename, json_text)`` for a downloadable profile document."""
    if record.data is None:
        raise InvalidInputError("Profile data is required.")
    payload = record.model_dump(mode="json", by_alias=True)
    return export_filename(record, today), json.dumps(payload, ensure_ascii=False, indent=2)


def _format_validation_errors(exc: ValidationError) -> str:
    lines = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "root"
        lines.append(f"{location}: {error['msg']}")
    return "Validation failed:\n" + "\n".join(lines)


def import_profile(raw: str | bytes) -> ProfileRecord:
    """Parse and validate an exported profile document.

    The stored id and timestamps are dropped; the store assigns new ones.
    """
    size = len(raw.encode("utf-8")) if isinstance(raw, str) else len(raw)
    if size == 0:
        raise InvalidInputError("The file is empty.")
    if size > MAX_IMPORT_BYTES:
        raise InvalidInputError(
            f"The file is too large ({size / 1024 / 1024:.2f} MB). "
            f"Maximum size: {MAX_IMPORT_BYTES // 1024 // 1024} MB."
        )

    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    text = text.strip()
    if not text:
        raise InvalidInputError("The JSON file is empty.")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidInputError("The JSON file is invalid or corrupted.") from exc

    try:
        record = ProfileRecord.model_validate(payload)
    except ValidationError as exc:
        raise InvalidInputError(_format_validation_errors(exc)) from exc

    if record.data is None:
        raise InvalidInputError("Validation failed:\ndata: Field required")
    return record.model_copy(update={"id": None, "created_at": None, "updated_at": None})

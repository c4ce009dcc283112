# app\core\storage.py
"""
Persistence layer: a key-value store contract, month document load/save,
export column names and JSON backups.
"""

import copy
import json
import logging
from typing import Any, Protocol

from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.config import DEFAULT_EXPORT_COLUMN_NAMES, EXPORT_COLUMN_NAMES_KEY, MONTH_KEY_PREFIX
from app.core.logging_config import LogContext
from app.core.models import MonthDoc
from app.core.utils import month_store_key
from app.database.database import KeyValueEntry

logger = logging.getLogger(__name__)

#: Fields a backup entry must carry to be imported.
REQUIRED_MONTH_FIELDS = ("year", "month", "days")


class StorageError(Exception):
    """General error type for problems loading stored data."""

    pass


class BackupImportError(StorageError):
    """The backup payload could not be parsed at all."""

    pass


class KeyValueStore(Protocol):
    """Persistent key-value store holding JSON-compatible documents."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...

    def remove(self, key: str) -> None: ...

    def list_keys(self) -> list[str]: ...


class InMemoryKeyValueStore:
    """Dict-backed store. Values are deep-copied so callers never share state with the store."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str) -> Any | None:
        value = self._data.get(key)
        return copy.deepcopy(value)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def list_keys(self) -> list[str]:
        return sorted(self._data)


class SqlKeyValueStore:
    """Store backed by the kv_entries table. Every set/remove commits immediately."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, key: str) -> Any | None:
        entry = self.session.get(KeyValueEntry, key)
        return entry.value if entry else None

    def set(self, key: str, value: Any) -> None:
        entry = self.session.get(KeyValueEntry, key)
        if entry is None:
            self.session.add(KeyValueEntry(key=key, value=value))
        else:
            entry.value = value
        self.session.commit()

    def remove(self, key: str) -> None:
        entry = self.session.get(KeyValueEntry, key)
        if entry is not None:
            self.session.delete(entry)
            self.session.commit()

    def list_keys(self) -> list[str]:
        rows = self.session.query(KeyValueEntry.key).order_by(KeyValueEntry.key).all()
        return [key for (key,) in rows]


# ============ Month documents ============


def get_month(store: KeyValueStore, year: int, month: int) -> MonthDoc | None:
    """
    Load a persisted month document.
    Returns:
        The document, or None if the month was never saved
    Raises:
        StorageError: If the stored value is not a valid month document
    """
    key = month_store_key(year, month)
    data = store.get(key)
    if data is None:
        return None
    try:
        doc = MonthDoc.model_validate(data)
    except ValidationError as e:
        logger.exception("Stored month document %s is invalid", key)
        raise StorageError(f"Could not parse month document {key}: {e}") from e
    if (doc.year, doc.month) != (year, month):
        logger.error("Stored month document %s is for %d-%02d", key, doc.year, doc.month)
        raise StorageError(f"Month document {key} holds {doc.year}-{doc.month:02d}")
    return doc


def set_month(store: KeyValueStore, doc: MonthDoc) -> None:
    """Persist a complete month document under its month key."""
    key = month_store_key(doc.year, doc.month)
    store.set(key, doc.to_storage())
    logger.debug("Saved %s (%d days)", key, len(doc.days))


def remove_month(store: KeyValueStore, year: int, month: int) -> None:
    """Delete a month document. Irreversible from the store's point of view."""
    key = month_store_key(year, month)
    store.remove(key)
    logger.info("Removed %s", key, extra={"extra_fields": {"store_key": key}})


# ============ Export column names ============


def get_export_column_names(store: KeyValueStore) -> list[str]:
    """
    Ordered export column labels.

    Falls back to the default set when nothing is stored, or when the stored
    value is not a non-empty list of strings.
    """
    data = store.get(EXPORT_COLUMN_NAMES_KEY)
    if isinstance(data, list) and data and all(isinstance(name, str) for name in data):
        return list(data)
    if data is not None:
        logger.warning("Ignoring malformed export column names: %r", data)
    return list(DEFAULT_EXPORT_COLUMN_NAMES)


def set_export_column_names(store: KeyValueStore, names: list[str]) -> list[str]:
    """
    Save export column labels, trimmed and without empty entries.

    Returns:
        The labels actually stored (the default set if nothing usable was given)
    """
    cleaned = [name.strip() for name in names if isinstance(name, str) and name.strip()]
    if not cleaned:
        cleaned = list(DEFAULT_EXPORT_COLUMN_NAMES)
    store.set(EXPORT_COLUMN_NAMES_KEY, cleaned)
    return cleaned


# ============ Backup ============


def export_all_months_json(store: KeyValueStore) -> str:
    """Serialize every month:* entry into one JSON object (key -> document)."""
    out: dict[str, Any] = {}
    for key in store.list_keys():
        if not key.startswith(MONTH_KEY_PREFIX):
            continue
        value = store.get(key)
        if value:
            out[key] = value
    logger.info("Exported %d month documents", len(out))
    return json.dumps(out, ensure_ascii=False, indent=2)


def _is_importable(key: str, value: Any) -> bool:
    if not key.startswith(MONTH_KEY_PREFIX):
        return False
    if not isinstance(value, dict):
        return False
    return all(value.get(field) is not None for field in REQUIRED_MONTH_FIELDS)


def import_months_json(store: KeyValueStore, payload: str | bytes) -> int:
    """
    Merge a JSON backup into the store.

    Entries that are not month:* keys, lack year/month/days, or do not validate
    as a month document are skipped one by one.

    Returns:
        Number of month documents written
    Raises:
        BackupImportError: If the payload is not a JSON object
    """
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.exception("Backup payload is not valid JSON")
        raise BackupImportError(f"Invalid JSON in backup: {e}") from e

    if not isinstance(data, dict):
        raise BackupImportError("Expected a JSON object mapping month keys to documents")

    count = 0
    for key, value in data.items():
        with LogContext(store_key=key):
            if not _is_importable(key, value):
                logger.warning("Skipping backup entry %r", key)
                continue
            try:
                doc = MonthDoc.model_validate(value)
            except ValidationError:
                logger.warning("Skipping invalid month document %r", key, exc_info=True)
                continue
            if key != month_store_key(doc.year, doc.month):
                logger.warning("Skipping %r: document is for %d-%02d", key, doc.year, doc.month)
                continue
            store.set(key, doc.to_storage())
            count += 1

    logger.info("Imported %d month documents", count, extra={"extra_fields": {"imported": count}})
    return count

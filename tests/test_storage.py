"""
Tests for the key-value stores, month persistence, export column names
and JSON backup import/export.
"""

import json
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from app.core.config import DEFAULT_EXPORT_COLUMN_NAMES, EXPORT_COLUMN_NAMES_KEY
from app.core.models import MonthDoc
from app.core.storage import (
    BackupImportError,
    InMemoryKeyValueStore,
    StorageError,
    export_all_months_json,
    get_export_column_names,
    get_month,
    import_months_json,
    remove_month,
    set_export_column_names,
    set_month,
)
from app.core.timesheet import MonthService, add_shift, new_month_doc
from app.database.database import KeyValueEntry

VALID_DOC = {
    "year": 2026,
    "month": 1,
    "days": {"2026-01-05": [{"id": "a", "start": "08:00", "end": "12:00", "breakMinutes": 0}]},
}


@pytest.fixture(params=["memory", "sql"])
def store(request, memory_store, sql_store):
    return memory_store if request.param == "memory" else sql_store


class TestKeyValueStore:
    def test_set_get_remove(self, store):
        store.set("k", {"x": [1, 2]})
        assert store.get("k") == {"x": [1, 2]}

        store.set("k", {"x": []})
        assert store.get("k") == {"x": []}

        store.remove("k")
        assert store.get("k") is None

    def test_remove_missing_key(self, store):
        store.remove("nothing")
        assert store.list_keys() == []

    def test_list_keys_sorted(self, store):
        for key in ["month:2026-02", "settings:x", "month:2025-12"]:
            store.set(key, {})
        assert store.list_keys() == ["month:2025-12", "month:2026-02", "settings:x"]

    def test_sql_entry_records_update_time(self, sql_store, test_db):
        sql_store.set("k", {"x": 1})
        assert test_db.get(KeyValueEntry, "k").updated_at is not None

    def test_memory_store_copies_values(self):
        store = InMemoryKeyValueStore()
        value = {"days": {}}
        store.set("k", value)
        value["days"]["x"] = 1
        assert store.get("k") == {"days": {}}


class TestMonthPersistence:
    def test_never_saved(self, store):
        assert get_month(store, 2026, 1) is None

    def test_round_trip(self, store, make_shift):
        doc = add_shift(new_month_doc(2026, 1), "2026-01-05", make_shift(note="x", column_index=2))
        set_month(store, doc)

        assert get_month(store, 2026, 1) == doc
        assert store.list_keys() == ["month:2026-01"]

    def test_stored_form_uses_camel_case(self, memory_store, make_shift):
        set_month(memory_store, add_shift(new_month_doc(2026, 1), "2026-01-05", make_shift(column_index=1)))
        stored = memory_store.get("month:2026-01")["days"]["2026-01-05"][0]

        assert "breakMinutes" in stored
        assert stored["columnIndex"] == 1
        assert "location" not in stored

    def test_legacy_shift_without_optional_fields(self, memory_store):
        memory_store.set("month:2026-01", VALID_DOC)
        shift = get_month(memory_store, 2026, 1).days["2026-01-05"][0]

        assert shift.note == ""
        assert shift.type.value == "Work"
        assert shift.column_index is None

    def test_invalid_stored_document(self, memory_store):
        memory_store.set("month:2026-01", {"year": 2026, "month": 13, "days": {}})
        with pytest.raises(StorageError):
            get_month(memory_store, 2026, 1)

    def test_document_stored_under_wrong_key(self, memory_store):
        memory_store.set("month:2026-01", {"year": 2025, "month": 3, "days": {}})
        with pytest.raises(StorageError):
            get_month(memory_store, 2026, 1)

    def test_remove(self, store):
        set_month(store, new_month_doc(2026, 1))
        remove_month(store, 2026, 1)
        assert get_month(store, 2026, 1) is None


class TestExportColumnNames:
    def test_default_when_unset(self, store):
        assert get_export_column_names(store) == ["Bi", "Phú Quý", "Khôi", "Bo"]

    def test_set_trims_and_drops_empty(self, store):
        saved = set_export_column_names(store, [" An ", "", "  ", "Bình"])
        assert saved == ["An", "Bình"]
        assert get_export_column_names(store) == ["An", "Bình"]

    def test_set_nothing_usable_stores_default(self, store):
        assert set_export_column_names(store, ["", " "]) == list(DEFAULT_EXPORT_COLUMN_NAMES)

    @pytest.mark.parametrize("bad", [[], "Bi", [1, 2], {"names": ["Bi"]}])
    def test_malformed_value_falls_back(self, memory_store, bad):
        memory_store.set(EXPORT_COLUMN_NAMES_KEY, bad)
        assert get_export_column_names(memory_store) == list(DEFAULT_EXPORT_COLUMN_NAMES)


class TestBackup:
    def test_export_only_months(self, memory_store):
        memory_store.set("month:2026-01", VALID_DOC)
        memory_store.set(EXPORT_COLUMN_NAMES_KEY, ["A"])

        exported = json.loads(export_all_months_json(memory_store))

        assert list(exported) == ["month:2026-01"]

    def test_export_import_round_trip(self, memory_store, sql_store, make_shift):
        doc = add_shift(new_month_doc(2026, 2), "2026-02-14", make_shift(note="Tết"))
        set_month(memory_store, doc)

        count = import_months_json(sql_store, export_all_months_json(memory_store))

        assert count == 1
        assert get_month(sql_store, 2026, 2) == doc

    def test_import_skips_incomplete_entries(self, memory_store):
        payload = json.dumps(
            {
                "month:2026-01": VALID_DOC,
                "month:2026-02": {"year": 2026, "month": 2},
                "settings:export_column_names": ["X"],
                "month:2026-03": "not a document",
            }
        )

        assert import_months_json(memory_store, payload) == 1
        assert memory_store.list_keys() == ["month:2026-01"]

    def test_import_skips_invalid_documents(self, memory_store):
        payload = json.dumps({"month:2026-01": {"year": 2026, "month": 99, "days": {}}})
        assert import_months_json(memory_store, payload) == 0

    def test_import_skips_document_under_wrong_key(self, memory_store, make_shift):
        payload = json.dumps({"month:2026-01": {"year": 2025, "month": 3, "days": {}}})

        assert import_months_json(memory_store, payload) == 0
        assert memory_store.list_keys() == []

        doc = MonthService(memory_store).add_shift(2026, 1, "2026-01-05", make_shift())
        assert (doc.year, doc.month) == (2026, 1)

    def test_import_overwrites_existing(self, memory_store):
        set_month(memory_store, new_month_doc(2026, 1))
        import_months_json(memory_store, json.dumps({"month:2026-01": VALID_DOC}))
        assert "2026-01-05" in get_month(memory_store, 2026, 1).days

    def test_import_accepts_bytes(self, memory_store):
        payload = json.dumps({"month:2026-01": VALID_DOC}).encode("utf-8")
        assert import_months_json(memory_store, payload) == 1

    @pytest.mark.parametrize("payload", ["{not json", "[1, 2]", "42", b"\xff\xff{}"])
    def test_import_rejects_unparseable_payload(self, memory_store, payload):
        with pytest.raises(BackupImportError):
            import_months_json(memory_store, payload)
        assert memory_store.list_keys() == []

    def test_backup_doc_model(self):
        doc = MonthDoc.model_validate(VALID_DOC)
        assert doc.to_storage()["days"]["2026-01-05"][0]["breakMinutes"] == 0

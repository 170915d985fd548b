"""Tests for budget persistence and the key-value stores."""

import json
import os

import pytest

from budget_allocator.models.budget import (
    BudgetCategory,
    BudgetModel,
    InputMode,
    default_model,
)
from budget_allocator.services.persistence import DEFAULT_DOCUMENT_KEY, BudgetPersistence
from budget_allocator.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    StorageError,
)


class FailingStore(KeyValueStore):
    """Store whose every operation fails."""

    def get(self, key):
        raise StorageError("backend unavailable")

    def set(self, key, value):
        raise StorageError("backend unavailable")

    def remove(self, key):
        raise StorageError("backend unavailable")


def _custom_model() -> BudgetModel:
    return BudgetModel(
        monthly_income=48250.75,
        categories=[
            BudgetCategory(id="rent", name="Rent/Housing", amount=14475.225,
                           color="bg-red-500", input_mode=InputMode.PERCENTAGE),
            BudgetCategory(id="1718000000000", name="Pets", amount=1234.5,
                           color="bg-indigo-500", input_mode=InputMode.AMOUNT),
            BudgetCategory(id="abc", name="Gifts", amount=0.1 + 0.2,
                           color="bg-rose-500", input_mode=InputMode.PERCENTAGE),
        ],
    )


class TestPersistenceRoundTrip:
    """load() after save(m) reproduces m."""

    @pytest.mark.parametrize("model", [
        default_model(),
        BudgetModel(),
        BudgetModel(monthly_income=1000),
        _custom_model(),
    ])
    def test_round_trip(self, store, model):
        persistence = BudgetPersistence(store)
        persistence.save(model)
        assert persistence.load() == model

    def test_round_trip_through_file(self, tmp_path):
        path = tmp_path / "store.json"
        BudgetPersistence(JsonFileKeyValueStore(path)).save(_custom_model())
        loaded = BudgetPersistence(JsonFileKeyValueStore(path)).load()
        assert loaded == _custom_model()
        assert [c.id for c in loaded.categories] == ["rent", "1718000000000", "abc"]

    def test_saved_document_shape(self, store):
        BudgetPersistence(store).save(_custom_model())
        document = json.loads(store.get(DEFAULT_DOCUMENT_KEY))
        assert document["monthlyIncome"] == 48250.75
        assert document["categories"][1] == {
            "id": "1718000000000",
            "name": "Pets",
            "amount": 1234.5,
            "color": "bg-indigo-500",
            "inputMode": "amount",
        }

    def test_save_overwrites(self, store):
        persistence = BudgetPersistence(store)
        persistence.save(_custom_model())
        persistence.save(BudgetModel(monthly_income=10))
        assert persistence.load() == BudgetModel(monthly_income=10)

    def test_custom_key(self, store):
        BudgetPersistence(store, key="other").save(BudgetModel(monthly_income=5))
        assert store.get("other") is not None
        assert store.get(DEFAULT_DOCUMENT_KEY) is None


class TestPersistenceLoad:
    """Malformed and partial documents."""

    def _load(self, store, raw):
        store.set(DEFAULT_DOCUMENT_KEY, raw)
        return BudgetPersistence(store).load()

    def test_absent_document(self, store):
        assert BudgetPersistence(store).load() is None

    @pytest.mark.parametrize("raw", ["", "not json", "{broken", "[1, 2]", "42", "null", '"text"'])
    def test_unusable_document(self, store, raw):
        assert self._load(store, raw) is None

    def test_empty_object_uses_defaults(self, store):
        model = self._load(store, "{}")
        assert model == default_model()

    def test_missing_categories_default(self, store):
        model = self._load(store, json.dumps({"monthlyIncome": 5000}))
        assert model.monthly_income == 5000
        assert model.categories == default_model().categories

    def test_null_categories_default(self, store):
        model = self._load(store, json.dumps({"monthlyIncome": 5000, "categories": None}))
        assert model.categories == default_model().categories

    def test_non_list_categories_default(self, store):
        model = self._load(store, json.dumps({"categories": {"rent": 1}}))
        assert model.categories == default_model().categories

    def test_empty_categories_stay_empty(self, store):
        model = self._load(store, json.dumps({"monthlyIncome": 10, "categories": []}))
        assert model.categories == []

    def test_missing_income_defaults(self, store):
        model = self._load(store, json.dumps({"categories": []}))
        assert model.monthly_income == 0

    @pytest.mark.parametrize("income", ["abc", None, -100, [], "NaN"])
    def test_invalid_income_defaults(self, store, income):
        model = self._load(store, json.dumps({"monthlyIncome": income, "categories": []}))
        assert model.monthly_income == 0

    def test_numeric_text_income_is_parsed(self, store):
        model = self._load(store, json.dumps({"monthlyIncome": "2500", "categories": []}))
        assert model.monthly_income == 2500

    def test_invalid_entries_are_dropped(self, store, audit_logger):
        store.set(DEFAULT_DOCUMENT_KEY, json.dumps({
            "monthlyIncome": 1000,
            "categories": [
                {"id": "ok", "name": "Fine", "amount": 10, "color": "bg-red-500",
                 "inputMode": "amount"},
                {"id": "neg", "name": "Negative", "amount": -1},
                {"id": "mode", "name": "Bad mode", "inputMode": "ratio"},
                {"name": "No id"},
                "not an object",
            ],
        }))
        model = BudgetPersistence(store, audit_logger=audit_logger).load()
        assert [c.id for c in model.categories] == ["ok"]
        loaded = [e for e in audit_logger.events if e.event_type.value == "budget_loaded"]
        assert loaded[0].details["dropped_entries"] == 4

    def test_duplicate_ids_keep_first(self, store):
        model = self._load(store, json.dumps({"categories": [
            {"id": "a", "name": "First"},
            {"id": "a", "name": "Second"},
        ]}))
        assert [c.name for c in model.categories] == ["First"]

    def test_missing_optional_fields_default(self, store):
        model = self._load(store, json.dumps({"categories": [{"id": "a", "name": "Only"}]}))
        category = model.categories[0]
        assert category.amount == 0
        assert category.input_mode is InputMode.PERCENTAGE

    @pytest.mark.parametrize("raw", ["[" * 200000, "{\"a\": " * 200000], ids=["array", "object"])
    def test_deeply_nested_document(self, store, audit_logger, raw):
        store.set(DEFAULT_DOCUMENT_KEY, raw)
        assert BudgetPersistence(store, audit_logger=audit_logger).load() is None
        assert audit_logger.types() == ["load_fallback"]

    def test_invalid_json_is_audited(self, store, audit_logger):
        store.set(DEFAULT_DOCUMENT_KEY, "{broken")
        BudgetPersistence(store, audit_logger=audit_logger).load()
        assert audit_logger.types() == ["load_fallback"]


class TestPersistenceClear:
    """Tests for clear()."""

    def test_clear_removes_document(self, store):
        persistence = BudgetPersistence(store)
        persistence.save(default_model())
        persistence.clear()
        assert persistence.load() is None

    def test_clear_without_document(self, store):
        BudgetPersistence(store).clear()
        assert store.get(DEFAULT_DOCUMENT_KEY) is None


class TestPersistenceStorageErrors:
    """Store failures."""

    def test_save_raises_storage_error(self, audit_logger):
        persistence = BudgetPersistence(FailingStore(), audit_logger=audit_logger)
        with pytest.raises(StorageError):
            persistence.save(default_model())
        assert audit_logger.types() == ["storage_error"]

    def test_clear_raises_storage_error(self):
        with pytest.raises(StorageError):
            BudgetPersistence(FailingStore()).clear()

    def test_load_returns_none(self):
        assert BudgetPersistence(FailingStore()).load() is None


class TestInMemoryKeyValueStore:
    """Tests for the dict-backed store."""

    def test_get_set_remove(self):
        store = InMemoryKeyValueStore()
        assert store.get("k") is None
        store.set("k", "v")
        assert store.get("k") == "v"
        store.remove("k")
        assert store.get("k") is None

    def test_remove_absent_key(self):
        InMemoryKeyValueStore().remove("missing")

    def test_initial_contents_are_copied(self):
        initial = {"k": "v"}
        store = InMemoryKeyValueStore(initial)
        store.set("k", "changed")
        assert initial == {"k": "v"}
        assert store.keys() == ["k"]


class TestJsonFileKeyValueStore:
    """Tests for the JSON file store."""

    def test_missing_file_reads_empty(self, tmp_path):
        assert JsonFileKeyValueStore(tmp_path / "none.json").get("k") is None

    def test_set_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "store.json"
        JsonFileKeyValueStore(path).set("k", "v")
        assert json.loads(path.read_text(encoding="utf-8")) == {"k": "v"}

    def test_values_survive_new_instance(self, tmp_path):
        path = tmp_path / "store.json"
        JsonFileKeyValueStore(path).set("a", "1")
        JsonFileKeyValueStore(path).set("b", "2")
        store = JsonFileKeyValueStore(path)
        assert store.get("a") == "1"
        assert store.get("b") == "2"

    def test_remove(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path / "store.json")
        store.set("a", "1")
        store.set("b", "2")
        store.remove("a")
        store.remove("never-set")
        assert store.get("a") is None
        assert store.get("b") == "2"

    @pytest.mark.parametrize("content", ["{not json", "[]", '"text"'])
    def test_corrupt_file_reads_empty(self, tmp_path, content):
        path = tmp_path / "store.json"
        path.write_text(content, encoding="utf-8")
        store = JsonFileKeyValueStore(path)
        assert store.get("k") is None
        store.set("k", "v")
        assert store.get("k") == "v"

    @pytest.mark.parametrize("content", [
        b"\xff\xfe",
        b"{\"budgetCalculator\": \"\xff\xfe\"}",
        b"[" * 200000,
    ], ids=["bad-utf8", "bad-utf8-value", "deep-nesting"])
    def test_undecodable_file_reads_empty(self, tmp_path, content):
        path = tmp_path / "store.json"
        path.write_bytes(content)
        assert BudgetPersistence(JsonFileKeyValueStore(path)).load() is None

        store = JsonFileKeyValueStore(path)
        store.set("k", "v")
        assert store.get("k") == "v"

    def test_non_text_values_are_ignored(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"k": {"nested": 1}, "t": "text"}), encoding="utf-8")
        store = JsonFileKeyValueStore(path)
        assert store.get("k") is None
        assert store.get("t") == "text"

    def test_write_failure_raises_storage_error(self, tmp_path, monkeypatch):
        calls = []

        def failing_replace(src, dst):
            calls.append(src)
            raise OSError("file is locked")

        monkeypatch.setattr(os, "replace", failing_replace)
        store = JsonFileKeyValueStore(tmp_path / "store.json", retry_attempts=2)
        with pytest.raises(StorageError, match="file is locked"):
            store.set("k", "v")
        assert len(calls) == 2
        assert list(tmp_path.iterdir()) == []

    def test_transient_write_failure_is_retried(self, tmp_path, monkeypatch):
        real_replace = os.replace
        attempts = []

        def flaky_replace(src, dst):
            attempts.append(src)
            if len(attempts) == 1:
                raise OSError("briefly locked")
            return real_replace(src, dst)

        monkeypatch.setattr(os, "replace", flaky_replace)
        store = JsonFileKeyValueStore(tmp_path / "store.json", retry_attempts=3)
        store.set("k", "v")
        assert len(attempts) == 2
        assert store.get("k") == "v"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

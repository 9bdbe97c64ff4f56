"""Tests for swagger_validator.store."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from swagger_validator.models import SchemaEntry, ValidatorConfig
from swagger_validator.store import (
    DiskSchemaStore,
    MemorySchemaStore,
    SchemaStore,
    create_store,
)


def _entry(base_path: str = "/api", prop_type: str = "string") -> SchemaEntry:
    return SchemaEntry(
        base_path=base_path,
        compiled={"type": "object", "properties": {"q": {"type": prop_type}}},
    )


# ---------------------------------------------------------------------------
# MemorySchemaStore
# ---------------------------------------------------------------------------


class TestMemorySchemaStore:
    def test_put_and_get(self) -> None:
        store = MemorySchemaStore()
        store.put("/get/a", _entry())
        assert store.get("/get/a") == _entry()

    def test_miss_returns_none(self) -> None:
        assert MemorySchemaStore().get("/get/missing") is None

    def test_overwrite_in_place(self) -> None:
        store = MemorySchemaStore()
        store.put("/get/a", _entry("/v1"))
        store.put("/get/a", _entry("/v2"))
        assert len(store) == 1
        assert store.get("/get/a").base_path == "/v2"

    def test_keys_contains_clear(self) -> None:
        store = MemorySchemaStore()
        store.put("/get/a", _entry())
        store.put("/post/a", _entry())
        assert sorted(store.keys()) == ["/get/a", "/post/a"]
        assert "/get/a" in store
        store.clear()
        assert len(store) == 0
        assert "/get/a" not in store

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MemorySchemaStore(), SchemaStore)

    def test_entries_are_immutable(self) -> None:
        entry = _entry()
        with pytest.raises(ValueError):
            entry.base_path = "/other"

    def test_concurrent_writers_and_readers(self) -> None:
        store = MemorySchemaStore()
        seen: list[SchemaEntry | None] = []

        def writer(base_path: str) -> None:
            for _ in range(200):
                store.put("/get/a", _entry(base_path, "integer" if base_path == "/v1" else "string"))

        def reader() -> None:
            for _ in range(200):
                seen.append(store.get("/get/a"))

        threads = [
            threading.Thread(target=writer, args=("/v1",)),
            threading.Thread(target=writer, args=("/v2",)),
            threading.Thread(target=reader),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        for entry in seen:
            if entry is None:
                continue
            expected = "integer" if entry.base_path == "/v1" else "string"
            assert entry.compiled["properties"]["q"]["type"] == expected


# ---------------------------------------------------------------------------
# DiskSchemaStore
# ---------------------------------------------------------------------------


class TestDiskSchemaStore:
    def test_put_and_get(self, tmp_path: Path) -> None:
        store = DiskSchemaStore(tmp_path)
        try:
            store.put("/get/a", _entry())
            assert store.get("/get/a") == _entry()
            assert store.get("/get/missing") is None
        finally:
            store.close()

    def test_shared_between_instances(self, tmp_path: Path) -> None:
        writer = DiskSchemaStore(tmp_path)
        writer.put("/get/a", _entry("/v9"))
        writer.close()

        reader = DiskSchemaStore(tmp_path)
        try:
            assert reader.get("/get/a").base_path == "/v9"
            assert list(reader.keys()) == ["/get/a"]
            assert "/get/a" in reader
            assert len(reader) == 1
        finally:
            reader.close()

    def test_clear(self, tmp_path: Path) -> None:
        store = DiskSchemaStore(tmp_path)
        try:
            store.put("/get/a", _entry())
            store.clear()
            assert len(store) == 0
        finally:
            store.close()

    def test_directory(self, tmp_path: Path) -> None:
        store = DiskSchemaStore(tmp_path)
        try:
            assert store.directory == str(tmp_path / "schemas")
        finally:
            store.close()


# ---------------------------------------------------------------------------
# create_store
# ---------------------------------------------------------------------------


class TestCreateStore:
    def test_default_is_memory(self) -> None:
        assert isinstance(create_store(ValidatorConfig()), MemorySchemaStore)

    def test_disk_with_explicit_dir(self, tmp_path: Path) -> None:
        store = create_store(ValidatorConfig(store="disk", store_dir=str(tmp_path)))
        try:
            assert isinstance(store, DiskSchemaStore)
            assert store.directory == str(tmp_path / "schemas")
        finally:
            store.close()

    def test_disk_defaults_to_cache_dir(self, isolated_config: Path) -> None:
        from unittest.mock import patch

        with patch("swagger_validator.config._is_xdg_platform", return_value=True):
            store = create_store(ValidatorConfig(store="disk"))
        try:
            assert store.directory == str(isolated_config / "cache" / "swagger-validator" / "schemas")
        finally:
            store.close()

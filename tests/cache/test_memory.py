"""Tests for InMemoryLocalStore."""

import pytest

from tiercache.cache import InMemoryLocalStore, LocalStore


@pytest.fixture
def store() -> InMemoryLocalStore:
    return InMemoryLocalStore()


class TestFetchPersist:
    def test_fetch_miss(self, store: InMemoryLocalStore) -> None:
        assert store.fetch("nonexistent") is None

    def test_persist_and_fetch(self, store: InMemoryLocalStore) -> None:
        store.persist("k1", "v1")
        assert store.fetch("k1") == "v1"

    def test_persist_overwrites(self, store: InMemoryLocalStore) -> None:
        store.persist("k1", "v1")
        store.persist("k1", "v2")
        assert store.fetch("k1") == "v2"
        assert store.size == 1

    def test_seeded(self) -> None:
        store = InMemoryLocalStore({"a": 1, "b": 2})
        assert store.fetch("b") == 2
        assert store.size == 2

    def test_seed_mapping_is_copied(self) -> None:
        seed = {"a": 1}
        store = InMemoryLocalStore(seed)
        store.persist("b", 2)
        assert "b" not in seed


class TestHousekeeping:
    def test_invalidate_existing(self, store: InMemoryLocalStore) -> None:
        store.persist("k1", "v1")
        assert store.invalidate("k1") is True
        assert store.fetch("k1") is None

    def test_invalidate_nonexistent(self, store: InMemoryLocalStore) -> None:
        assert store.invalidate("nonexistent") is False

    def test_clear(self, store: InMemoryLocalStore) -> None:
        store.persist("k1", "v1")
        store.persist("k2", "v2")
        assert store.clear() == 2
        assert store.size == 0

    def test_contains(self, store: InMemoryLocalStore) -> None:
        store.persist("k1", "v1")
        assert "k1" in store
        assert "k2" not in store

    def test_snapshot_is_a_copy(self, store: InMemoryLocalStore) -> None:
        store.persist("k1", "v1")
        snap = store.snapshot()
        snap["k2"] = "v2"
        assert store.size == 1


def test_satisfies_local_store_protocol() -> None:
    assert isinstance(InMemoryLocalStore(), LocalStore)

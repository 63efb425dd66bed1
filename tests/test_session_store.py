import threading
from datetime import timedelta

from storefront.core.session_store import SessionStore

from .conftest import FakeClock


def test_get_returns_value_before_expiry(session_store: SessionStore, clock: FakeClock):
    session_store.set("k", "v", clock.now + timedelta(minutes=30))

    clock.advance(minutes=29, seconds=59)

    assert session_store.get("k") == "v"


def test_get_returns_none_at_expiry(session_store: SessionStore, clock: FakeClock):
    session_store.set("k", "v", clock.now + timedelta(minutes=30))

    clock.advance(minutes=30)

    assert session_store.get("k") is None
    # expired entries are evicted on read
    assert len(session_store) == 0


def test_get_missing_key(session_store: SessionStore):
    assert session_store.get("missing") is None


def test_set_overwrites_existing_entry(session_store: SessionStore, clock: FakeClock):
    session_store.set("k", "old", clock.now + timedelta(minutes=1))
    session_store.set("k", "new", clock.now + timedelta(minutes=10))

    clock.advance(minutes=5)

    assert session_store.get("k") == "new"
    assert len(session_store) == 1


def test_remove_is_idempotent(session_store: SessionStore, clock: FakeClock):
    session_store.set("k", "v", clock.now + timedelta(minutes=30))

    session_store.remove("k")
    session_store.remove("k")
    session_store.remove("never-set")

    assert session_store.get("k") is None
    assert "k" not in session_store


def test_purge_expired(session_store: SessionStore, clock: FakeClock):
    session_store.set("short", 1, clock.now + timedelta(minutes=1))
    session_store.set("long", 2, clock.now + timedelta(minutes=60))

    clock.advance(minutes=2)

    assert session_store.purge_expired() == 1
    assert len(session_store) == 1
    assert session_store.get("long") == 2


def test_max_entries_purges_expired_on_set(clock: FakeClock):
    store = SessionStore(clock=clock, max_entries=2)
    store.set("a", 1, clock.now + timedelta(minutes=1))
    store.set("b", 2, clock.now + timedelta(minutes=1))

    clock.advance(minutes=5)
    store.set("c", 3, clock.now + timedelta(minutes=1))

    assert len(store) == 1
    assert store.get("c") == 3


def test_clear(session_store: SessionStore, clock: FakeClock):
    for i in range(3):
        session_store.set(f"k{i}", i, clock.now + timedelta(minutes=1))

    session_store.clear()

    assert len(session_store) == 0


def test_concurrent_access(session_store: SessionStore, clock: FakeClock):
    expires_at = clock.now + timedelta(minutes=30)

    def worker(n: int) -> None:
        for i in range(200):
            key = f"{n}-{i}"
            session_store.set(key, i, expires_at)
            assert session_store.get(key) == i
            if i % 2:
                session_store.remove(key)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(session_store) == 8 * 100

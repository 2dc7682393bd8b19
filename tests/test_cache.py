"""
TTL cache tests
"""
from disfagia_monitor.database import cache as cache_module
from disfagia_monitor.database.cache import TTLCache


def test_entry_expires_after_ttl(monkeypatch):
    clock = [100.0]
    monkeypatch.setattr(cache_module.time, "monotonic", lambda: clock[0])
    cache = TTLCache(ttl_seconds=10)

    cache.set("triage:caregiver-1", "session")
    assert cache.get("triage:caregiver-1") == "session"

    clock[0] = 110.0
    assert cache.get("triage:caregiver-1") is None


def test_set_sweeps_expired_entries(monkeypatch):
    clock = [100.0]
    monkeypatch.setattr(cache_module.time, "monotonic", lambda: clock[0])
    cache = TTLCache(ttl_seconds=10)

    cache.set("triage:caregiver-1", "abandoned")
    clock[0] = 105.0
    cache.set("triage:caregiver-2", "recent")

    clock[0] = 112.0
    cache.set("triage:caregiver-3", "new")

    assert "triage:caregiver-1" not in cache._cache
    assert cache.get("triage:caregiver-2") == "recent"
    assert cache.get("triage:caregiver-3") == "new"

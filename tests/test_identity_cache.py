from __future__ import annotations

from actorsync.core.identity.cache import IdentityCache


def test_miss_notifies_and_returns_none():
    misses = []
    cache = IdentityCache(on_miss=misses.append)
    assert cache.get("u1") is None
    assert misses == ["u1"]


def test_hit_does_not_notify():
    misses = []
    cache = IdentityCache(on_miss=misses.append)
    cache.set("u1", {"email": "a@b.com"})
    assert cache.get("u1")["id"] == "u1"
    assert misses == []


def test_peek_never_notifies():
    misses = []
    cache = IdentityCache(on_miss=misses.append)
    assert cache.peek("nobody") is None
    assert cache.peek(None) is None
    assert misses == []


def test_set_stamps_id_and_falls_back_to_email():
    cache = IdentityCache()
    stored = cache.set("u1", {"id": "spoofed", "email": "ann@example.com"})
    assert stored["id"] == "u1"
    assert stored["displayName"] == "ann@example.com"
    assert cache.peek("u1") == stored


def test_set_keeps_supplied_display_name():
    cache = IdentityCache()
    stored = cache.set("u1", {"email": "ann@example.com", "displayName": "Ann"})
    assert stored["displayName"] == "Ann"


def test_fallback_field_is_configurable():
    cache = IdentityCache(display_name_fallback_field="handle")
    stored = cache.set("u1", {"handle": "@ann", "email": "ann@example.com"})
    assert stored["displayName"] == "@ann"


def test_set_none_is_noop():
    cache = IdentityCache()
    assert cache.set("u1", None) is None
    assert "u1" not in cache
    assert len(cache) == 0


def test_set_overwrites_and_does_not_alias_input():
    cache = IdentityCache()
    src = {"email": "a@b.com"}
    cache.set("u1", src)
    assert "id" not in src
    cache.set("u1", {"email": "c@d.com"})
    assert cache.peek("u1")["email"] == "c@d.com"
    assert len(cache) == 1

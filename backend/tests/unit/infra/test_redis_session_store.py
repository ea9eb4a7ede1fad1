"""Redis-specific behavior of RedisSessionStore (key layout and TTL), via fakeredis."""

from __future__ import annotations

from datetime import timedelta

import fakeredis
import pytest

from tokengate.infra.redis import RedisSessionStore
from tokengate.services._shared.ports import token_digest


@pytest.fixture
def fake_redis():
    """Provide a fresh FakeRedis instance for each test."""
    r = fakeredis.FakeRedis()
    r.flushall()
    return r


@pytest.fixture
def store(fake_redis):
    return RedisSessionStore(r=fake_redis, ttl=timedelta(hours=1))


def test_raw_token_is_never_stored(store, fake_redis):
    store.put(1, "very-secret-refresh-token")
    for key in fake_redis.keys("*"):
        assert b"very-secret-refresh-token" not in key
        assert b"very-secret-refresh-token" not in fake_redis.get(key)


def test_keys_expire_with_refresh_ttl(store, fake_redis):
    store.put(1, "token")
    digest = token_digest("token")

    for key in ("rs:a:1", f"rs:t:{digest}"):
        ttl = fake_redis.ttl(key)
        assert 0 < ttl <= 3600


def test_rotation_drops_previous_reverse_key(store, fake_redis):
    store.put(1, "old")
    store.put(1, "new")

    assert fake_redis.exists(f"rs:t:{token_digest('old')}") == 0
    assert fake_redis.get("rs:a:1") == token_digest("new").encode()


def test_remove_of_superseded_token_keeps_live_session(store, fake_redis):
    # Simulate a stale reverse key left behind (e.g. by a concurrent writer).
    store.put(1, "live")
    fake_redis.set(f"rs:t:{token_digest('stale')}", "1")

    record = store.remove("stale")

    assert record is not None and record.account_id == 1
    assert store.get("live") == 1

import pytest

from clickshot.services.cache import STALE_WARNING, LeaderboardCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def cache(clock):
    return LeaderboardCache(ttl_seconds=300, clock=clock)


def test_serves_fresh_value_within_ttl(cache, clock):
    calls = []

    def compute():
        calls.append(1)
        return {"n": len(calls)}

    assert cache.get_or_compute(compute) == {"n": 1}
    clock.now += 299
    assert cache.get_or_compute(compute) == {"n": 1}
    clock.now += 1
    assert cache.get_or_compute(compute) == {"n": 2}


def test_serves_stale_value_on_failure(cache, clock):
    cache.get_or_compute(lambda: {"hall_of_fame": []})
    clock.now += 301

    def broken():
        raise RuntimeError("database unavailable")

    result = cache.get_or_compute(broken)
    assert result == {"hall_of_fame": [], "warning": STALE_WARNING}


def test_failure_without_cache_propagates(cache):
    def broken():
        raise RuntimeError("database unavailable")

    with pytest.raises(RuntimeError):
        cache.get_or_compute(broken)
    assert cache.age() is None


def test_clear(cache):
    cache.get_or_compute(lambda: {"a": 1})
    cache.clear()
    assert cache.age() is None
    assert cache.get_or_compute(lambda: {"a": 2}) == {"a": 2}

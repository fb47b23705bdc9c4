from vya_settlement.core.cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_entries_expire_after_ttl():
    clock = FakeClock()
    cache = TTLCache(default_ttl=10, clock=clock)
    cache.set("customer:123", "cus_1")

    clock.now += 10
    assert cache.get("customer:123") == "cus_1"

    clock.now += 0.5
    assert cache.get("customer:123") is None
    assert len(cache) == 0


def test_ttl_can_be_overridden_per_read():
    clock = FakeClock()
    cache = TTLCache(default_ttl=10, clock=clock)
    cache.set("k", 1)
    clock.now += 30
    assert cache.get("k", ttl=60) == 1


def test_invalidate_drops_only_that_key():
    cache = TTLCache()
    cache.set("customer:1", "a")
    cache.set("customer:2", "b")

    cache.invalidate("customer:1")
    cache.invalidate("missing")

    assert cache.get("customer:1") is None
    assert cache.get("customer:2") == "b"
    assert len(cache) == 1

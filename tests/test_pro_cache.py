from app.services.pro_cache import ProStatusCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_entries_expire_after_ttl():
    clock = FakeClock()
    cache = ProStatusCache(ttl_seconds=300, clock=clock)

    cache.set("user-1", True)
    clock.now += 299
    assert cache.get("user-1") is True

    clock.now += 1
    assert cache.get("user-1") is None


def test_false_is_cached_distinctly_from_missing():
    cache = ProStatusCache(clock=FakeClock())
    cache.set("user-1", False)
    assert cache.get("user-1") is False
    assert cache.get("user-2") is None


def test_invalidate_and_clear():
    cache = ProStatusCache(clock=FakeClock())
    cache.set("user-1", True)
    cache.set("user-2", True)

    cache.invalidate("user-1")
    assert cache.get("user-1") is None
    assert cache.get("user-2") is True

    cache.clear()
    assert cache.get("user-2") is None

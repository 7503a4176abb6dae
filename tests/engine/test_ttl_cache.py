from replyassist.engine.cache import TTLCache
from replyassist.engine.circuit_breaker import QuotaCircuitBreaker


class TestTTLCache:

    def test_get_missing(self, clock):
        cache = TTLCache(10, clock=clock)
        assert cache.get("k") is None
        assert cache.misses == 1

    def test_set_then_get(self, clock):
        cache = TTLCache(10, clock=clock)
        cache.set("k", "v")
        assert cache.get("k") == "v"
        assert cache.hits == 1

    def test_expires_at_ttl(self, clock):
        cache = TTLCache(10, clock=clock)
        cache.set("k", "v")
        clock.advance(9)
        assert cache.get("k") == "v"
        clock.advance(1)
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_overwrite_refreshes_timestamp(self, clock):
        cache = TTLCache(10, clock=clock)
        cache.set("k", 1)
        clock.advance(8)
        cache.set("k", 2)
        clock.advance(8)
        assert cache.get("k") == 2

    def test_evicts_expired_before_oldest(self, clock):
        cache = TTLCache(10, clock=clock, max_entries=2)
        cache.set("old", 1)
        clock.advance(11)
        cache.set("a", 2)
        cache.set("b", 3)
        assert cache.get("a") == 2
        assert cache.get("b") == 3
        assert len(cache) == 2

    def test_evicts_oldest_when_full(self, clock):
        cache = TTLCache(100, clock=clock, max_entries=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)
        assert cache.get("a") is None
        assert cache.get("c") == 3

    def test_clear(self, clock):
        cache = TTLCache(10, clock=clock)
        cache.set(("q", ("a", "b")), "v")
        cache.clear()
        assert len(cache) == 0


class TestQuotaCircuitBreaker:

    def test_starts_closed(self, clock):
        cb = QuotaCircuitBreaker(300, clock=clock)
        assert not cb.is_open()
        assert cb.state == "closed"
        assert cb.remaining_cooldown() == 0

    def test_trip_opens_for_cooldown(self, clock):
        cb = QuotaCircuitBreaker(300, clock=clock)
        cb.trip("quota")
        assert cb.is_open()
        assert cb.remaining_cooldown() == 300

        clock.advance(299.5)
        assert cb.is_open()
        assert cb.remaining_cooldown() == 1

        clock.advance(0.5)
        assert not cb.is_open()
        assert cb.state == "closed"

    def test_retrip_extends_window(self, clock):
        cb = QuotaCircuitBreaker(300, clock=clock)
        cb.trip()
        clock.advance(200)
        cb.trip()
        assert cb.remaining_cooldown() == 300

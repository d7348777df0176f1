"""
Tests for the raw sheet cache.
"""

from liftlog.cache import SheetCache


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestSheetCache:
    """Tests for SheetCache."""

    def test_empty_cache_is_expired(self):
        cache = SheetCache(60)

        assert cache.is_expired()
        assert cache.get() is None
        assert cache.get_stale() is None

    def test_fresh_snapshot_returned(self):
        """Test rows are served while within the TTL."""
        clock = FakeClock()
        cache = SheetCache(60, clock=clock)
        rows = [["a", "b"]]

        cache.put(rows)
        clock.now += 59

        assert not cache.is_expired()
        assert cache.get() is rows

    def test_expired_snapshot(self):
        """Test rows expire after the TTL but remain available as stale."""
        clock = FakeClock()
        cache = SheetCache(60, clock=clock)
        cache.put([["a"]])

        clock.now += 60

        assert cache.is_expired()
        assert cache.get() is None
        assert cache.get_stale() == [["a"]]

    def test_put_resets_age(self):
        clock = FakeClock()
        cache = SheetCache(10, clock=clock)
        cache.put([["old"]])
        clock.now += 20

        cache.put([["new"]])

        assert cache.get() == [["new"]]

    def test_clear(self):
        cache = SheetCache(60)
        cache.put([["a"]])

        cache.clear()

        assert cache.get_stale() is None
        assert cache.is_expired()

from subtitle_payload.cache import TTLCache, content_key
from subtitle_payload.results import Success


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def _result(name):
    return Success(content="Hello", filename=name, encoding="utf-8")


def test_get_returns_result_until_expiry(monkeypatch):
    cache = TTLCache(default_ttl=10)
    clock = FakeClock()
    monkeypatch.setattr(cache, "_now", clock)
    key = content_key(b"payload", "decode", "a.srt")
    cache.set(key, _result("a.srt"))
    assert cache.get(key).filename == "a.srt"
    clock.now += 11
    assert cache.get(key) is None
    assert len(cache) == 0


def test_max_size_drops_oldest_insertions(monkeypatch):
    cache = TTLCache(default_ttl=10, max_size=2)
    clock = FakeClock()
    monkeypatch.setattr(cache, "_now", clock)
    cache.set("a", _result("a.srt"))
    cache.set("b", _result("b.srt"))
    cache.set("a", _result("a2.srt"))
    cache.set("c", _result("c.srt"))
    assert len(cache) == 2
    assert cache.get("b") is None
    assert cache.get("a").filename == "a2.srt"
    assert cache.get("c").filename == "c.srt"


def test_expired_entries_go_before_live_ones(monkeypatch):
    cache = TTLCache(default_ttl=10, max_size=2)
    clock = FakeClock()
    monkeypatch.setattr(cache, "_now", clock)
    cache.set("a", _result("a.srt"))
    clock.now += 20
    cache.set("b", _result("b.srt"))
    cache.set("c", _result("c.srt"))
    assert cache.get("b").filename == "b.srt"
    assert cache.get("c").filename == "c.srt"


def test_clear():
    cache = TTLCache()
    cache.set("a", _result("a.srt"))
    cache.clear()
    assert len(cache) == 0


def test_content_key_depends_on_every_part():
    base = content_key(b"payload", "decode", "a.srt", None)
    assert base == content_key(b"payload", "decode", "a.srt", None)
    assert base != content_key(b"payload", "decode", "b.srt", None)
    assert base != content_key(b"payload", "decode", "a.srt", "windows-1251")
    assert base != content_key(b"other", "decode", "a.srt", None)

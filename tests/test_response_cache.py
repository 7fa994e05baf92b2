"""
Test the SQLite response cache.
"""

import pytest

from tflgtfs.data.response_cache import ResponseCache


@pytest.mark.usefixtures("cache_database")
class TestResponseCache:

    def test_miss_returns_none(self):
        cache = ResponseCache()
        assert cache.get("Line/Route") is None

    def test_put_then_get(self):
        cache = ResponseCache()
        cache.put("Line/victoria/StopPoints", '[{"naptanId": "940GZZLUVIC"}]')

        assert cache.get("Line/victoria/StopPoints") == '[{"naptanId": "940GZZLUVIC"}]'

    def test_put_replaces_existing(self):
        cache = ResponseCache()
        cache.put("Line/Route", "[]")
        cache.put("Line/Route", "[1]")

        assert cache.get("Line/Route") == "[1]"

    def test_entries_survive_new_instance(self):
        ResponseCache().put("Line/Route", "[]")
        assert ResponseCache().get("Line/Route") == "[]"

    def test_clear(self):
        cache = ResponseCache()
        cache.put("a", "1")
        cache.put("b", "2")

        assert cache.clear() == 2
        assert cache.get("a") is None

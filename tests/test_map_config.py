"""
Tests for MapConfig.
"""
from map_config import MapConfig, DEFAULT_CATEGORY, WIKIDATA_API


def test_defaults():
    config = MapConfig()
    assert config.api_url == "https://it.wikipedia.org/w/api.php"
    assert config.site_host == "it.wikipedia.org"
    assert config.wikidata_api == WIKIDATA_API
    assert config.default_category == DEFAULT_CATEGORY
    assert (config.private_data, config.public_data) == ("private", "public")


def test_from_env(monkeypatch):
    monkeypatch.setenv("WIKIPEDIANS_MAP_LANG", "en")
    monkeypatch.setenv("WIKIPEDIANS_MAP_PRIVATE_DATA", "/tmp/store")
    monkeypatch.setenv("WIKIPEDIANS_MAP_THROTTLE", "2")
    monkeypatch.setenv("WIKIPEDIANS_MAP_CATEGORY", "Category:Wikipedians in Italy")
    config = MapConfig.from_env()

    assert config.api_url == "https://en.wikipedia.org/w/api.php"
    assert config.private_data == "/tmp/store"
    assert config.public_data == "public"
    assert config.throttle == 2.0
    assert config.max_retries == 5
    assert config.default_category == "Category:Wikipedians in Italy"

"""
Tests for the JSON emitter.
"""
import json
import os

import pytest

from category_store import StoreWriteError
from map_aggregator import MapArea
from map_emitter import emit


@pytest.fixture
def areas():
    root = MapArea("Categoria:Utenti dall'Italia", 3, 0)
    child = MapArea("Categoria:Utenti di Forlì", 1, 1)
    child.set_lat_lng(44.22, 12.04)
    child.osm_id = "42649"
    return {root.title: root, child.title: child}


class TestEmit:
    """Tests for emit()."""

    def test_writes_both_documents(self, areas, tmp_path):
        out = tmp_path / "public"
        min_path, pretty_path = emit(areas, str(out))

        assert os.path.basename(min_path) == "data.min.js"
        assert os.path.basename(pretty_path) == "data.js"
        with open(min_path, encoding="utf-8") as f:
            minified = json.load(f)
        with open(pretty_path, encoding="utf-8") as f:
            pretty = json.load(f)
        assert minified == pretty == [
            {"title": "Categoria:Utenti dall'Italia", "count": 3, "depth": 0},
            {"title": "Categoria:Utenti di Forlì", "count": 1, "depth": 1,
             "lat_lng": [44.22, 12.04], "osm_id": "42649"},
        ]

    def test_formatting(self, areas, tmp_path):
        min_path, pretty_path = emit(areas, str(tmp_path))
        with open(min_path, encoding="utf-8") as f:
            raw_min = f.read()
        with open(pretty_path, encoding="utf-8") as f:
            raw_pretty = f.read()

        assert "\n" not in raw_min
        assert ", " not in raw_min
        assert "\n    {" in raw_pretty
        assert "Forlì" in raw_min

    def test_overwrites(self, areas, tmp_path):
        emit(areas, str(tmp_path))
        emit({}, str(tmp_path))
        with open(tmp_path / "data.js", encoding="utf-8") as f:
            assert json.load(f) == []

    def test_unwritable_output(self, areas, tmp_path):
        blocker = tmp_path / "public"
        blocker.write_text("x")
        with pytest.raises(StoreWriteError):
            emit(areas, str(blocker))

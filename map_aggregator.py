"""
map_aggregator.py
=================
Offline second pass over a crawled CategoryStore: one MapArea per category
with the transitive page count, the depth below the root, and the
coordinates / OSM relation found during the crawl.
"""

from typing import Dict, Optional, Tuple

from category_store import PAGES, CHILDREN, LATLNG, OSM_ID
from logit import logit, INFO, WARN


class AggregationCycleError(RuntimeError):
    pass


class MapArea:
    def __init__(self, title: str, count: int, depth: int):
        self.title = title
        self.count = count
        self.depth = depth
        self.lat_lng: Optional[Tuple[float, float]] = None
        self.osm_id: Optional[str] = None

    def set_lat_lng(self, lat: float, lng: float):
        self.lat_lng = (lat, lng)

    def to_json(self) -> dict:
        out = {"title": self.title, "count": self.count, "depth": self.depth}
        if self.lat_lng is not None:
            out["lat_lng"] = list(self.lat_lng)
        if self.osm_id is not None:
            out["osm_id"] = self.osm_id
        return out

    def __eq__(self, other):
        if not isinstance(other, MapArea):
            return NotImplemented
        return self.to_json() == other.to_json()

    def __repr__(self):
        return f"MapArea({self.title!r}, count={self.count}, depth={self.depth})"


def deep_count(store, cat: str, visited: Dict[str, Optional[MapArea]], level: int = 0) -> int:
    """Pages in `cat` plus pages in all of its descendants.

    `visited` maps each title to its MapArea; None while the title is still
    being counted, so meeting a None again means the tree loops.
    """
    if cat in visited:
        raise AggregationCycleError(f"Recursion in deep count on {cat}")
    visited[cat] = None

    n = len(store.read_list(PAGES, cat))
    for child in store.read_unique(CHILDREN, cat):
        if child not in visited:
            n += deep_count(store, child, visited, level + 1)
        elif visited[child] is None:
            raise AggregationCycleError(f"Recursion in deep count: {child} is an ancestor of {cat}")
        else:
            # listed under more than one parent: counted again, not walked again
            n += visited[child].count

    logit(INFO, f"count {cat} = \t {n}")
    visited[cat] = MapArea(cat, n, level)
    return n


def parse_latlng(raw: str) -> Optional[Tuple[float, float]]:
    lat, sep, lng = raw.partition(";")
    if not sep:
        return None
    try:
        return float(lat), float(lng)
    except ValueError:
        return None


def fill_geodata(store, areas: Dict[str, MapArea]):
    for area in areas.values():
        raw = store.read_scalar(LATLNG, area.title)
        if raw:
            latlng = parse_latlng(raw)
            if latlng:
                area.set_lat_lng(*latlng)
            else:
                logit(WARN, f"bad latlng {raw!r} for {area.title}")

        osmid = store.read_scalar(OSM_ID, area.title)
        if osmid:
            area.osm_id = osmid


def aggregate(store, root_title: str) -> Dict[str, MapArea]:
    """MapAreas keyed by title, in the order the categories were entered."""
    visited: Dict[str, Optional[MapArea]] = {}
    deep_count(store, root_title, visited)
    fill_geodata(store, visited)
    return visited

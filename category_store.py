"""
category_store.py
=================
Append-only, line-oriented store: category title -> lines, one directory per
dimension under the private data root.

    private/
        pages/            user names listed in the category
        children/         sub-category titles
        wikidata-item/    Q-id of the category page
        geography-item/   Q-id from P2633 on that item
        latlng/           "lat;lng" from P625 on the geography item
        osm-id/           P402 on the geography item

Titles never reach the filesystem raw: an uppercase ASCII letter becomes "^"
plus its lowercase form and every other byte outside [a-z0-9_-] is
percent-encoded in lowercase hex. Names carry no uppercase letters, so titles
that differ only in case stay apart on case-insensitive filesystems, and "/",
"..", ":" and friends can't escape the dimension directory. Very long titles
are shortened to a prefix plus an md5 digest.
"""

import hashlib
import os
import re
import string
import urllib.parse
from typing import List, Optional, Set

PAGES          = "pages"
CHILDREN       = "children"
WIKIDATA_ITEM  = "wikidata-item"
GEOGRAPHY_ITEM = "geography-item"
LATLNG         = "latlng"
OSM_ID         = "osm-id"

DIMENSIONS = (PAGES, CHILDREN, WIKIDATA_ITEM, GEOGRAPHY_ITEM, LATLNG, OSM_ID)

SAFE_CHARS   = frozenset(string.ascii_lowercase + string.digits + "_-")
UPPER_MARK   = "^"
UPPER_RE     = re.compile(r"\^([a-z])")
MAX_FILENAME = 200
HASHED_MARK  = "~"


class StoreWriteError(OSError):
    """The store directory (or one of its files) is not writable."""


def title_to_filename(title: str) -> str:
    if not title:
        raise ValueError("empty title can't be stored")
    parts = []
    for ch in title:
        if ch in SAFE_CHARS:
            parts.append(ch)
        elif "A" <= ch <= "Z":
            parts.append(UPPER_MARK + ch.lower())
        else:
            parts.append("".join(f"%{b:02x}" for b in ch.encode("utf-8")))
    name = "".join(parts)
    if len(name) > MAX_FILENAME:
        digest = hashlib.md5(title.encode("utf-8")).hexdigest()
        name = f"{HASHED_MARK}{name[:MAX_FILENAME - 40]}-{digest}"
    return name


def filename_to_title(name: str) -> Optional[str]:
    """Inverse of title_to_filename; None for hashed (long) names."""
    if name.startswith(HASHED_MARK):
        return None
    name = UPPER_RE.sub(lambda m: m.group(1).upper(), name)
    return urllib.parse.unquote(name)


class CategoryStore:
    def __init__(self, root):
        self.root = root
        for dim in DIMENSIONS:
            try:
                os.makedirs(os.path.join(root, dim), exist_ok=True)
            except OSError as e:
                raise StoreWriteError(f"Can't create {os.path.join(root, dim)}: {e}") from e

    def path(self, dimension: str, title: str) -> str:
        if dimension not in DIMENSIONS:
            raise ValueError(f"unknown dimension {dimension!r}")
        return os.path.join(self.root, dimension, title_to_filename(title))

    # ── writes ─────────────────────────────────────────────────────────

    def append(self, dimension: str, title: str, line: str):
        path = self.path(dimension, title)
        try:
            with open(path, "a", encoding="utf-8") as f:
                f.write(f"{line}\n")
                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            raise StoreWriteError(f"Can't write in {path}: {e}") from e

    def put(self, dimension: str, title: str, value: str):
        """Replace a single-value file atomically."""
        path = self.path(dimension, title)
        tmp = path + ".tmp"
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                f.write(f"{value}\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except OSError as e:
            raise StoreWriteError(f"Can't write in {path}: {e}") from e

    # ── reads (errors mean "absent") ───────────────────────────────────

    def _read(self, dimension: str, title: str) -> Optional[str]:
        try:
            with open(self.path(dimension, title), "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError):
            return None

    def read_unique(self, dimension: str, title: str) -> List[str]:
        """Unique non-empty lines, in first-seen order."""
        text = self._read(dimension, title)
        if text is None:
            return []
        lines = (line.strip() for line in text.split("\n"))
        return list(dict.fromkeys(line for line in lines if line))

    def read_list(self, dimension: str, title: str) -> Set[str]:
        return set(self.read_unique(dimension, title))

    def read_scalar(self, dimension: str, title: str) -> Optional[str]:
        text = self._read(dimension, title)
        if text is None:
            return None
        return text.strip() or None

    def titles(self, dimension: str) -> List[str]:
        if dimension not in DIMENSIONS:
            raise ValueError(f"unknown dimension {dimension!r}")
        try:
            names = sorted(os.listdir(os.path.join(self.root, dimension)))
        except OSError:
            return []
        out = []
        for name in names:
            if "." in name:  # leftover temp file
                continue
            title = filename_to_title(name)
            if title is not None:
                out.append(title)
        return out

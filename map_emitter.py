"""Write the MapAreas as data.min.js and data.js for the Leaflet page."""

import json
import os
from typing import Dict, Tuple

from category_store import StoreWriteError
from logit import logit, INFO

MINIFIED = "data.min.js"
PRETTY   = "data.js"


def emit(areas: Dict, public_data: str) -> Tuple[str, str]:
    data = [area.to_json() for area in areas.values()]
    min_path = os.path.join(public_data, MINIFIED)
    pretty_path = os.path.join(public_data, PRETTY)
    try:
        os.makedirs(public_data, exist_ok=True)
        with open(min_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, separators=(",", ":"))
        with open(pretty_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=4)
    except OSError as e:
        raise StoreWriteError(f"Can't write in {public_data}: {e}") from e
    logit(INFO, f"wrote {len(data)} areas to {min_path} and {pretty_path}")
    return min_path, pretty_path

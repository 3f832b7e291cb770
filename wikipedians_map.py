#!/usr/bin/env python3
"""
wikipedians_map.py
==================
Build the Leaflet Wikipedians map dataset.

  1. Crawl the category tree under CATEGORY (user categories by place) into
     the private store, with Wikidata coordinates for each category.
  2. Count users per category, sub-categories included.
  3. Write public/data.min.js and public/data.js.

Usage:
    python wikipedians_map.py ["Categoria:Utenti dall'Italia"]

Paths and endpoints come from WIKIPEDIANS_MAP_* environment variables
(see map_config.py).
"""

import argparse
import io
import sys

from category_crawler import crawl
from category_store import CategoryStore, StoreWriteError, PAGES
from logit import logit, INFO, ERROR
from map_aggregator import aggregate, AggregationCycleError
from map_config import MapConfig
from map_emitter import emit
from wiki_api import connect, WikidataClient


def main(argv=None):
    if sys.platform == 'win32':
        sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')

    config = MapConfig.from_env()
    parser = argparse.ArgumentParser(description="Build the Wikipedians map dataset")
    parser.add_argument("category", nargs="?", default=config.default_category,
                        help=f"root category (default: {config.default_category})")
    args = parser.parse_args(argv)

    logit(INFO, f"{config.api_url} \t {args.category}")
    try:
        store = CategoryStore(config.private_data)
        site = connect(config)
        wikidata = WikidataClient(config)

        crawled = crawl(site, wikidata, store, args.category, throttle=config.throttle)
        logit(INFO, f"crawled {crawled} categories")

        areas = aggregate(store, args.category)
        emit(areas, config.public_data)
    except (StoreWriteError, AggregationCycleError) as e:
        logit(ERROR, str(e))
        raise SystemExit(1)

    logit(INFO, f"store now lists pages for {len(store.titles(PAGES))} categories")
    return 0


if __name__ == "__main__":
    sys.exit(main())

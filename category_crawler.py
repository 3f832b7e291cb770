"""
category_crawler.py
===================
Walk a category tree depth-first and fill the CategoryStore:

  * ns 14 members   -> children of the category (descended into once per run)
  * ns 2 / 3        -> user name (prefix and /subpage stripped) -> pages
  * everything else -> ignored
  * the category page's own wikibase_item -> P2633 geography -> P625 / P402
"""

from typing import List, Optional, Set

from category_store import (PAGES, CHILDREN, WIKIDATA_ITEM, GEOGRAPHY_ITEM,
                            LATLNG, OSM_ID)
from logit import logit, INFO, ERROR
from wiki_api import category_members, WikidataError

NS_USER      = 2
NS_USER_TALK = 3
NS_CATEGORY  = 14

P_GEOGRAPHY  = "P2633"
P_COORDINATE = "P625"
P_OSM        = "P402"


def user_name(title: str) -> str:
    """'Discussioni utente:Foo/Sandbox' -> 'Foo'"""
    name = title.split(":", 1)[1] if ":" in title else title
    return name.split("/", 1)[0]


def _claim(wikidata, entity, prop):
    try:
        return wikidata.first_claim_value(entity, prop)
    except WikidataError as e:
        logit(ERROR, f"Wikidata {prop} lookup on {entity} failed: {e}")
        return None


def fetch_geography(wikidata, store, cat: str, item: str):
    """Resolve item -> geography -> coordinates / OSM relation and store them."""
    geoq = _claim(wikidata, item, P_GEOGRAPHY)
    if not isinstance(geoq, dict) or not geoq.get("id"):
        logit(ERROR, f"Missing {P_GEOGRAPHY} (geography) from {item}")
        return
    geoq = geoq["id"]
    logit(INFO, f"GEOQ  \t {geoq}")
    store.put(GEOGRAPHY_ITEM, cat, geoq)

    latlng = _claim(wikidata, geoq, P_COORDINATE)
    if isinstance(latlng, dict) and "latitude" in latlng and "longitude" in latlng:
        lat, lng = latlng["latitude"], latlng["longitude"]
        logit(INFO, f"latlng \t {lat};{lng}")
        store.put(LATLNG, cat, f"{lat};{lng}")
    else:
        logit(ERROR, f"Missing {P_COORDINATE} (latlong) from {geoq}")

    osmid = _claim(wikidata, geoq, P_OSM)
    if osmid:
        logit(INFO, f"OSMID \t {osmid}")
        store.put(OSM_ID, cat, str(osmid))
    else:
        logit(ERROR, f"Missing {P_OSM} OSMID from {geoq}")


def _category_pages(query):
    pages = query.get("pages", {})
    return pages.values() if isinstance(pages, dict) else pages


def crawl_category(site, wikidata, store, cat: str, seen_children: Set[str],
                   throttle: float = 0.0) -> List[str]:
    """Fetch one category into the store; return children not crawled yet."""
    children = []
    first = True
    for batch in category_members(site, cat, throttle):
        query = batch.get("query", {})

        if first:
            first = False
            for page in _category_pages(query):
                item = page.get("pageprops", {}).get("wikibase_item")
                if not item:
                    logit(ERROR, f"Missing Wikidata Q for {cat}")
                    continue
                logit(INFO, f"WikidataQ \t {item}")
                store.put(WIKIDATA_ITEM, cat, item)
                fetch_geography(wikidata, store, cat, item)

        for member in query.get("categorymembers", []):
            title = member["title"]
            ns = member.get("ns")
            if ns == NS_CATEGORY:
                logit(INFO, f"{cat} \t <{title}")
                store.append(CHILDREN, cat, title)
                if title not in seen_children and title not in children:
                    children.append(title)
            elif ns in (NS_USER, NS_USER_TALK):
                name = user_name(title)
                logit(INFO, f"{cat} \t +{name}")
                store.append(PAGES, cat, name)
            else:
                logit(INFO, f"ignored \t {title}")
    return children


def crawl(site, wikidata, store, root_title: str,
          seen_children: Optional[Set[str]] = None, throttle: float = 0.0) -> int:
    """Crawl `root_title` and every sub-category below it.

    `seen_children` collects the sub-categories already scheduled; a child
    reachable from several parents is listed under each of them but fetched
    only once. `throttle` is the pause after every MediaWiki request.
    Returns the number of categories fetched.
    """
    if seen_children is None:
        seen_children = set()
    stack = [root_title]
    crawled = 0
    while stack:
        cat = stack.pop()
        children = crawl_category(site, wikidata, store, cat, seen_children, throttle)
        crawled += 1
        seen_children.update(children)
        # reversed so the first listed child is crawled first
        stack.extend(reversed(children))
    return crawled

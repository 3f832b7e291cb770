"""
wiki_api.py
===========
Thin read-only access to the two APIs the map needs:

* the local Wikipedia, through mwclient (category members + page props,
  following `continue`);
* Wikidata `wbgetclaims`, through requests, with retry on rate limiting
  and maxlag.
"""

import time
from typing import Iterator, Optional

import mwclient
import requests

from logit import logit, WARN

RETRY_STATUS = (429, 500, 502, 503, 504)


class WikidataError(RuntimeError):
    pass


def connect(config) -> mwclient.Site:
    """Anonymous mwclient site for config.lang / config.wiki."""
    return mwclient.Site(config.site_host, path=config.site_path,
                         clients_useragent=config.user_agent)


def category_members(site, title: str, throttle: float = 0.0) -> Iterator[dict]:
    """Yield every result batch of a categorymembers query on `title`.

    The same request asks for the pageprops of the category page itself,
    so the first batch carries its wikibase_item (if any). Sleeps
    `throttle` seconds after each request.
    """
    params = {
        "list": "categorymembers",
        "cmtitle": title,
        "cmlimit": "max",
        "prop": "pageprops",
        "titles": title,
    }
    while True:
        data = site.api("query", **params)
        if throttle:
            time.sleep(throttle)
        yield data
        if "continue" not in data:
            break
        params.update(data["continue"])


class WikidataClient:
    def __init__(self, config, session: Optional[requests.Session] = None):
        self.api_url = config.wikidata_api
        self.throttle = config.throttle
        self.max_retries = config.max_retries
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": config.user_agent})

    def _backoff(self, attempt, resp=None):
        wait = 5 * attempt
        if resp is not None:
            retry_after = resp.headers.get("Retry-After", "")
            if retry_after.isdigit():
                wait = int(retry_after)
        return wait

    def _retry_wait(self, attempt, reason, resp=None):
        if attempt >= self.max_retries:
            logit(WARN, f"{reason}, giving up")
            return
        wait = self._backoff(attempt, resp)
        logit(WARN, f"{reason}, retry in {wait}s")
        time.sleep(wait)

    def get(self, params: dict) -> dict:
        params = dict(params, format="json", maxlag=5)
        for attempt in range(1, self.max_retries + 1):
            try:
                r = self.session.get(self.api_url, params=params, timeout=20)
            except requests.RequestException as e:
                self._retry_wait(attempt, f"Wikidata request failed ({e})")
                continue

            if r.status_code in RETRY_STATUS:
                self._retry_wait(attempt, f"Wikidata HTTP {r.status_code}", r)
                continue
            try:
                r.raise_for_status()
                data = r.json()
            except (requests.HTTPError, ValueError) as e:
                raise WikidataError(f"bad Wikidata response for {params}: {e}") from e

            err = data.get("error")
            if err:
                if err.get("code") == "maxlag":
                    self._retry_wait(attempt, "Wikidata maxlag", r)
                    continue
                raise WikidataError(f"{err.get('code')}: {err.get('info')}")

            time.sleep(self.throttle)
            return data
        raise WikidataError(f"giving up after {self.max_retries} attempts: {params}")

    def first_claim_value(self, entity_id: str, property_id: str):
        """datavalue.value of the first claim of `property_id` that has one."""
        data = self.get({
            "action": "wbgetclaims",
            "entity": entity_id,
            "property": property_id,
        })
        for claim in data.get("claims", {}).get(property_id, []):
            datavalue = claim.get("mainsnak", {}).get("datavalue")
            if datavalue:
                return datavalue.get("value")
        return None

"""Paths, endpoints and politeness settings for one map run."""

import os

DEFAULT_CATEGORY = "Categoria:Utenti dall'Italia"
WIKIDATA_API     = "https://www.wikidata.org/w/api.php"
USER_AGENT       = "WikipediansMapBot/1.0 (Leaflet Wikipedians map; read-only)"


class MapConfig:
    def __init__(self, lang="it", wiki="wikipedia.org",
                 private_data="private", public_data="public",
                 wikidata_api=WIKIDATA_API, user_agent=USER_AGENT,
                 throttle=0.5, max_retries=5,
                 default_category=DEFAULT_CATEGORY):
        self.lang = lang
        self.wiki = wiki
        self.private_data = private_data
        self.public_data = public_data
        self.wikidata_api = wikidata_api
        self.user_agent = user_agent
        self.throttle = throttle
        self.max_retries = max_retries
        self.default_category = default_category

    @property
    def site_host(self) -> str:
        return f"{self.lang}.{self.wiki}"

    @property
    def site_path(self) -> str:
        return "/w/"

    @property
    def api_url(self) -> str:
        return f"https://{self.site_host}{self.site_path}api.php"

    @classmethod
    def from_env(cls):
        """Build a config from WIKIPEDIANS_MAP_* environment variables."""
        return cls(
            lang=os.getenv("WIKIPEDIANS_MAP_LANG", "it"),
            wiki=os.getenv("WIKIPEDIANS_MAP_WIKI", "wikipedia.org"),
            private_data=os.getenv("WIKIPEDIANS_MAP_PRIVATE_DATA", "private"),
            public_data=os.getenv("WIKIPEDIANS_MAP_PUBLIC_DATA", "public"),
            wikidata_api=os.getenv("WIKIPEDIANS_MAP_WIKIDATA_API", WIKIDATA_API),
            user_agent=os.getenv("WIKIPEDIANS_MAP_USER_AGENT", USER_AGENT),
            throttle=float(os.getenv("WIKIPEDIANS_MAP_THROTTLE", "0.5")),
            max_retries=int(os.getenv("WIKIPEDIANS_MAP_MAX_RETRIES", "5")),
            default_category=os.getenv("WIKIPEDIANS_MAP_CATEGORY", DEFAULT_CATEGORY),
        )

    def __repr__(self):
        return (f"MapConfig(api_url={self.api_url!r}, "
                f"private_data={self.private_data!r}, public_data={self.public_data!r})")

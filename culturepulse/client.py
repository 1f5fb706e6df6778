"""Clients the collectors use to reach the three sources.

``ProxyClient`` talks to a running proxy server over HTTP, the way the
dashboard does. ``DirectClient`` calls the upstream layer in-process and is
what the server itself uses for ``/api/collect`` and the realtime agent.

Both expose the same three calls and never raise: Reddit failures become an
empty list, Twitter/Trends failures become a payload flagged ``mock``.
"""

import requests

from . import upstream
from .config import BACKEND_URL
from .log import get_logger


class ProxyClient:
    def __init__(self, backend_url: str = None, timeout: float = 15):
        self.backend_url = (backend_url or BACKEND_URL).rstrip("/")
        self.timeout = timeout

    def _post(self, path: str, body: dict) -> dict:
        r = requests.post(f"{self.backend_url}{path}", json=body, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def reddit_posts(self, subreddit: str, limit: int = 25) -> list[dict]:
        try:
            data = self._post("/api/reddit/posts", {"subreddit": subreddit, "limit": limit})
        except (requests.RequestException, ValueError) as e:
            get_logger().warning("Reddit proxy error for r/%s: %s", subreddit, e)
            return []
        posts = data.get("posts") or []
        get_logger().debug("Fetched %d posts from r/%s via proxy", len(posts), subreddit)
        return posts

    def twitter_search(self, query: str, limit: int = 10) -> dict:
        try:
            return self._post("/api/twitter/search", {"query": query, "limit": limit})
        except (requests.RequestException, ValueError) as e:
            get_logger().warning("Twitter proxy unavailable for %r: %s", query, e)
            return {"tweets": [], "mock": True, "error": str(e)}

    def google_trends(self, query: str) -> dict:
        try:
            return self._post("/api/trends", {"query": query})
        except (requests.RequestException, ValueError) as e:
            get_logger().warning("Google Trends proxy unavailable for %r: %s", query, e)
            return {
                "query": query,
                "interest_over_time": [],
                "related_queries": [query],
                "regions": [],
                "mock": True,
            }


class DirectClient:
    def reddit_posts(self, subreddit: str, limit: int = 25) -> list[dict]:
        try:
            return upstream.reddit.get_posts(subreddit, limit)
        except (requests.RequestException, ValueError) as e:
            get_logger().warning("Reddit fetch failed for r/%s: %s", subreddit, e)
            return []

    def twitter_search(self, query: str, limit: int = 10) -> dict:
        return upstream.twitter.search(query, limit)

    def google_trends(self, query: str) -> dict:
        return upstream.google_trends.fetch(query)

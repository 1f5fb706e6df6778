"""Reddit public .json API (hot listing): no key required."""

import requests

from ..config import REDDIT_HOT_URL, REDDIT_USER_AGENT
from ..retry import with_retry

TRENDING_SCORE = 1000


@with_retry(max_retries=2, base_delay=1.0, retry_on=(requests.ConnectionError, requests.Timeout))
def fetch_hot(subreddit: str, limit: int = 25) -> dict:
    """Raw hot listing for one subreddit. Raises requests.HTTPError on non-2xx."""
    url = REDDIT_HOT_URL.format(subreddit=subreddit)
    headers = {"User-Agent": REDDIT_USER_AGENT}
    r = requests.get(url, headers=headers, params={"limit": limit, "raw_json": 1}, timeout=10)
    r.raise_for_status()
    return r.json()


def parse_posts(data: dict) -> list[dict]:
    """Flatten a listing into dashboard post dicts."""
    if not data or not isinstance(data.get("data"), dict):
        return []

    posts = []
    for child in data["data"].get("children") or []:
        post = child.get("data", {})
        score = post.get("score") or 0
        posts.append({
            "id": post.get("id"),
            "title": post.get("title", ""),
            "subreddit": post.get("subreddit"),
            "score": score,
            "upvoteRatio": post.get("upvote_ratio"),
            "numComments": post.get("num_comments", 0),
            "created": post.get("created_utc"),
            "url": post.get("url"),
            "permalink": post.get("permalink"),
            "author": post.get("author"),
            "selftext": post.get("selftext", ""),
            "trending": score > TRENDING_SCORE,
        })
    return posts


def get_posts(subreddit: str, limit: int = 25) -> list[dict]:
    return parse_posts(fetch_hot(subreddit, limit))

"""Twitter/X v2 recent search, with mock fallback when unconfigured or failing."""

import random
import time
from datetime import datetime, timezone

import requests

from ..config import TWITTER_SEARCH_URL, get_twitter_bearer_token
from ..log import get_logger

# API v2 rejects max_results outside this range
MIN_RESULTS = 10
MAX_RESULTS = 100


def search_recent(query: str, limit: int, token: str) -> list[dict]:
    """Call the recent-search endpoint. Raises requests.HTTPError on non-2xx."""
    params = {
        "query": query,
        "max_results": max(MIN_RESULTS, min(limit, MAX_RESULTS)),
        "tweet.fields": "public_metrics,created_at,author_id",
        "expansions": "author_id",
    }
    headers = {"Authorization": f"Bearer {token}"}
    r = requests.get(TWITTER_SEARCH_URL, headers=headers, params=params, timeout=10)
    r.raise_for_status()
    data = r.json()

    return [
        {
            "id": tweet.get("id"),
            "text": tweet.get("text", ""),
            "created": tweet.get("created_at"),
            "public_metrics": tweet.get("public_metrics", {}),
            "author_id": tweet.get("author_id"),
        }
        for tweet in (data.get("data") or [])[:limit]
    ]


def mock_tweets(query: str, limit: int, rng: random.Random = None) -> list[dict]:
    """Placeholder tweets, each flagged ``mock``."""
    rng = rng or random
    now = time.time()
    tweets = []
    for i in range(limit):
        created = now - rng.random() * 7 * 24 * 3600
        tweets.append({
            "id": f"mock_{int(now * 1000)}_{i}",
            "text": f"Mock tweet about {query}: This is a sample tweet with trending content.",
            "created": datetime.fromtimestamp(created, tz=timezone.utc).isoformat(),
            "public_metrics": {
                "retweet_count": rng.randrange(1000),
                "like_count": rng.randrange(5000),
                "reply_count": rng.randrange(200),
            },
            "mock": True,
        })
    return tweets


def search(query: str, limit: int = 10, token: str = None) -> dict:
    """Search payload for the proxy endpoint. Never raises.

    Returns ``{"tweets": [...], "mock": bool}`` plus ``"error"`` when the
    live call failed and mock tweets were substituted.
    """
    logger = get_logger()
    token = get_twitter_bearer_token() if token is None else token

    if not token:
        logger.debug("No Twitter bearer token, using mock data for %r", query)
        return {"tweets": mock_tweets(query, limit), "mock": True}

    try:
        tweets = search_recent(query, limit, token)
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        logger.warning("Twitter API error %s for %r, using mock data", status, query)
        return {"tweets": mock_tweets(query, limit), "mock": True, "error": f"API returned {status}"}
    except requests.RequestException as e:
        logger.warning("Twitter API fetch error for %r: %s", query, e)
        return {"tweets": mock_tweets(query, limit), "mock": True, "error": str(e)}

    logger.debug("Twitter API returned %d real tweets for %r", len(tweets), query)
    return {"tweets": tweets, "mock": False}

"""Shared test fixtures."""

import os
import tempfile
import time

import pytest

# Logs, saved trends and config go to a scratch data directory; this must
# be set before culturepulse.config is first imported.
os.environ["CULTUREPULSE_HOME"] = tempfile.mkdtemp(prefix="culturepulse-tests-")

from culturepulse.sources.base import SourceMetric, Trend  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the user's ~/.culturepulse/config.json."""
    config_file = tmp_path / "config.json"
    monkeypatch.setattr("culturepulse.config.CONFIG_FILE", config_file)
    monkeypatch.delenv("TWITTER_BEARER_TOKEN", raising=False)
    return config_file


@pytest.fixture
def reddit_listing():
    """Raw Reddit hot.json listing: one fresh popular post, one stale quiet one."""
    now = time.time()
    return {
        "data": {
            "children": [
                {"data": {
                    "id": "abc", "title": "Brands are doing pop-up museums now",
                    "subreddit": "marketing", "score": 6200, "upvote_ratio": 0.97,
                    "num_comments": 480, "created_utc": now - 3600,
                    "url": "https://example.com/a", "permalink": "/r/marketing/comments/abc/x",
                    "author": "alice", "selftext": "Everyone is copying this format.",
                }},
                {"data": {
                    "id": "def", "title": "Weekly thread",
                    "subreddit": "marketing", "score": 12, "upvote_ratio": 0.5,
                    "num_comments": 3, "created_utc": now - 200 * 3600,
                    "url": "https://example.com/d", "permalink": "/r/marketing/comments/def/y",
                    "author": "mod", "selftext": "",
                }},
            ]
        }
    }


@pytest.fixture
def reddit_post():
    """One post in the normalised proxy shape."""
    return {
        "id": "abc",
        "title": "Brands are doing pop-up museums now",
        "subreddit": "marketing",
        "score": 6200,
        "upvoteRatio": 0.97,
        "numComments": 480,
        "created": time.time() - 3600,
        "url": "https://example.com/a",
        "permalink": "/r/marketing/comments/abc/x",
        "author": "alice",
        "selftext": "Everyone is copying this format.",
        "trending": True,
    }


@pytest.fixture
def tweet_payload():
    return {
        "tweets": [
            {
                "id": "111",
                "text": "Experiential marketing is eating the events budget",
                "created": "2099-01-01T00:00:00.000Z",
                "public_metrics": {"retweet_count": 300, "like_count": 2000, "reply_count": 40},
                "author_id": "u1",
            },
            {
                "id": "222",
                "text": "quiet tweet",
                "created": "2020-01-01T00:00:00.000Z",
                "public_metrics": {"retweet_count": 1, "like_count": 5, "reply_count": 0},
                "author_id": "u2",
            },
        ],
        "mock": False,
    }


def interest_payload(query, value, mock=False, days=30):
    return {
        "query": query,
        "interest_over_time": [{"date": f"2025-01-{i + 1:02d}", "value": value} for i in range(days)],
        "related_queries": [query],
        "regions": [],
        "timestamp": 0,
        "mock": mock,
    }


class FakeClient:
    """In-memory stand-in for ProxyClient/DirectClient."""

    def __init__(self, posts=None, tweets=None, interest=None):
        self.posts = posts or {}
        self.tweets = tweets or {}
        self.interest = interest or {}
        self.calls = []

    def reddit_posts(self, subreddit, limit=25):
        self.calls.append(("reddit", subreddit, limit))
        result = self.posts.get(subreddit, [])
        if isinstance(result, Exception):
            raise result
        return result

    def twitter_search(self, query, limit=10):
        self.calls.append(("twitter", query, limit))
        return self.tweets.get(query, {"tweets": [], "mock": True})

    def google_trends(self, query):
        self.calls.append(("google", query))
        return self.interest.get(query, interest_payload(query, 0, mock=True))


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def make_client():
    return FakeClient


@pytest.fixture
def interest():
    return interest_payload


@pytest.fixture
def make_trend():
    def _make(id="t1", title="Trend", engagement=0, velocity=0, confidence=0,
              sources=1, platform="Reddit", is_emerging=False, category="General"):
        return Trend(
            id=id,
            title=title,
            category=category,
            platform=platform,
            velocity_score=velocity,
            confidence=confidence,
            engagement=engagement,
            is_emerging=is_emerging,
            sources=[SourceMetric(platform=platform, mentions=10) for _ in range(sources)],
        )
    return _make


@pytest.fixture
def trend_dicts():
    """Dashboard-shaped trend dicts for stats/report/filter tests."""
    return [
        {"id": "a", "title": "AI pop-ups", "category": "Tech", "velocityScore": 300,
         "confidence": 90, "currentPhase": "early_adopters", "shortDescription": "Robots at events",
         "tags": ["Meta", "Tech"], "subcategories": ["Events"], "platform": "Reddit",
         "sources": [{"platform": "Reddit", "mentions": 1_500_000}]},
        {"id": "b", "title": "Coffee raves", "category": "Food", "velocityScore": 120,
         "confidence": 70, "currentPhase": "innovators", "shortDescription": "Morning parties",
         "tags": ["Food"], "subcategories": [], "platform": "Twitter",
         "sources": [{"platform": "Twitter", "mentions": 500_000}]},
        {"id": "c", "title": "Quiet luxury offsites", "category": "Tech", "velocityScore": 200,
         "confidence": None, "currentPhase": "early_majority", "shortDescription": "",
         "tags": ["Microsoft"], "subcategories": [], "platform": "Google Trends",
         "sources": []},
    ]

"""Twitter/X keyword collector: mock tweets are never turned into trends."""

import time

from ..config import AGENT_TWITTER_KEYWORDS, BUSINESS_TWITTER_KEYWORDS
from ..log import get_logger
from ..scoring import (
    categorize_keyword,
    is_emerging,
    phase_from_age,
    twitter_velocity,
    velocity_from_engagement,
)
from .base import SourceMetric, Trend, TrendSource, hours_since, iso_to_ms

MIN_RETWEETS = 50
MIN_LIKES = 100


def parse_tweets(payload: dict) -> list[dict]:
    """Normalise a proxy search payload; payload-level ``mock`` marks every tweet."""
    tweets = payload.get("tweets")
    if not isinstance(tweets, list):
        return []
    payload_mock = bool(payload.get("mock"))
    return [
        {
            "id": tweet.get("id"),
            "text": tweet.get("text") or "",
            "created": tweet.get("created"),
            "metrics": tweet.get("public_metrics") or {},
            "author": tweet.get("author_id"),
            "mock": payload_mock or bool(tweet.get("mock")),
        }
        for tweet in tweets
    ]


def _source_metric(tweet: dict) -> SourceMetric:
    metrics = tweet["metrics"]
    return SourceMetric(
        platform="Twitter",
        url=f"https://twitter.com/statuses/{tweet['id']}",
        mentions=metrics.get("retweet_count") or 0,
        engagement=metrics.get("like_count") or 0,
    )


class TwitterSource(TrendSource):
    name = "twitter"

    def __init__(self, client, config: dict = None, sleep=time.sleep):
        config = config or {}
        self.client = client
        self.keywords = config.get("keywords", BUSINESS_TWITTER_KEYWORDS)
        self.limit = config.get("limit", 5)
        self.delay = config.get("delay", 0.0)
        self.sleep = sleep

    def collect(self) -> list[Trend]:
        trends = []
        for keyword in self.keywords:
            try:
                tweets = parse_tweets(self.client.twitter_search(keyword, self.limit))
                trends.extend(self.transform(t, keyword) for t in tweets if self.keep(t))
            except Exception as e:
                get_logger().warning("Twitter collection error for %r: %s", keyword, e)
            if self.delay:
                self.sleep(self.delay)
        return trends

    def keep(self, tweet: dict) -> bool:
        """Real tweets with meaningful engagement only."""
        if tweet["mock"]:
            return False
        metrics = tweet["metrics"]
        return (metrics.get("retweet_count") or 0) > MIN_RETWEETS or (metrics.get("like_count") or 0) > MIN_LIKES

    def transform(self, tweet: dict, keyword: str) -> Trend:
        metrics = tweet["metrics"]
        timestamp = iso_to_ms(tweet["created"])
        return Trend(
            id=f"twitter_{tweet['id']}",
            title=tweet["text"][:100],
            category=categorize_keyword(keyword),
            platform="Twitter",
            velocity_score=twitter_velocity(metrics),
            confidence=75,
            sources=[_source_metric(tweet)],
            short_description=tweet["text"][:200],
            timestamp=timestamp,
            engagement=metrics.get("like_count") or 0,
            score=metrics.get("retweet_count") or 0,
            is_emerging=is_emerging(hours_since(timestamp)),
            tags=[keyword, "Twitter"],
        )


class RealtimeTwitterSource(TwitterSource):
    """Realtime agent flavour: marketing keywords, weighted engagement, no engagement floor."""

    def __init__(self, client, config: dict = None, sleep=time.sleep):
        config = dict(config or {})
        config.setdefault("keywords", AGENT_TWITTER_KEYWORDS)
        config.setdefault("delay", 0.1)
        super().__init__(client, config, sleep)

    def keep(self, tweet: dict) -> bool:
        return not tweet["mock"]

    def transform(self, tweet: dict, keyword: str) -> Trend:
        metrics = tweet["metrics"]
        retweets = metrics.get("retweet_count") or 0
        engagement = retweets * 2 + (metrics.get("like_count") or 0)
        timestamp = iso_to_ms(tweet["created"])
        age = hours_since(timestamp)
        return Trend(
            id=f"twitter_{tweet['id']}",
            title=tweet["text"][:100] or keyword,
            category="Marketing",
            platform="Twitter",
            velocity_score=velocity_from_engagement(engagement, divisor=50),
            current_phase=phase_from_age(age),
            confidence=75,
            sources=[_source_metric(tweet)],
            short_description=tweet["text"][:200] or f"Trending on Twitter about {keyword}",
            timestamp=timestamp,
            engagement=engagement,
            score=retweets,
            is_emerging=is_emerging(age),
            tags=[keyword, "Twitter"],
        )

"""Reddit hot-post collector (business batches + realtime variant)."""

import time

from ..config import AGENT_SUBREDDITS, BUSINESS_SUBREDDITS
from ..log import get_logger
from ..scoring import (
    AGENT_SUBREDDIT_CATEGORIES,
    categorize_subreddit,
    confidence_from_ratio,
    is_emerging,
    phase_from_age,
    phase_from_score,
    reddit_engagement,
    velocity_from_engagement,
)
from .base import SourceMetric, Trend, TrendSource, hours_since


def _source_metric(post: dict, subreddit: str) -> SourceMetric:
    permalink = post.get("permalink")
    return SourceMetric(
        platform="Reddit",
        url=f"https://reddit.com{permalink}" if permalink else f"https://reddit.com/r/{subreddit}",
        mentions=post.get("score") or 0,
        engagement=post.get("numComments") or 0,
    )


class RedditSource(TrendSource):
    """Walks a subreddit list sequentially in small batches.

    Sleeps ``delay`` after each subreddit, ``error_delay`` after a failure
    and ``batch_delay`` between batches to stay under Reddit's 429 limit.
    """

    name = "reddit"
    sort_by_engagement = True

    def __init__(self, client, config: dict = None, sleep=time.sleep):
        config = config or {}
        self.client = client
        self.subreddits = config.get("subreddits", BUSINESS_SUBREDDITS)
        self.limit = config.get("limit", 15)
        self.batch_size = config.get("batch_size", 5)
        self.delay = config.get("delay", 0.5)
        self.error_delay = config.get("error_delay", 2.0)
        self.batch_delay = config.get("batch_delay", 3.0)
        self.sleep = sleep

    def collect(self) -> list[Trend]:
        logger = get_logger()
        logger.info("Monitoring %d subreddits...", len(self.subreddits))

        trends = []
        ok = failed = 0
        for start in range(0, len(self.subreddits), self.batch_size):
            for subreddit in self.subreddits[start:start + self.batch_size]:
                try:
                    posts = self.client.reddit_posts(subreddit, self.limit)
                    trends.extend(self.transform(post, subreddit) for post in posts)
                    ok += 1
                    self.sleep(self.delay)
                except Exception as e:
                    failed += 1
                    logger.warning("Failed r/%s: %s", subreddit, e)
                    self.sleep(self.error_delay)

            if start + self.batch_size < len(self.subreddits):
                logger.debug("Pausing %.1fs before next batch...", self.batch_delay)
                self.sleep(self.batch_delay)

        logger.info("Reddit: %d ok, %d errors, %d trends", ok, failed, len(trends))
        if self.sort_by_engagement:
            trends.sort(key=lambda t: t.engagement, reverse=True)
        return trends

    def transform(self, post: dict, subreddit: str) -> Trend:
        score = post.get("score") or 0
        engagement = reddit_engagement(score, post.get("numComments"))
        category = categorize_subreddit(subreddit)
        timestamp = int((post.get("created") or 0) * 1000)

        return Trend(
            id=f"reddit_{post.get('id')}",
            title=post.get("title", ""),
            category=category,
            platform="Reddit",
            subreddit=subreddit,
            velocity_score=velocity_from_engagement(engagement),
            current_phase=phase_from_score(score),
            confidence=confidence_from_ratio(post.get("upvoteRatio")),
            sources=[_source_metric(post, subreddit)],
            short_description=(post.get("selftext") or "")[:200] or f"Trending on r/{subreddit}",
            timestamp=timestamp,
            engagement=engagement,
            score=score,
            is_emerging=is_emerging(hours_since(timestamp)),
            tags=[subreddit, category],
        )


class RealtimeRedditSource(RedditSource):
    """Realtime agent flavour: one pass, short sleeps, phase by post age.

    Keeps fetch order, so the first post wins when the agent dedupes titles.
    """

    sort_by_engagement = False

    def __init__(self, client, config: dict = None, sleep=time.sleep):
        config = dict(config or {})
        config.setdefault("subreddits", AGENT_SUBREDDITS)
        config.setdefault("limit", 10)
        config.setdefault("batch_size", len(config["subreddits"]) or 1)
        config.setdefault("delay", 0.1)
        config.setdefault("error_delay", 0.1)
        config.setdefault("batch_delay", 0.0)
        super().__init__(client, config, sleep)

    def transform(self, post: dict, subreddit: str) -> Trend:
        trend = super().transform(post, subreddit)
        trend.category = categorize_subreddit(subreddit, AGENT_SUBREDDIT_CATEGORIES)
        trend.current_phase = phase_from_age(hours_since(trend.timestamp))
        trend.tags = [subreddit, trend.category]
        return trend

"""DataCollector: fans out to all sources, merges duplicates, ranks."""

import concurrent.futures
import dataclasses
import time

from .client import DirectClient
from .config import get_section
from .log import get_logger, log
from .scoring import relevance_score
from .sources import GoogleTrendsSource, RedditSource, Trend, TwitterSource

TOP_N = 15


def merge_trends(*groups: list[Trend]) -> list[Trend]:
    """Merge records whose lowercased titles match exactly.

    A duplicate contributes its sources, raises velocity/confidence to the
    max of the pair and adds its engagement. First-seen order is kept.
    """
    merged: dict[str, Trend] = {}
    for group in groups:
        for trend in group:
            key = trend.title.lower() if trend.title else trend.id
            existing = merged.get(key)
            if existing is None:
                merged[key] = dataclasses.replace(trend, sources=list(trend.sources))
                continue
            existing.sources.extend(trend.sources)
            existing.velocity_score = max(existing.velocity_score, trend.velocity_score or 0)
            existing.confidence = max(existing.confidence, trend.confidence or 0)
            existing.engagement += trend.engagement or 0
    return list(merged.values())


def rank_trends(trends: list[Trend]) -> list[Trend]:
    """Sort by relevance score, highest first (stable for ties)."""
    return sorted(trends, key=relevance_score, reverse=True)


class DataCollector:
    """Collects business trends from Reddit, Twitter/X and Google Trends."""

    def __init__(self, client=None, sleep=time.sleep):
        self.client = client or DirectClient()
        config = get_section("collector")
        self.reddit = RedditSource(self.client, config.get("reddit"), sleep=sleep)
        self.twitter = TwitterSource(self.client, config.get("twitter"), sleep=sleep)
        self.google = GoogleTrendsSource(self.client, config.get("google_trends"), sleep=sleep)
        self.is_initialized = False

    @property
    def sources(self):
        return [self.reddit, self.twitter, self.google]

    def init(self) -> bool:
        """Probe Reddit once; the collector still works if this fails."""
        if self.is_initialized:
            return True
        if self.client.reddit_posts("technology", 5):
            log("Reddit connected")
            self.is_initialized = True
        else:
            get_logger().error("Reddit connection failed")
        return self.is_initialized

    def collect_all(self) -> dict[str, list[Trend]]:
        """Run every available source in parallel; a failing source yields []."""
        results = {src.name: [] for src in self.sources}

        with concurrent.futures.ThreadPoolExecutor(max_workers=3) as pool:
            futures = {
                pool.submit(src.collect): src
                for src in self.sources if src.is_available
            }
            for future in concurrent.futures.as_completed(futures):
                src = futures[future]
                try:
                    results[src.name] = future.result()
                    log(f"{src.name}: {len(results[src.name])} trends")
                except Exception as e:
                    get_logger().warning("%s: failed: %s", src.name, e)

        return results

    def collect_business_trends(self, limit: int = TOP_N) -> list[Trend]:
        """Top ``limit`` merged trends across all platforms."""
        results = self.collect_all()
        merged = merge_trends(results["reddit"], results["twitter"], results["google_trends"])
        ranked = rank_trends(merged)
        log(f"Merged to {len(ranked)} unique trends")
        return ranked[:limit]

    def collect_trends(self, queries: list[str]) -> list[dict]:
        """Reddit posts per query (each query treated as a subreddit)."""
        return [
            {
                "query": query,
                "source": "Reddit",
                "data": self.client.reddit_posts(query),
                "timestamp": int(time.time() * 1000),
            }
            for query in queries
        ]

    def monitor_subreddits(self, subreddits: list[str] = None) -> list[dict]:
        """Posts flagged ``trending`` in each subreddit."""
        subreddits = subreddits or ["technology", "gadgets", "futurology"]
        report = []
        for subreddit in subreddits:
            trending = [p for p in self.client.reddit_posts(subreddit, 10) if p.get("trending")]
            report.append({"subreddit": subreddit, "count": len(trending), "posts": trending})
        return report

"""Google Trends keyword collector: keeps only live, high-interest keywords."""

import time
from urllib.parse import quote

from ..config import AGENT_GOOGLE_KEYWORDS, BUSINESS_GOOGLE_KEYWORDS
from ..log import get_logger
from ..scoring import average_interest, categorize_keyword
from .base import SourceMetric, Trend, TrendSource, now_ms

INTEREST_THRESHOLD = 40


class GoogleTrendsSource(TrendSource):
    name = "google_trends"

    def __init__(self, client, config: dict = None, sleep=time.sleep):
        config = config or {}
        self.client = client
        self.keywords = config.get("keywords", BUSINESS_GOOGLE_KEYWORDS)
        self.delay = config.get("delay", 0.0)
        self.sleep = sleep

    def collect(self) -> list[Trend]:
        trends = []
        for keyword in self.keywords:
            try:
                trend = self.transform(self.client.google_trends(keyword), keyword)
                if trend is not None:
                    trends.append(trend)
            except Exception as e:
                get_logger().warning("Google Trends error for %r: %s", keyword, e)
            if self.delay:
                self.sleep(self.delay)
        return trends

    def is_trending(self, avg: float) -> bool:
        return avg > INTEREST_THRESHOLD

    def transform(self, data: dict, keyword: str) -> Trend | None:
        """Trend for one keyword, or None for mock/empty/low-interest data."""
        series = data.get("interest_over_time") if data else None
        if not series or data.get("mock"):
            return None

        avg = average_interest(series)
        if not self.is_trending(avg):
            return None

        return Trend(
            id=f"googletrends_{'_'.join(keyword.split())}",
            title=f"{keyword} - Trending on Google",
            category=categorize_keyword(keyword),
            platform="Google Trends",
            velocity_score=avg,
            confidence=85,
            sources=[self._source_metric(keyword, avg, series)],
            short_description=f"Search interest {avg:g}% above baseline for {keyword}",
            timestamp=now_ms(),
            engagement=round(avg),
            score=round(avg),
            tags=[keyword],
        )

    @staticmethod
    def _source_metric(keyword: str, avg: float, series: list) -> SourceMetric:
        return SourceMetric(
            platform="Google Trends",
            url=f"https://trends.google.com/trends/explore?q={quote(keyword)}",
            mentions=round(avg),
            engagement=len(series),
        )


class RealtimeGoogleTrendsSource(GoogleTrendsSource):
    """Realtime agent flavour: velocity scaled to 0-400, always emerging."""

    def __init__(self, client, config: dict = None, sleep=time.sleep):
        config = dict(config or {})
        config.setdefault("keywords", AGENT_GOOGLE_KEYWORDS)
        config.setdefault("delay", 0.1)
        super().__init__(client, config, sleep)

    def is_trending(self, avg: float) -> bool:
        return avg >= INTEREST_THRESHOLD

    def transform(self, data: dict, keyword: str) -> Trend | None:
        trend = super().transform(data, keyword)
        if trend is None:
            return None
        trend.title = f"{keyword} - Trending Search"
        trend.category = "Marketing"
        trend.velocity_score = round(average_interest(data["interest_over_time"]) * 4)
        trend.current_phase = "early_adopters"
        trend.is_emerging = True
        return trend

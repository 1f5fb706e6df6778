"""Per-platform trend collectors."""

from .base import SourceMetric, Trend, TrendSource
from .google_trends import GoogleTrendsSource, RealtimeGoogleTrendsSource
from .reddit import RealtimeRedditSource, RedditSource
from .twitter import RealtimeTwitterSource, TwitterSource

__all__ = [
    "SourceMetric", "Trend", "TrendSource",
    "RedditSource", "TwitterSource", "GoogleTrendsSource",
    "RealtimeRedditSource", "RealtimeTwitterSource", "RealtimeGoogleTrendsSource",
]

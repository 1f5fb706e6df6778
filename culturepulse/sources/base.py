"""Trend dataclass + TrendSource ABC."""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class SourceMetric:
    """One platform's contribution to a trend."""
    platform: str
    url: str = ""
    mentions: int = 0
    engagement: int = 0

    def to_dict(self) -> dict:
        return {
            "platform": self.platform,
            "url": self.url,
            "mentions": self.mentions,
            "engagement": self.engagement,
        }


@dataclass
class Trend:
    """A trend record unified across Reddit, Twitter and Google Trends."""
    id: str
    title: str
    category: str = "General"
    platform: str = ""  # "Reddit", "Twitter", "Google Trends"
    velocity_score: float = 0
    current_phase: str = "unknown"
    confidence: float = 0.0  # 0-100
    sources: list[SourceMetric] = field(default_factory=list)
    short_description: str = ""
    timestamp: int = 0  # epoch ms
    engagement: int = 0
    score: int = 0
    is_emerging: bool = False
    peak_expected: str = "Unknown"
    tags: list[str] = field(default_factory=list)
    subcategories: list[str] = field(default_factory=list)
    subreddit: str = ""

    def to_dict(self) -> dict:
        """camelCase shape consumed by the dashboard."""
        data = {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "platform": self.platform,
            "velocityScore": self.velocity_score,
            "currentPhase": self.current_phase,
            "confidence": self.confidence,
            "sources": [s.to_dict() for s in self.sources],
            "shortDescription": self.short_description,
            "timestamp": self.timestamp,
            "engagement": self.engagement,
            "score": self.score,
            "isEmerging": self.is_emerging,
            "peakExpected": self.peak_expected,
            "tags": list(self.tags),
            "subcategories": list(self.subcategories),
        }
        if self.subreddit:
            data["subreddit"] = self.subreddit
        return data


class TrendSource(ABC):
    """Abstract base class for trend collectors."""

    name: str = "unknown"

    @abstractmethod
    def collect(self) -> list[Trend]:
        """Collect trends from this source."""
        ...

    @property
    def is_available(self) -> bool:
        """Check if this source is configured and available."""
        return True


def now_ms() -> int:
    return int(time.time() * 1000)


def iso_to_ms(value: str) -> int:
    """ISO-8601 timestamp (``Z`` suffix allowed) to epoch ms; 0 if unparseable."""
    if not value:
        return 0
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return 0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


def hours_since(timestamp_ms: int) -> float:
    return (now_ms() - timestamp_ms) / (1000 * 60 * 60)

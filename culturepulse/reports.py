"""Dashboard stats, trend filtering and period report generation."""

import time
from datetime import datetime, timedelta, timezone

EMERGING_VELOCITY = 150
DEFAULT_CONFIDENCE = 85

PERIODS = {
    "week": (7, "Weekly"),
    "month": (30, "Monthly"),
    "quarter": (90, "Quarterly"),
    "year": (365, "Annual"),
}


def calculate_stats(trends: list[dict]) -> dict:
    """Headline numbers: total, emerging (velocity proxy), accuracy, data points."""
    total = len(trends)
    emerging = sum(1 for t in trends if (t.get("velocityScore") or 0) > EMERGING_VELOCITY)
    accuracy = (
        round(sum(t.get("confidence") or DEFAULT_CONFIDENCE for t in trends) / total)
        if total else 0
    )
    mentions = sum(
        s.get("mentions") or 0
        for t in trends
        for s in t.get("sources") or []
    )
    return {
        "totalTrends": total,
        "emerging72h": emerging,
        "accuracy": accuracy,
        "dataPoints": f"{mentions / 1_000_000:.1f}M",
    }


def filter_trends(trends: list[dict], category: str = "all", search: str = "",
                  phase: str = "all", client: str = "all") -> list[dict]:
    """Apply the dashboard's category/search/phase/client filters."""
    category = (category or "all").lower()
    search = (search or "").lower()
    client = (client or "all").lower()

    def matches(trend: dict) -> bool:
        if category != "all" and (trend.get("category") or "").lower() != category:
            return False
        if search:
            haystack = " ".join([
                trend.get("title") or "",
                trend.get("shortDescription") or "",
                trend.get("category") or "",
                " ".join(trend.get("subcategories") or []),
                " ".join(trend.get("tags") or []),
            ]).lower()
            if search not in haystack:
                return False
        if phase != "all" and trend.get("currentPhase") != phase:
            return False
        if client != "all" and client not in [t.lower() for t in trend.get("tags") or []]:
            return False
        return True

    return [t for t in trends if matches(t)]


def generate_report(trends: list[dict], period: str = "month", count="all") -> dict:
    """Summarise the top trends (by velocity) for a reporting period.

    ``count`` is ``"all"`` or the number of trends to keep.
    """
    if period not in PERIODS:
        raise ValueError(f"Unknown report period: {period!r} (expected one of {', '.join(PERIODS)})")
    days, label = PERIODS[period]
    now = datetime.now(timezone.utc)

    ranked = sorted(trends, key=lambda t: t.get("velocityScore") or 0, reverse=True)
    if count != "all":
        ranked = ranked[:int(count)]

    categories: dict[str, list] = {}
    for trend in ranked:
        categories.setdefault(trend.get("category") or "Uncategorized", []).append(trend)

    top_category, top_members = max(categories.items(), key=lambda kv: len(kv[1]), default=("", []))
    avg_velocity = round(sum(t.get("velocityScore") or 0 for t in ranked) / len(ranked)) if ranked else 0
    top_trend = ranked[0]["title"] if ranked else "N/A"

    return {
        "id": int(time.time() * 1000),
        "title": f"{label} Trend Report - {now:%Y-%m-%d}",
        "period": period,
        "periodLabel": label,
        "startDate": (now - timedelta(days=days)).isoformat(),
        "createdAt": now.isoformat(),
        "summary": (
            f"Analysis of {len(ranked)} trends across {len(categories)} categories. "
            f"Top category: {top_category} with {len(top_members)} trends. "
            f"Average velocity: {avg_velocity}%."
        ),
        "trendsCount": len(ranked),
        "topCategory": top_category,
        "topCategoryCount": len(top_members),
        "avgVelocity": avg_velocity,
        "topTrend": top_trend,
        "trends": [
            {
                "id": t.get("id"),
                "title": t.get("title"),
                "category": t.get("category"),
                "velocityScore": t.get("velocityScore"),
                "confidence": t.get("confidence"),
                "source": t.get("platform") or t.get("source"),
            }
            for t in ranked
        ],
    }

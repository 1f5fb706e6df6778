"""Trend dict validation and sanitising for dashboard-shaped records."""

import math
import time

DEFAULT_AUDIENCE = {
    "gender": "All",
    "ageRange": "18-34",
    "geographics": "Global",
    "psychographics": "Tech-savvy",
}


def sanitize_string(value, fallback: str = "") -> str:
    return value.strip() if isinstance(value, str) else fallback


def sanitize_number(value, fallback: float = 0):
    if isinstance(value, bool) or value is None:
        return fallback
    try:
        num = float(value)
    except (TypeError, ValueError):
        return fallback
    if math.isnan(num):
        return fallback
    return int(num) if num.is_integer() else num


def validate_trend(trend: dict) -> tuple[bool, list[str]]:
    """Fill optional defaults in place; only a missing id or title is fatal."""
    errors = []
    if not trend.get("id"):
        errors.append("Missing id")
    if not trend.get("title"):
        errors.append("Missing title")

    if not trend.get("category"):
        trend["category"] = "Uncategorized"
    trend["velocityScore"] = sanitize_number(trend.get("velocityScore"), 0)
    for key in ("sources", "tags"):
        if not isinstance(trend.get(key), list):
            trend[key] = []

    return not errors, errors


def sanitize_trend(trend: dict) -> dict:
    """Copy of ``trend`` with every dashboard field present and typed.

    Fields outside the dashboard set (platform, engagement, ...) are kept as is.
    """
    clean = dict(trend)
    clean.update({
        "id": trend.get("id") or f"trend_{int(time.time() * 1000)}",
        "title": sanitize_string(trend.get("title"), "Untitled Trend"),
        "category": sanitize_string(trend.get("category"), "Uncategorized"),
        "velocityScore": sanitize_number(trend.get("velocityScore"), 0),
        "confidence": sanitize_number(trend.get("confidence"), 0),
        "sources": trend["sources"] if isinstance(trend.get("sources"), list) else [],
        "tags": trend["tags"] if isinstance(trend.get("tags"), list) else [],
        "subcategories": trend["subcategories"] if isinstance(trend.get("subcategories"), list) else [],
        "currentPhase": sanitize_string(trend.get("currentPhase"), "unknown"),
        "peakExpected": sanitize_string(trend.get("peakExpected"), "Unknown"),
        "shortDescription": sanitize_string(trend.get("shortDescription"), "No description available"),
        "primaryAudience": trend.get("primaryAudience") or dict(DEFAULT_AUDIENCE),
        "metrics": trend.get("metrics") or {},
    })
    return clean


def validate_chart_data(data) -> bool:
    """Non-empty list of dicts carrying ``value`` or an ``x``/``y`` pair."""
    if not isinstance(data, list) or not data:
        return False
    return all(
        isinstance(item, dict) and ("value" in item or ("x" in item and "y" in item))
        for item in data
    )

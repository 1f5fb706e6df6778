"""Google Trends interest via pytrends, with a synthetic fallback series."""

import random
import time
from datetime import date, timedelta

import requests
from pytrends.exceptions import ResponseError
from pytrends.request import TrendReq

from ..log import get_logger

SERIES_DAYS = 30
FALLBACK_REGIONS = [
    ("US", "United States"),
    ("UK", "United Kingdom"),
    ("CA", "Canada"),
    ("AU", "Australia"),
    ("DE", "Germany"),
]


def related_query_templates(query: str) -> list[str]:
    return [
        f"{query} {date.today().year}",
        f"{query} trends",
        f"{query} news",
        f"latest {query}",
        f"{query} update",
    ]


def synthetic_interest(days: int = SERIES_DAYS, rng: random.Random = None) -> list[dict]:
    """Bounded random walk in [0, 100] with a fixed direction, one point per day."""
    rng = rng or random
    direction = 1 if rng.random() > 0.5 else -1
    value = 50.0
    today = date.today()

    series = []
    for offset in range(days - 1, -1, -1):
        value = max(0.0, min(100.0, value + direction * (rng.random() * 2 + 0.5)))
        value = max(0.0, min(100.0, value + (rng.random() - 0.5) * 10))
        series.append({
            "date": (today - timedelta(days=offset)).isoformat(),
            "value": round(value),
        })
    return series


def synthetic_regions(rng: random.Random = None) -> list[dict]:
    rng = rng or random
    return [
        {"code": code, "name": name, "value": rng.randrange(30, 70)}
        for code, name in FALLBACK_REGIONS
    ]


def fetch_live(query: str) -> dict:
    """Interest over the last month, top regions and related queries.

    Raises pytrends ResponseError / requests exceptions on upstream failure
    and ValueError when Google returns no data for the query.
    """
    pytrends = TrendReq(hl="en-US", tz=360, timeout=(10, 25))
    pytrends.build_payload([query], timeframe="today 1-m")

    frame = pytrends.interest_over_time()
    if frame.empty or query not in frame.columns:
        raise ValueError(f"No interest data for {query!r}")
    series = [
        {"date": ts.strftime("%Y-%m-%d"), "value": int(row[query])}
        for ts, row in frame.iterrows()
    ]

    by_region = pytrends.interest_by_region(resolution="COUNTRY", inc_low_vol=False, inc_geo_code=True)
    regions = []
    if not by_region.empty:
        for name, row in by_region.sort_values(query, ascending=False).head(5).iterrows():
            regions.append({"code": row.get("geoCode", ""), "name": name, "value": int(row[query])})

    related = []
    top = (pytrends.related_queries().get(query) or {}).get("top")
    if top is not None and not top.empty:
        related = [str(q) for q in top["query"].head(5)]

    return {
        "interest_over_time": series,
        "related_queries": related or related_query_templates(query),
        "regions": regions,
    }


def fetch(query: str) -> dict:
    """Trends payload for the proxy endpoint. Never raises.

    Falls back to a synthetic series flagged ``mock`` when the live call
    fails, whatever pytrends raised.
    """
    logger = get_logger()
    try:
        return {"query": query, **fetch_live(query), "timestamp": int(time.time() * 1000), "mock": False}
    except (ResponseError, requests.RequestException, ValueError, KeyError) as e:
        logger.warning("Google Trends unavailable for %r (%s), using synthetic series", query, e)
        error = e
    except Exception as e:
        logger.error("Unexpected Google Trends failure for %r: %s", query, e, exc_info=True)
        error = e

    return {
        "query": query,
        "interest_over_time": synthetic_interest(),
        "related_queries": related_query_templates(query),
        "regions": synthetic_regions(),
        "error": str(error),
        "timestamp": int(time.time() * 1000),
        "mock": True,
    }

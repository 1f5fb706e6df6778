"""RealtimeAgent: periodic collection with emerging-first aggregation."""

import concurrent.futures
import threading
import time
from datetime import datetime, timezone

from .client import DirectClient
from .config import AGENT_INTERVAL, get_section
from .log import get_logger, log
from .sources import (
    RealtimeGoogleTrendsSource,
    RealtimeRedditSource,
    RealtimeTwitterSource,
    Trend,
)

DEDUP_PREFIX = 50


def aggregate(trends: list[Trend]) -> list[Trend]:
    """Drop repeats of the first 50 lowercased title chars, then sort.

    Emerging trends come first, then higher velocity.
    """
    seen = set()
    unique = []
    for trend in trends:
        key = trend.title.lower()[:DEDUP_PREFIX]
        if key not in seen:
            seen.add(key)
            unique.append(trend)

    unique.sort(key=lambda t: (t.is_emerging, t.velocity_score or 0), reverse=True)
    return unique


class RealtimeAgent:
    """Collects from all three sources every ``interval`` seconds.

    ``start()`` runs one cycle synchronously and then keeps collecting on a
    daemon thread until ``stop()``. A cycle already in flight finishes; the
    loop exits before the next one.
    """

    def __init__(self, client=None, interval: float = None, sleep=time.sleep):
        config = get_section("agent")
        self.client = client or DirectClient()
        self.interval = interval if interval is not None else config.get("interval", AGENT_INTERVAL)
        self.sources = [
            RealtimeRedditSource(self.client, config.get("reddit"), sleep=sleep),
            RealtimeTwitterSource(self.client, config.get("twitter"), sleep=sleep),
            RealtimeGoogleTrendsSource(self.client, config.get("google_trends"), sleep=sleep),
        ]

        self.trends_data = {"reddit": [], "twitter": [], "google_trends": [], "aggregated": []}
        self.stats = {"total_collected": 0, "last_update": None, "errors": 0}

        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread = None
        self._listeners = []

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def subscribe(self, listener):
        """Register ``listener(trends, stats)``, called after every cycle."""
        self._listeners.append(listener)

    def start(self, blocking: bool = True):
        """Begin collecting. With ``blocking=False`` the first cycle also runs on the thread."""
        if self.is_running:
            return
        log("Starting realtime collection agent...")
        self._stop.clear()
        if blocking:
            self.collect_all_sources()
        self._thread = threading.Thread(
            target=self._run, args=(not blocking,), name="culturepulse-agent", daemon=True
        )
        self._thread.start()
        log(f"Agent running, collecting every {self.interval:g}s")

    def stop(self, timeout: float = None):
        if self._thread is None:
            return
        log("Stopping realtime collection agent...")
        self._stop.set()
        self._thread.join(timeout)
        self._thread = None

    def _run(self, collect_now: bool = False):
        if collect_now and not self._stop.is_set():
            self.collect_all_sources()
        while not self._stop.wait(self.interval):
            self.collect_all_sources()

    def collect_all_sources(self):
        """One collection cycle across all sources."""
        logger = get_logger()
        try:
            results = {}
            with concurrent.futures.ThreadPoolExecutor(max_workers=3) as pool:
                futures = {pool.submit(src.collect): src.name for src in self.sources}
                for future in concurrent.futures.as_completed(futures):
                    name = futures[future]
                    try:
                        results[name] = future.result()
                    except Exception as e:
                        logger.warning("%s collection failed: %s", name, e)
                        results[name] = []

            aggregated = aggregate(results["reddit"] + results["twitter"] + results["google_trends"])
            with self._lock:
                self.trends_data = {**results, "aggregated": aggregated}
                self.stats["last_update"] = datetime.now(timezone.utc).isoformat()
                self.stats["total_collected"] = len(aggregated)

            log(
                f"Collected: {len(results['reddit'])} Reddit, {len(results['twitter'])} Twitter, "
                f"{len(results['google_trends'])} Google Trends ({len(aggregated)} aggregated)"
            )
        except Exception as e:
            with self._lock:
                self.stats["errors"] += 1
            logger.error("Error in realtime collection: %s", e, exc_info=True)
            return

        trends, stats = self.get_trends(), self.get_stats()
        for listener in list(self._listeners):
            try:
                listener(trends, stats)
            except Exception as e:
                logger.warning("Trend listener failed: %s", e)

    def get_trends(self) -> list[Trend]:
        with self._lock:
            return list(self.trends_data["aggregated"])

    def get_stats(self) -> dict:
        with self._lock:
            return dict(self.stats)

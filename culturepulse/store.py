"""JSON-file persistence for saved trends and generated reports."""

import json
from pathlib import Path

from .config import REPORTS_FILE, SAVED_TRENDS_FILE
from .log import get_logger
from .validation import sanitize_trend, validate_trend

MAX_REPORTS = 10


class DashboardStore:
    """Saved trends (unique by id) and the last ``MAX_REPORTS`` reports.

    Each list lives in its own JSON file and is rewritten whole on change.
    A missing or corrupt file reads as an empty list.
    """

    def __init__(self, saved_path: Path = None, reports_path: Path = None):
        self.saved_path = Path(saved_path or SAVED_TRENDS_FILE)
        self.reports_path = Path(reports_path or REPORTS_FILE)

    def _read(self, path: Path) -> list:
        if not path.exists():
            return []
        try:
            data = json.loads(path.read_text())
        except (OSError, ValueError) as e:
            get_logger().warning("Ignoring unreadable %s: %s", path.name, e)
            return []
        return data if isinstance(data, list) else []

    def _write(self, path: Path, items: list):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(items, indent=2, ensure_ascii=False))

    # ── saved trends ─────────────────────────────────
    def _checked(self, trend: dict) -> dict:
        ok, errors = validate_trend(dict(trend))
        if not ok:
            get_logger().warning("Trend %s validation issues: %s", trend.get("id"), ", ".join(errors))
        return sanitize_trend(trend)

    def saved_trends(self) -> list[dict]:
        """Saved records, validated and sanitised; non-object entries are skipped."""
        return [self._checked(t) for t in self._read(self.saved_path) if isinstance(t, dict)]

    def is_saved(self, trend_id: str) -> bool:
        return any(t.get("id") == trend_id for t in self._read(self.saved_path) if isinstance(t, dict))

    def save_trend(self, trend: dict) -> bool:
        """Add a sanitised trend; False if it lacks an id/title or is already saved."""
        ok, errors = validate_trend(dict(trend))
        if not ok:
            get_logger().warning("Not saving trend %s: %s", trend.get("id"), ", ".join(errors))
            return False
        saved = self._read(self.saved_path)
        if any(isinstance(t, dict) and t.get("id") == trend["id"] for t in saved):
            return False
        saved.append(sanitize_trend(trend))
        self._write(self.saved_path, saved)
        return True

    def remove_trend(self, trend_id: str) -> bool:
        saved = self._read(self.saved_path)
        kept = [t for t in saved if not (isinstance(t, dict) and t.get("id") == trend_id)]
        if len(kept) == len(saved):
            return False
        self._write(self.saved_path, kept)
        return True

    # ── reports ──────────────────────────────────────
    def reports(self) -> list[dict]:
        return self._read(self.reports_path)

    def add_report(self, report: dict):
        """Newest first; older reports beyond MAX_REPORTS are dropped."""
        reports = [report] + self.reports()
        self._write(self.reports_path, reports[:MAX_REPORTS])

    def find_report(self, report_id) -> dict | None:
        for report in self.reports():
            if str(report.get("id")) == str(report_id):
                return report
        return None

"""Tests for culturepulse/validation.py."""

from culturepulse.validation import (
    sanitize_number,
    sanitize_string,
    sanitize_trend,
    validate_chart_data,
    validate_trend,
)


class TestSanitize:
    def test_string(self):
        assert sanitize_string("  hi ") == "hi"
        assert sanitize_string(None, "x") == "x"
        assert sanitize_string(12) == ""

    def test_number(self):
        assert sanitize_number("42") == 42
        assert sanitize_number(3.5) == 3.5
        assert sanitize_number(float("nan"), 7) == 7
        assert sanitize_number("abc", 1) == 1
        assert sanitize_number(None) == 0
        assert sanitize_number(True) == 0


class TestValidateTrend:
    def test_fills_defaults(self):
        trend = {"id": "x", "title": "T", "velocityScore": "12", "sources": None}
        ok, errors = validate_trend(trend)
        assert ok and errors == []
        assert trend["category"] == "Uncategorized"
        assert trend["velocityScore"] == 12
        assert trend["sources"] == []
        assert trend["tags"] == []

    def test_missing_id_and_title(self):
        ok, errors = validate_trend({})
        assert not ok
        assert errors == ["Missing id", "Missing title"]

    def test_sanitize_trend(self):
        clean = sanitize_trend({"title": "  Pop-ups ", "confidence": "bad", "tags": "x"})
        assert clean["id"].startswith("trend_")
        assert clean["title"] == "Pop-ups"
        assert clean["confidence"] == 0
        assert clean["tags"] == []
        assert clean["currentPhase"] == "unknown"
        assert clean["primaryAudience"]["geographics"] == "Global"

    def test_sanitize_keeps_extra_fields(self):
        clean = sanitize_trend({"id": "a", "title": "A", "platform": "Twitter", "engagement": 12})
        assert clean["platform"] == "Twitter"
        assert clean["engagement"] == 12


class TestChartData:
    def test_accepts_value_or_xy(self):
        assert validate_chart_data([{"value": 1}, {"x": 1, "y": 2}])

    def test_rejects(self):
        assert not validate_chart_data([])
        assert not validate_chart_data("nope")
        assert not validate_chart_data([{"x": 1}])

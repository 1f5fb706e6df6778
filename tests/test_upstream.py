"""Tests for culturepulse/upstream/ — Reddit, Twitter/X, Google Trends access."""

import random
from unittest.mock import MagicMock, patch

import pandas as pd
import pytest
import requests

from culturepulse.upstream import google_trends, reddit, twitter


def _response(json_data=None, status=200):
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = json_data
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error", response=resp)
    else:
        resp.raise_for_status = MagicMock()
    return resp


class TestReddit:
    def test_parse_posts(self, reddit_listing):
        posts = reddit.parse_posts(reddit_listing)
        assert len(posts) == 2
        first = posts[0]
        assert first["id"] == "abc"
        assert first["upvoteRatio"] == 0.97
        assert first["numComments"] == 480
        assert first["trending"] is True
        assert posts[1]["trending"] is False

    def test_parse_handles_missing_data(self):
        assert reddit.parse_posts({}) == []
        assert reddit.parse_posts(None) == []
        assert reddit.parse_posts({"data": {}}) == []

    @patch("culturepulse.upstream.reddit.requests.get")
    def test_get_posts(self, mock_get, reddit_listing):
        mock_get.return_value = _response(reddit_listing)
        posts = reddit.get_posts("marketing", 10)

        assert len(posts) == 2
        args, kwargs = mock_get.call_args
        assert args[0] == "https://www.reddit.com/r/marketing/hot.json"
        assert kwargs["params"]["limit"] == 10
        assert kwargs["headers"]["User-Agent"].startswith("CulturePulse")

    @patch("culturepulse.upstream.reddit.requests.get")
    def test_http_error_is_not_retried(self, mock_get):
        mock_get.return_value = _response(status=404)
        with pytest.raises(requests.HTTPError):
            reddit.get_posts("doesnotexist")
        assert mock_get.call_count == 1

    @patch("culturepulse.retry.time.sleep")
    @patch("culturepulse.upstream.reddit.requests.get")
    def test_connection_error_is_retried(self, mock_get, mock_sleep, reddit_listing):
        mock_get.side_effect = [requests.ConnectionError("reset"), _response(reddit_listing)]
        assert len(reddit.get_posts("marketing")) == 2
        assert mock_sleep.call_count == 1


class TestTwitter:
    def test_no_token_returns_mock(self):
        payload = twitter.search("coffee", 3, token="")
        assert payload["mock"] is True
        assert len(payload["tweets"]) == 3
        assert all(t["mock"] for t in payload["tweets"])
        assert "coffee" in payload["tweets"][0]["text"]

    def test_mock_tweets_metrics_in_range(self):
        tweets = twitter.mock_tweets("x", 20, rng=random.Random(7))
        for t in tweets:
            m = t["public_metrics"]
            assert 0 <= m["retweet_count"] < 1000
            assert 0 <= m["like_count"] < 5000
            assert 0 <= m["reply_count"] < 200

    @patch("culturepulse.upstream.twitter.requests.get")
    def test_live_search(self, mock_get):
        mock_get.return_value = _response({"data": [
            {"id": "1", "text": "hello", "created_at": "2025-01-01T00:00:00.000Z",
             "public_metrics": {"like_count": 3}, "author_id": "a"},
        ]})
        payload = twitter.search("coffee", 5, token="tok")

        assert payload["mock"] is False
        assert payload["tweets"][0]["created"] == "2025-01-01T00:00:00.000Z"
        _, kwargs = mock_get.call_args
        assert kwargs["headers"]["Authorization"] == "Bearer tok"
        assert kwargs["params"]["max_results"] == 10  # API minimum

    @patch("culturepulse.upstream.twitter.requests.get")
    def test_http_error_falls_back_to_flagged_mock(self, mock_get):
        mock_get.return_value = _response(status=429)
        payload = twitter.search("coffee", 2, token="tok")
        assert payload["mock"] is True
        assert payload["error"] == "API returned 429"
        assert len(payload["tweets"]) == 2

    @patch("culturepulse.upstream.twitter.requests.get")
    def test_network_error_falls_back(self, mock_get):
        mock_get.side_effect = requests.Timeout("slow")
        payload = twitter.search("coffee", 1, token="tok")
        assert payload["mock"] is True
        assert "slow" in payload["error"]

    def test_token_from_env(self, monkeypatch):
        monkeypatch.setenv("TWITTER_BEARER_TOKEN", "envtok")
        with patch("culturepulse.upstream.twitter.search_recent", return_value=[]) as live:
            payload = twitter.search("coffee", 1)
        assert payload == {"tweets": [], "mock": False}
        assert live.call_args[0][2] == "envtok"


class TestGoogleTrends:
    def test_synthetic_interest_is_bounded(self):
        series = google_trends.synthetic_interest(rng=random.Random(1))
        assert len(series) == 30
        assert all(0 <= p["value"] <= 100 for p in series)
        dates = [p["date"] for p in series]
        assert dates == sorted(dates)

    def test_related_templates(self):
        related = google_trends.related_query_templates("coffee")
        assert len(related) == 5
        assert "coffee trends" in related
        assert "latest coffee" in related

    @patch("culturepulse.upstream.google_trends.TrendReq")
    def test_live_fetch(self, mock_req):
        client = mock_req.return_value
        index = pd.date_range("2025-01-01", periods=3, freq="D")
        client.interest_over_time.return_value = pd.DataFrame(
            {"coffee": [40, 50, 60], "isPartial": [False, False, True]}, index=index
        )
        client.interest_by_region.return_value = pd.DataFrame(
            {"geoCode": ["US", "GB"], "coffee": [80, 100]},
            index=pd.Index(["United States", "United Kingdom"], name="geoName"),
        )
        client.related_queries.return_value = {
            "coffee": {"top": pd.DataFrame({"query": ["coffee near me", "coffee beans"], "value": [100, 50]})}
        }

        payload = google_trends.fetch("coffee")

        assert payload["mock"] is False
        assert payload["interest_over_time"] == [
            {"date": "2025-01-01", "value": 40},
            {"date": "2025-01-02", "value": 50},
            {"date": "2025-01-03", "value": 60},
        ]
        assert payload["regions"][0] == {"code": "GB", "name": "United Kingdom", "value": 100}
        assert payload["related_queries"] == ["coffee near me", "coffee beans"]
        client.build_payload.assert_called_once_with(["coffee"], timeframe="today 1-m")

    @patch("culturepulse.upstream.google_trends.TrendReq")
    def test_empty_frame_falls_back(self, mock_req):
        mock_req.return_value.interest_over_time.return_value = pd.DataFrame()
        payload = google_trends.fetch("obscure")
        assert payload["mock"] is True
        assert len(payload["interest_over_time"]) == 30
        assert len(payload["regions"]) == 5
        assert payload["query"] == "obscure"

    @patch("culturepulse.upstream.google_trends.TrendReq")
    def test_network_error_falls_back(self, mock_req):
        mock_req.return_value.build_payload.side_effect = requests.ConnectionError("offline")
        payload = google_trends.fetch("coffee")
        assert payload["mock"] is True
        assert "offline" in payload["error"]

    @patch("culturepulse.upstream.google_trends.TrendReq")
    def test_unexpected_pytrends_error_falls_back(self, mock_req):
        mock_req.return_value.related_queries.side_effect = IndexError("list index out of range")
        mock_req.return_value.interest_over_time.return_value = pd.DataFrame(
            {"coffee": [40]}, index=pd.date_range("2025-01-01", periods=1, freq="D")
        )
        mock_req.return_value.interest_by_region.return_value = pd.DataFrame()
        payload = google_trends.fetch("coffee")
        assert payload["mock"] is True
        assert "list index" in payload["error"]
        assert len(payload["interest_over_time"]) == 30

"""Proxy server: Reddit, Google Trends and Twitter/X behind one JSON API."""

import os
import time
from contextlib import asynccontextmanager
from typing import List, Optional

import requests
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import upstream
from .agent import RealtimeAgent
from .collector import DataCollector
from .config import ENVIRONMENT, get_section, get_twitter_bearer_token
from .log import get_logger

logger = get_logger()

BATCH_DELAY = 0.1

_agent: Optional[RealtimeAgent] = None


def get_agent() -> RealtimeAgent:
    global _agent
    if _agent is None:
        _agent = RealtimeAgent()
    return _agent


def _agent_enabled() -> bool:
    if os.getenv("CULTUREPULSE_AGENT", "").lower() in ("1", "true", "yes"):
        return True
    return bool(get_section("agent").get("enabled", False))


@asynccontextmanager
async def lifespan(app: FastAPI):
    if get_twitter_bearer_token():
        logger.info("Twitter API configured")
    else:
        logger.warning("No TWITTER_BEARER_TOKEN, /api/twitter/search serves mock data")
    if _agent_enabled():
        get_agent().start(blocking=False)
    yield
    if _agent is not None:
        await run_in_threadpool(_agent.stop, 5)


app = FastAPI(
    title="CulturePulse",
    version="1.0.0",
    description="Reddit, Google Trends and Twitter/X proxy for the CulturePulse dashboard.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class RedditPostsRequest(BaseModel):
    subreddit: Optional[str] = None
    limit: int = 25


class RedditBatchRequest(BaseModel):
    subreddits: Optional[List[str]] = None
    limit: int = 25


class TrendsRequest(BaseModel):
    query: Optional[str] = None


class TwitterSearchRequest(BaseModel):
    query: Optional[str] = None
    limit: int = 10


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


REQUIRED_MESSAGES = {
    "/api/reddit/posts": "Subreddit required",
    "/api/reddit/batch": "Subreddits array required",
    "/api/trends": "Query parameter required",
    "/api/twitter/search": "Query parameter required",
}


# Error handlers
@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Missing or non-object bodies read as a missing required field; bad fields are listed."""
    errors = exc.errors()
    if any(len(err.get("loc", ())) < 2 for err in errors):
        message = REQUIRED_MESSAGES.get(request.url.path, "Request body required")
    else:
        message = "; ".join(f"{err['loc'][-1]}: {err['msg']}" for err in errors)
    return _error(400, message)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=exc)
    return _error(500, "Internal server error")


# ─────────────────────────────────────────────────────
# Reddit
# ─────────────────────────────────────────────────────
@app.post("/api/reddit/posts")
def reddit_posts(body: RedditPostsRequest):
    if not body.subreddit:
        return _error(400, "Subreddit required")

    try:
        posts = upstream.reddit.get_posts(body.subreddit, body.limit)
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else 502
        logger.error("Reddit API error %s for r/%s", status, body.subreddit)
        return _error(status, f"Reddit API error: {status}", subreddit=body.subreddit)
    except Exception as e:
        logger.error("Reddit proxy error: %s", e)
        return _error(500, str(e))

    logger.debug("Fetched %d posts from r/%s", len(posts), body.subreddit)
    return {"posts": posts, "subreddit": body.subreddit}


@app.post("/api/reddit/batch")
def reddit_batch(body: RedditBatchRequest):
    if not body.subreddits:
        return _error(400, "Subreddits array required")

    results = []
    for subreddit in body.subreddits:
        try:
            posts = upstream.reddit.get_posts(subreddit, body.limit)
            results.append({"subreddit": subreddit, "posts": posts, "success": True})
        except Exception as e:
            logger.warning("Reddit batch: r/%s failed: %s", subreddit, e)
            results.append({"subreddit": subreddit, "posts": [], "success": False, "error": str(e)})
        time.sleep(BATCH_DELAY)

    return {"results": results}


# ─────────────────────────────────────────────────────
# Google Trends
# ─────────────────────────────────────────────────────
@app.post("/api/trends")
def google_trends(body: TrendsRequest):
    if not body.query:
        return _error(400, "Query parameter required")
    return upstream.google_trends.fetch(body.query)


# ─────────────────────────────────────────────────────
# Twitter/X
# ─────────────────────────────────────────────────────
@app.post("/api/twitter/search")
def twitter_search(body: TwitterSearchRequest):
    if not body.query:
        return _error(400, "Query parameter required")
    return upstream.twitter.search(body.query, body.limit)


# ─────────────────────────────────────────────────────
# Aggregated trends
# ─────────────────────────────────────────────────────
@app.get("/api/collect")
def collect(limit: int = 15):
    trends = DataCollector().collect_business_trends(limit=limit)
    return {"trends": [t.to_dict() for t in trends], "timestamp": int(time.time() * 1000)}


@app.get("/api/realtime")
def realtime():
    agent = get_agent()
    return {
        "running": agent.is_running,
        "trends": [t.to_dict() for t in agent.get_trends()],
        "stats": agent.get_stats(),
    }


@app.get("/api/health")
def health():
    configured = bool(get_twitter_bearer_token())
    return {
        "status": "ok",
        "timestamp": int(time.time() * 1000),
        "environment": ENVIRONMENT,
        "twitterConfigured": configured,
        "message": "Twitter API ready" if configured else "Add TWITTER_BEARER_TOKEN to enable live Twitter data",
    }

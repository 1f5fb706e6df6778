"""Key resolution, paths, constants, and collector defaults."""

import json
import os
from pathlib import Path

# ─────────────────────────────────────────────────────
# Data directory: saved trends, reports, logs, config
# ─────────────────────────────────────────────────────
DATA_DIR = Path(os.environ.get("CULTUREPULSE_HOME", Path.home() / ".culturepulse"))
LOGS_DIR = DATA_DIR / "logs"
CONFIG_FILE = DATA_DIR / "config.json"
SAVED_TRENDS_FILE = DATA_DIR / "saved_trends.json"
REPORTS_FILE = DATA_DIR / "generated_reports.json"

# ─────────────────────────────────────────────────────
# Server
# ─────────────────────────────────────────────────────
PORT = int(os.environ.get("PORT", "3000"))
BACKEND_URL = os.environ.get("BACKEND_URL", f"http://localhost:{PORT}")
ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")

REDDIT_USER_AGENT = "CulturePulse AI/1.0"
REDDIT_HOT_URL = "https://www.reddit.com/r/{subreddit}/hot.json"
TWITTER_SEARCH_URL = "https://api.twitter.com/2/tweets/search/recent"

# ─────────────────────────────────────────────────────
# Collector defaults: override under "collector" / "agent" in config.json
# ─────────────────────────────────────────────────────
BUSINESS_SUBREDDITS = [
    # Consumer culture & brand experiences
    "Marketing", "advertising", "branding",
    "shopping", "deals", "product",
    "consumers", "customerjourneys",
    # Lifestyle & culture
    "Productivity", "Frugal", "Entrepreneur",
    "Showerthoughts", "mildlyinteresting",
    # Events & experiences
    "festivals", "concerts", "liveevents",
]
BUSINESS_TWITTER_KEYWORDS = ["technology", "Tesla", "Apple", "BMW", "fashion", "food", "coffee"]
BUSINESS_GOOGLE_KEYWORDS = ["Tesla", "Apple", "BMW", "fashion trends", "coffee trends"]

AGENT_SUBREDDITS = [
    "technology", "marketing", "Entrepreneur", "startups",
    "ecommerce", "socialmedia", "branding", "advertising",
    "productivity", "Marketing",
]
AGENT_TWITTER_KEYWORDS = [
    "experiential marketing", "brand activation", "customer experience",
    "event marketing", "social media trends", "digital marketing",
    "marketing technology", "brand strategy", "consumer trends",
]
AGENT_GOOGLE_KEYWORDS = [
    "experiential marketing", "brand activation", "customer experience",
    "event marketing", "VR experiences", "metaverse marketing",
]
AGENT_INTERVAL = 60.0


# ─────────────────────────────────────────────────────
# Utilities
# ─────────────────────────────────────────────────────
def write_secret_file(path: Path, content: str):
    """Write a file with 0600 permissions (owner read/write only).

    Uses os.open() with explicit mode so the file never exists with default
    (world-readable) permissions.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(str(path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w") as f:
        f.write(content)


# ─────────────────────────────────────────────────────
# API key resolution: env → config.json
# ─────────────────────────────────────────────────────
def _get_key(name: str) -> str:
    """Resolve an API key: environment variable first, then config.json."""
    val = os.environ.get(name)
    if val:
        return val
    return load_config().get(name) or ""


def get_twitter_bearer_token() -> str:
    return _get_key("TWITTER_BEARER_TOKEN")


def load_config() -> dict:
    """Load the full config.json, including collector/agent overrides."""
    if CONFIG_FILE.exists():
        try:
            return json.loads(CONFIG_FILE.read_text())
        except (OSError, ValueError):
            pass
    return {}


def save_config(config: dict):
    """Save config.json with restricted permissions."""
    write_secret_file(CONFIG_FILE, json.dumps(config, indent=2))


def get_section(name: str) -> dict:
    """Return one config.json section (e.g. "collector"), or {}."""
    section = load_config().get(name, {})
    return section if isinstance(section, dict) else {}

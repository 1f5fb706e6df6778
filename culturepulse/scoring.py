"""Velocity, phase, confidence and relevance heuristics."""

import math

MAX_VELOCITY = 400
MAX_CONFIDENCE = 95
EMERGING_HOURS = 72

SUBREDDIT_CATEGORIES = {
    # Tech
    "technology": "Tech", "gadgets": "Tech", "futurology": "Tech", "artificial": "Tech",
    "MachineLearning": "Tech", "singularity": "Tech", "webdev": "Tech", "programming": "Tech",
    "software": "Tech", "sysadmin": "Tech", "appdev": "Tech", "cybersecurity": "Tech",
    "Android": "Tech", "apple": "Tech", "Windows": "Tech", "Samsung": "Tech",
    # Business
    "marketing": "Business", "startups": "Business", "entrepreneur": "Business",
    "smallbusiness": "Business", "digital_marketing": "Business", "Seo": "Business",
    "advertising": "Business", "branding": "Business", "growthhacking": "Business",
    # Fashion
    "fashion": "Fashion", "malefashionadvice": "Fashion", "streetwear": "Fashion",
    "sneakers": "Fashion", "apparel": "Fashion", "watches": "Fashion",
    # Food
    "food": "Food", "cooking": "Food", "coffee": "Food", "tea": "Food",
    "cocktails": "Food", "craftbeer": "Food", "wine": "Food",
    # Automotive
    "automotive": "Automotive", "cars": "Automotive", "Tesla": "Automotive",
    "BMW": "Automotive", "mercedes_benz": "Automotive", "TeslaLounge": "Automotive",
    "ford": "Automotive",
    # Finance
    "Banking": "Finance", "investing": "Finance", "CryptoCurrency": "Finance",
    "FinancialPlanning": "Finance", "stocks": "Finance",
    # Wellness
    "fitness": "Wellness", "yoga": "Wellness", "nutrition": "Wellness",
    # Travel
    "travel": "Travel", "solotravel": "Travel", "digitalnomad": "Travel",
    # Arts & design
    "photography": "Arts", "design": "Design", "graphic_design": "Design",
    "web_design": "Design", "UI_Design": "Design", "architecture": "Design",
    "Typography": "Design", "LogoDesign": "Design", "UXDesign": "Design",
    # Entertainment
    "movies": "Entertainment", "music": "Entertainment", "gaming": "Entertainment",
}

# Narrower map used by the realtime agent's marketing-focused subreddits
AGENT_SUBREDDIT_CATEGORIES = {
    "technology": "Tech",
    "marketing": "Marketing",
    "Entrepreneur": "Business",
    "startups": "Business",
    "ecommerce": "Retail",
    "socialmedia": "Marketing",
    "branding": "Marketing",
    "advertising": "Marketing",
    "productivity": "Business",
}

# Checked in order; first substring hit wins
KEYWORD_CATEGORIES = [
    (("apple", "tech"), "Tech"),
    (("tesla", "bmw", "car"), "Automotive"),
    (("fashion",), "Fashion"),
    (("food", "coffee"), "Food & Beverage"),
    (("finance", "invest"), "Finance"),
]


def reddit_engagement(score: int, num_comments: int) -> int:
    """Reddit engagement: upvote score plus comments weighted twice."""
    return (score or 0) + (num_comments or 0) * 2


def velocity_from_engagement(engagement: float, divisor: int = 10) -> int:
    """floor(engagement / divisor), clamped at MAX_VELOCITY."""
    return min(math.floor((engagement or 0) / divisor), MAX_VELOCITY)


def twitter_velocity(metrics: dict) -> int:
    """Business-collector tweet score: (2*retweets + likes + replies) / 100."""
    retweets = metrics.get("retweet_count") or 0
    likes = metrics.get("like_count") or 0
    replies = metrics.get("reply_count") or 0
    return min(math.floor((retweets * 2 + likes + replies) / 100), MAX_VELOCITY)


def confidence_from_ratio(upvote_ratio: float) -> float:
    """Upvote ratio as a percentage, clamped at MAX_CONFIDENCE."""
    return min((upvote_ratio or 0) * 100, MAX_CONFIDENCE)


def phase_from_score(score: int) -> str:
    if score > 5000:
        return "early_majority"
    if score > 1000:
        return "early_adopters"
    return "innovators"


def phase_from_age(hours_since: float) -> str:
    return "early_adopters" if is_emerging(hours_since) else "early_majority"


def is_emerging(hours_since: float) -> bool:
    return hours_since <= EMERGING_HOURS


def average_interest(series: list[dict]) -> float:
    """Mean of the ``value`` field of an interest-over-time series."""
    if not series:
        return 0.0
    return sum(point.get("value", 0) for point in series) / len(series)


def relevance_score(trend) -> float:
    """Multi-factor rank: engagement (log), velocity, confidence, source diversity."""
    engagement_score = math.log10(max(trend.engagement or 0, 0) + 1) * 30
    source_count = len(trend.sources) or 1
    return engagement_score + (trend.velocity_score or 0) + (trend.confidence or 0) + source_count * 20


def categorize_subreddit(subreddit: str, table: dict = None) -> str:
    table = SUBREDDIT_CATEGORIES if table is None else table
    return table.get(subreddit, "General")


def categorize_keyword(keyword: str) -> str:
    kw = keyword.lower()
    for needles, category in KEYWORD_CATEGORIES:
        if any(n in kw for n in needles):
            return category
    return "General"

"""Third-party API access used by the proxy server."""

from . import google_trends, reddit, twitter

__all__ = ["google_trends", "reddit", "twitter"]

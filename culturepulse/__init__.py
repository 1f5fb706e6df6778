"""CulturePulse: marketing trend proxy, collector and ranker."""

__version__ = "1.0.0"

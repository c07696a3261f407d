"""Spark Ranker: relevance ranking of candidate profiles and events."""

__version__ = "1.0.0"

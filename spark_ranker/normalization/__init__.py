"""Normalization of loosely typed storage fields into canonical values."""

from .keywords import normalize_keywords

__all__ = ["normalize_keywords"]

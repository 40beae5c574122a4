"""Search functionality for pathmarks.

This package contains:
- fuzzy.py: Fuzzy subsequence matching and scoring
"""

from .fuzzy import FuzzyMatch, fuzzy_filter, fuzzy_match

__all__ = ["FuzzyMatch", "fuzzy_filter", "fuzzy_match"]

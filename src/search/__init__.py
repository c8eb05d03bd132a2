"""Compliance index search components."""

from search.history import SearchHistory

__all__ = ["SearchHistory"]

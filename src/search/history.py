from collections import deque
from datetime import datetime, timezone

from models.search import SearchHistoryEntry, SearchMode


class SearchHistory:
    """Most-recent-first record of the last few searches."""

    def __init__(self, max_entries: int = 5):
        """
        Initialize the history.

        Args:
            max_entries: Number of searches to keep
        """
        self.max_entries = max_entries
        self._entries: deque[SearchHistoryEntry] = deque(maxlen=max_entries)

    def record(
        self,
        mode: SearchMode,
        query: str | None = None,
        min_score: int | None = None,
    ) -> SearchHistoryEntry:
        """
        Record a search.

        Args:
            mode: Search mode
            query: Query text or violation id
            min_score: Minimum compliance score for compliance searches

        Returns:
            The stored entry
        """
        entry = SearchHistoryEntry(
            mode=mode,
            query=query,
            min_score=min_score,
            date=datetime.now(timezone.utc),
            label=self.label(mode, query, min_score),
        )
        self._entries.appendleft(entry)
        return entry

    def entries(self) -> list[SearchHistoryEntry]:
        return list(self._entries)

    @staticmethod
    def label(mode: SearchMode, query: str | None = None, min_score: int | None = None) -> str:
        """Short display label for a search."""
        if mode == SearchMode.SEMANTIC:
            return f'"{query}"'
        if mode == SearchMode.VIOLATION:
            return f"Violation: {query}"
        return f"Compliance ≥ {min_score}%"

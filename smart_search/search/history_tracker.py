"""
Search history tracking for popular-query suggestions.

This module tracks:
- Executed searches in a bounded, thread-safe ring buffer
- Popular queries within a trailing time window
- Summary statistics (volume, average results, zero-result searches)
"""

import threading
import logging
from collections import deque, Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple, Any

logger = logging.getLogger("search")

DEFAULT_CAPACITY = 1000


def normalize_query(query: str) -> str:
    """Grouping key for popularity: lowercased and trimmed."""
    return (query or "").strip().lower()


@dataclass(frozen=True)
class SearchHistoryEntry:
    """One executed search."""
    raw_query: str
    search_type: str = "All"
    result_count: int = 0
    processing_time_ms: int = 0
    user_id: Optional[str] = None
    language: str = "en"
    searched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    normalized_query: str = ""

    def __post_init__(self):
        if not self.normalized_query:
            object.__setattr__(self, "normalized_query", normalize_query(self.raw_query))


class SearchHistoryTracker:
    """
    Shared log of executed searches.

    Features:
    - FIFO eviction once capacity is reached
    - record() and snapshot() serialized by a single lock
    - Windowed popular-query ranking
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        """
        Initialize history tracker.

        Args:
            capacity: Maximum number of retained entries
        """
        self.capacity = capacity
        self._entries = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def record(self, entry: SearchHistoryEntry):
        """Append an entry, evicting the oldest when full."""
        with self._lock:
            self._entries.append(entry)

        logger.debug(f"Recorded search '{entry.raw_query}' ({entry.result_count} results)")

    def snapshot(self) -> Tuple[SearchHistoryEntry, ...]:
        """Consistent copy of the retained entries, oldest first."""
        with self._lock:
            return tuple(self._entries)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def popular_queries(
        self,
        window_hours: float,
        limit: int,
        now: Optional[datetime] = None
    ) -> List[str]:
        """
        Most frequent queries within a trailing window.

        Entries are grouped by normalized query and ordered by group size;
        ties keep the order in which groups first appeared. Each group is
        represented by its first raw query.

        Args:
            window_hours: Size of the trailing window
            limit: Maximum queries returned
            now: Reference time (defaults to current UTC time)

        Returns:
            List of raw query strings
        """
        if limit <= 0:
            return []

        now = now or datetime.now(timezone.utc)
        cutoff = now - timedelta(hours=window_hours)

        counts = Counter()
        representatives: Dict[str, str] = {}
        for entry in self.snapshot():
            if entry.searched_at < cutoff:
                continue
            counts[entry.normalized_query] += 1
            representatives.setdefault(entry.normalized_query, entry.raw_query)

        # Counter.most_common keeps first-seen order among equal counts
        return [representatives[key] for key, _ in counts.most_common(limit)]

    def get_stats(self) -> Dict[str, Any]:
        """
        Get search history statistics summary.

        Returns:
            Dictionary with history stats
        """
        entries = self.snapshot()
        total = len(entries)

        if not total:
            return {
                'total_searches': 0,
                'avg_results_per_search': 0.0,
                'avg_processing_time_ms': 0.0,
                'no_results_count': 0,
                'last_search_at': None
            }

        return {
            'total_searches': total,
            'avg_results_per_search': sum(e.result_count for e in entries) / total,
            'avg_processing_time_ms': sum(e.processing_time_ms for e in entries) / total,
            'no_results_count': sum(1 for e in entries if e.result_count == 0),
            'last_search_at': entries[-1].searched_at.isoformat()
        }

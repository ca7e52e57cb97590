"""
Tests for the bounded search history and popular-query ranking.
"""

import threading
from datetime import timedelta

from smart_search.search.history_tracker import SearchHistoryEntry, SearchHistoryTracker, normalize_query

from conftest import NOW


def entry(query, hours_ago=0, result_count=1, processing_time_ms=10):
    return SearchHistoryEntry(
        raw_query=query,
        result_count=result_count,
        processing_time_ms=processing_time_ms,
        searched_at=NOW - timedelta(hours=hours_ago)
    )


class TestHistoryEntry:

    def test_normalized_query(self):
        assert SearchHistoryEntry(raw_query="  Machine Learning ").normalized_query == "machine learning"
        assert normalize_query(None) == ""


class TestBoundedHistory:

    def test_evicts_oldest_past_capacity(self):
        tracker = SearchHistoryTracker(capacity=1000)
        for i in range(1001):
            tracker.record(entry(f"query {i}"))

        entries = tracker.snapshot()
        assert len(tracker) == 1000
        assert entries[0].raw_query == "query 1"
        assert entries[-1].raw_query == "query 1000"

    def test_clear(self):
        tracker = SearchHistoryTracker()
        tracker.record(entry("python"))
        tracker.clear()
        assert len(tracker) == 0
        assert tracker.snapshot() == ()

    def test_concurrent_records(self):
        tracker = SearchHistoryTracker(capacity=5000)

        def worker(n):
            for i in range(250):
                tracker.record(entry(f"worker {n} query {i}"))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(tracker) == 2000

    def test_concurrent_records_never_exceed_capacity(self):
        tracker = SearchHistoryTracker(capacity=100)

        def worker():
            for _ in range(200):
                tracker.record(entry("python"))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(tracker) == 100


class TestPopularQueries:

    def test_groups_by_normalized_query(self):
        tracker = SearchHistoryTracker()
        for query in ["docker", "Python", "python ", "PYTHON", "docker", "rust"]:
            tracker.record(entry(query))

        assert tracker.popular_queries(24, 10, now=NOW) == ["Python", "docker", "rust"]

    def test_window_excludes_old_searches(self):
        tracker = SearchHistoryTracker()
        tracker.record(entry("old query", hours_ago=30))
        tracker.record(entry("old query", hours_ago=25))
        tracker.record(entry("fresh query", hours_ago=1))

        assert tracker.popular_queries(24, 10, now=NOW) == ["fresh query"]

    def test_ties_keep_first_seen_order(self):
        tracker = SearchHistoryTracker()
        for query in ["beta", "alpha", "gamma"]:
            tracker.record(entry(query))

        assert tracker.popular_queries(24, 10, now=NOW) == ["beta", "alpha", "gamma"]

    def test_limit(self):
        tracker = SearchHistoryTracker()
        for query in ["a1", "a1", "b2", "c3"]:
            tracker.record(entry(query))

        assert tracker.popular_queries(24, 1, now=NOW) == ["a1"]
        assert tracker.popular_queries(24, 0, now=NOW) == []

    def test_empty_history(self):
        assert SearchHistoryTracker().popular_queries(24, 5, now=NOW) == []


class TestStats:

    def test_empty_stats(self):
        stats = SearchHistoryTracker().get_stats()
        assert stats['total_searches'] == 0
        assert stats['last_search_at'] is None

    def test_stats_summary(self):
        tracker = SearchHistoryTracker()
        tracker.record(entry("python", result_count=4, processing_time_ms=20))
        tracker.record(entry("nothing", result_count=0, processing_time_ms=10))

        stats = tracker.get_stats()
        assert stats['total_searches'] == 2
        assert stats['avg_results_per_search'] == 2.0
        assert stats['avg_processing_time_ms'] == 15.0
        assert stats['no_results_count'] == 1
        assert stats['last_search_at'] == NOW.isoformat()

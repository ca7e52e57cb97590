"""
Tests for the relevance scorer, recency decay and result ranker.
"""

from datetime import timedelta

import pytest

from smart_search.search.models import ScoringWeights
from smart_search.search.ranker import ResultRanker, calculate_recency_score, calculate_tag_score
from smart_search.search.relevance_scorer import RelevanceScorer

from conftest import NOW, make_result


class TestRelevanceScorer:

    @pytest.fixture
    def scorer(self):
        return RelevanceScorer(exact_match_boost=0.0)

    def test_blank_inputs_score_zero(self, scorer):
        assert scorer.score("python", "") == 0.0
        assert scorer.score("", "python rocks") == 0.0
        assert scorer.score("   ", "python rocks") == 0.0

    def test_query_without_terms_scores_zero(self, scorer):
        assert scorer.score("a b", "a b c") == 0.0

    def test_fraction_of_matching_terms(self, scorer):
        assert scorer.score("machine learning", "computer vision for machines") == pytest.approx(0.5)
        assert scorer.score("machine learning", "nothing relevant") == 0.0

    def test_terms_match_as_substrings(self, scorer):
        assert scorer.score("machine learning", "learning machines") == pytest.approx(1.0)

    def test_exact_phrase_hit_saturates(self):
        scorer = RelevanceScorer(exact_match_boost=0.1)
        assert scorer.score("data science", "intro to data science") == 1.0

    def test_partial_overlap_without_phrase(self):
        scorer = RelevanceScorer(exact_match_boost=0.1)
        assert scorer.score("old cat food", "cat food") == pytest.approx(2 / 3)

    def test_score_always_in_unit_interval(self):
        scorer = RelevanceScorer(exact_match_boost=1.5)
        pairs = [
            ("python", "python python python"),
            ("python tutorial", "python tutorial for all"),
            ("xyz", "abc"),
            ("Hello, World!", "hello, world! again"),
        ]
        for query, content in pairs:
            assert 0.0 <= scorer.score(query, content) <= 1.0


class TestRecencyScore:

    def test_brand_new_is_one(self):
        assert calculate_recency_score(NOW, NOW) == 1.0

    def test_one_year_old_is_zero(self):
        assert calculate_recency_score(NOW - timedelta(days=365), NOW) == pytest.approx(0.0)
        assert calculate_recency_score(NOW - timedelta(days=800), NOW) == 0.0

    def test_linear_decay(self):
        assert calculate_recency_score(NOW - timedelta(days=73), NOW) == pytest.approx(0.8)

    def test_monotonically_non_increasing(self):
        scores = [calculate_recency_score(NOW - timedelta(days=d), NOW) for d in range(0, 400, 7)]
        assert all(a >= b for a, b in zip(scores, scores[1:]))

    def test_future_dates_clamped(self):
        assert calculate_recency_score(NOW + timedelta(days=30), NOW) == 1.0


class TestTagScore:

    def test_fraction_of_matching_tags(self):
        assert calculate_tag_score(["Python", "web", "tips"], ["python", "tips"]) == pytest.approx(2 / 3)

    def test_no_tags(self):
        assert calculate_tag_score([], ["python"]) == 0.0


class TestResultRanker:

    @pytest.fixture
    def ranker(self, clock):
        return ResultRanker(weights=ScoringWeights(), clock=clock)

    def test_weighted_combination(self, clock):
        weights = ScoringWeights(
            title_weight=0.4, content_weight=0.3, tag_weight=0.2,
            recency_weight=0.1, exact_match_boost=0.0, popularity_boost=1.0
        )
        ranker = ResultRanker(weights=weights, clock=clock)
        result = make_result("a", title="docker guide", days_old=0)

        # title 0.5 * 0.4 + recency 1.0 * 0.1
        assert ranker.score_result("docker compose", result) == pytest.approx(0.3)

    def test_popularity_multiplier(self, clock):
        weights = ScoringWeights(
            title_weight=0.4, content_weight=0.0, tag_weight=0.0,
            recency_weight=0.0, exact_match_boost=0.0, popularity_boost=1.5
        )
        ranker = ResultRanker(weights=weights, clock=clock)
        popular = make_result("p", title="docker guide", view_count=101)
        borderline = make_result("b", title="docker guide", view_count=100)
        unknown = make_result("u", title="docker guide")

        assert ranker.score_result("docker compose", popular) == pytest.approx(0.3)
        assert ranker.score_result("docker compose", borderline) == pytest.approx(0.2)
        assert ranker.score_result("docker compose", unknown) == pytest.approx(0.2)

    def test_final_score_clamped(self, ranker, sample_results):
        # r1 title holds the full phrase and it is popular: saturates
        assert ranker.score_result("python tutorial", sample_results[0]) == 1.0

    def test_sorted_descending_with_scores_in_range(self, ranker, sample_results):
        ranked = ranker.rank("python", sample_results)

        scores = [r.relevance_score for r in ranked]
        assert scores == sorted(scores, reverse=True)
        assert all(0.0 <= s <= 1.0 for s in scores)
        assert ranked[0].id == "r1"

    def test_ties_keep_input_order(self, ranker):
        candidates = [make_result(f"t{i}", title="unrelated", days_old=10) for i in range(5)]
        ranked = ranker.rank("python", candidates)
        assert [r.id for r in ranked] == ["t0", "t1", "t2", "t3", "t4"]

    def test_candidates_not_mutated(self, ranker, sample_results):
        ranked = ranker.rank("python", sample_results)

        assert all(r.relevance_score == 0.0 for r in sample_results)
        assert any(r.relevance_score > 0.0 for r in ranked)
        assert {r.id for r in ranked} == {r.id for r in sample_results}

    def test_ranking_is_repeatable(self, ranker, sample_results):
        first = ranker.rank("python database", sample_results)
        second = ranker.rank("python database", sample_results)
        assert [(r.id, r.relevance_score) for r in first] == [(r.id, r.relevance_score) for r in second]

"""
Tests for settings built from the configuration dictionaries.
"""

from smart_search.config.search_config import LOG_CONFIG, SCORING_WEIGHTS, SMART_SEARCH_CONFIG
from smart_search.exceptions import SearchDisabledError, SearchValidationError
from smart_search.search.models import ScoringWeights, SearchSettings


class TestSettingsFromConfig:

    def test_defaults_follow_config(self):
        settings = SearchSettings.from_config()

        assert settings.max_page_size == SMART_SEARCH_CONFIG["max_page_size"]
        assert settings.history_capacity == 1000
        assert settings.weights.title_weight == SCORING_WEIGHTS["title_weight"]
        assert "FAQs" in settings.supported_search_types

    def test_overrides_win(self):
        settings = SearchSettings.from_config(max_page_size=5, weights=ScoringWeights(tag_weight=0.0))

        assert settings.max_page_size == 5
        assert settings.weights.tag_weight == 0.0

    def test_weight_overrides(self):
        weights = ScoringWeights.from_config(recency_weight=0.5)
        assert weights.recency_weight == 0.5
        assert weights.title_weight == SCORING_WEIGHTS["title_weight"]


class TestLogConfig:

    def test_named_loggers(self):
        assert set(LOG_CONFIG["loggers"]) >= {"search", "ai", ""}
        assert LOG_CONFIG["formatters"]["json"]["class"] == "pythonjsonlogger.jsonlogger.JsonFormatter"


class TestErrors:

    def test_error_codes(self):
        assert SearchValidationError("bad").to_dict() == {"error": "bad", "code": "INVALID_QUERY"}
        assert SearchDisabledError("off").error_code == "SEARCH_DISABLED"
        assert isinstance(SearchDisabledError("off"), ValueError)

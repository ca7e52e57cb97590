"""
Configuration settings for the smart search engine.
"""

import os
import logging.config
from pathlib import Path


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() == "true"


# Base directories
BASE_DIR = Path(__file__).parent.parent.parent

# Data directory - use environment variable in production, local path in development
DATA_DIR = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))

# Optional JSON file with content items for the CLI content source
CONTENT_PATH = os.getenv("CONTENT_PATH", str(DATA_DIR / "content.json"))


# SMART SEARCH CONFIGURATION

SMART_SEARCH_CONFIG = {
    # Feature switches
    "is_enabled": _env_bool("SMART_SEARCH_ENABLED", True),
    "enable_query_understanding": _env_bool("SMART_SEARCH_QUERY_UNDERSTANDING", True),
    "enable_search_history": _env_bool("SMART_SEARCH_HISTORY", True),

    # Pagination
    "max_page_size": int(os.getenv("SMART_SEARCH_MAX_PAGE_SIZE", "50")),
    "default_page_size": int(os.getenv("SMART_SEARCH_DEFAULT_PAGE_SIZE", "10")),

    # Queries longer than this are truncated, not rejected
    "max_query_length": int(os.getenv("SMART_SEARCH_MAX_QUERY_LENGTH", "500")),

    # Suggestions and popular searches
    "default_suggestion_count": int(os.getenv("SMART_SEARCH_SUGGESTION_COUNT", "5")),
    "popular_searches_limit": int(os.getenv("SMART_SEARCH_POPULAR_LIMIT", "20")),
    "popular_searches_window_hours": int(os.getenv("SMART_SEARCH_POPULAR_WINDOW_HOURS", "24")),

    # Search history ring buffer size
    "history_capacity": 1000,

    # Language reported when no script-specific characters are found
    "default_language": os.getenv("SMART_SEARCH_DEFAULT_LANGUAGE", "en"),

    # Upper bound for a single AI round trip (availability check + completion)
    "ai_timeout_seconds": float(os.getenv("SMART_SEARCH_AI_TIMEOUT", "10.0")),

    "supported_search_types": [
        "All", "Posts", "Questions", "Articles", "Users", "Documents", "FAQs"
    ],
}


# SCORING WEIGHTS
#
# Weights do not have to sum to 1.0; the final score is clamped to [0, 1].
#
# exact_match_boost is added once per matching query term when the full query
# appears verbatim in the field, so a phrase hit saturates the field score.
# popularity_boost multiplies the weighted score of items with > 100 views.

SCORING_WEIGHTS = {
    "title_weight": float(os.getenv("SCORING_TITLE_WEIGHT", "0.4")),
    "content_weight": float(os.getenv("SCORING_CONTENT_WEIGHT", "0.3")),
    "tag_weight": float(os.getenv("SCORING_TAG_WEIGHT", "0.2")),
    "recency_weight": float(os.getenv("SCORING_RECENCY_WEIGHT", "0.1")),
    "exact_match_boost": float(os.getenv("SCORING_EXACT_MATCH_BOOST", "1.5")),
    "popularity_boost": float(os.getenv("SCORING_POPULARITY_BOOST", "1.2")),
}


# AI PROVIDERS
#
# OpenAI-compatible chat completion endpoints, tried in ascending priority.
# A provider without an API key is disabled.

AI_PROVIDERS_CONFIG = [
    {
        "name": "groq",
        "base_url": os.getenv("GROQ_BASE_URL", "https://api.groq.com/openai/v1"),
        "api_key": os.getenv("GROQ_API_KEY", ""),
        "model": os.getenv("GROQ_MODEL", "llama-3.1-8b-instant"),
        "priority": 1,
        "enabled": bool(os.getenv("GROQ_API_KEY")),
        "max_requests_per_minute": 30,
        "max_tokens_per_request": 1024,
        "timeout_seconds": 30,
    },
    {
        "name": "openrouter",
        "base_url": os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1"),
        "api_key": os.getenv("OPENROUTER_API_KEY", ""),
        "model": os.getenv("OPENROUTER_MODEL", "meta-llama/llama-3.1-8b-instruct:free"),
        "priority": 2,
        "enabled": bool(os.getenv("OPENROUTER_API_KEY")),
        "max_requests_per_minute": 20,
        "max_tokens_per_request": 1024,
        "timeout_seconds": 30,
    },
]


# LOGGING CONFIGURATION

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = Path(os.getenv("LOG_DIR", str(BASE_DIR / "logs")))

LOG_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "class": "pythonjsonlogger.jsonlogger.JsonFormatter",
            "format": "%(asctime)s %(name)s %(levelname)s %(message)s"
        },
        "standard": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": LOG_LEVEL,
            "formatter": "standard",
            "stream": "ext://sys.stderr"
        },
        "search": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(LOG_DIR / "search.log"),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
            "formatter": "json",
            "level": LOG_LEVEL
        },
        "errors": {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(LOG_DIR / "errors.log"),
            "maxBytes": 10485760,
            "backupCount": 5,
            "formatter": "json",
            "level": "ERROR"
        }
    },
    "loggers": {
        "search": {
            "handlers": ["console", "search", "errors"],
            "level": LOG_LEVEL,
            "propagate": False
        },
        "ai": {
            "handlers": ["console", "search", "errors"],
            "level": LOG_LEVEL,
            "propagate": False
        },
        "": {  # Root logger
            "handlers": ["console", "errors"],
            "level": LOG_LEVEL
        }
    }
}


def configure_logging():
    """Create the log directory and apply LOG_CONFIG."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(LOG_CONFIG)


# ENVIRONMENT

DEBUG = _env_bool("DEBUG", False)
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

"""
Smart search: query understanding and relevance ranking for content discovery.
"""

__version__ = "1.0.0"

"""News processing module"""
from .news_dedup import deduplicate_articles
from .news_filter import filter_news
from .pipeline import process_news_pipeline
from .text_similarity import (
    calculate_jaccard_similarity,
    calculate_levenshtein_similarity,
    calculate_news_similarity,
    similarity_to_percent,
)

__all__ = [
    'deduplicate_articles',
    'filter_news',
    'process_news_pipeline',
    'calculate_jaccard_similarity',
    'calculate_levenshtein_similarity',
    'calculate_news_similarity',
    'similarity_to_percent',
]

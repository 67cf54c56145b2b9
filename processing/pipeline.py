"""News processing pipeline - orchestrates filtering and deduplication"""
import logging

from .news_dedup import deduplicate_articles
from .news_filter import filter_news

logger = logging.getLogger(__name__)


def _count_by_category(articles):
    counts = {}
    for article in articles:
        category = article.get('category') or 'unknown'
        counts[category] = counts.get(category, 0) + 1
    return counts


def process_news_pipeline(raw_articles, existing=None):
    """
    Process raw news articles through the ingestion layers:
    1. Layer 1: Junk filter + topic classification
    2. Layer 2: Link and similarity deduplication (against `existing` too)

    Returns the surviving articles with filter stats
    """
    raw_count = len(raw_articles)

    if not raw_articles:
        return {
            'count': 0,
            'articles': [],
            'by_category': {},
            'filter_stats': {
                'raw_articles': 0,
                'junk_filtered': 0,
                'duplicates_removed': 0,
                'unique_articles': 0
            }
        }

    # LAYER 1: Junk filter
    filtered_articles, filter_stats = filter_news(raw_articles)

    # LAYER 2: Deduplication
    unique_articles = deduplicate_articles(filtered_articles, existing=existing)
    duplicates_removed = len(filtered_articles) - len(unique_articles)

    logger.info(
        "Pipeline: %d raw, %d junk, %d duplicates, %d unique",
        raw_count, filter_stats['filtered_junk'], duplicates_removed, len(unique_articles),
    )

    return {
        'count': len(unique_articles),
        'articles': unique_articles,
        'by_category': _count_by_category(unique_articles),
        'filter_stats': {
            'raw_articles': raw_count,
            'junk_filtered': filter_stats['filtered_junk'],
            'duplicates_removed': duplicates_removed,
            'unique_articles': len(unique_articles)
        }
    }

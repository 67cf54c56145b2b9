"""Layer 2: News deduplication by original link and composite similarity"""
import logging
from datetime import datetime

import pytz
from dateutil import parser as date_parser

from config.loader import get_config
from processing.text_similarity import calculate_news_similarity

logger = logging.getLogger(__name__)

_OLDEST = datetime.min


def normalize_link(url):
    """Normalize a link for comparison"""
    link = (url or '').strip()
    if '://' in link:
        scheme, rest = link.split('://', 1)
        host, sep, path = rest.partition('/')
        link = f"{scheme.lower()}://{host.lower()}{sep}{path}"
    return link.rstrip('/')


def is_duplicate_link(article, seen_links):
    """Check the article's original link against already-seen links"""
    link = normalize_link(article.get('original_link'))
    return bool(link) and link in seen_links


def _as_naive_utc(value):
    # Naive timestamps are taken to be UTC already
    if value.tzinfo is None:
        return value
    return value.astimezone(pytz.utc).replace(tzinfo=None)


def _published_key(article):
    value = article.get('published_date')
    if not value:
        return _OLDEST
    if isinstance(value, datetime):
        return _as_naive_utc(value)
    try:
        return _as_naive_utc(date_parser.parse(str(value)))
    except (ValueError, OverflowError):
        logger.warning("Could not parse published_date %r", value)
        return _OLDEST


def find_duplicate(article, candidates, threshold, title_weight, content_weight):
    """Return (matching candidate or None, best score seen)"""
    best_score = 0.0
    for candidate in candidates:
        score = calculate_news_similarity(
            article.get('title', ''),
            article.get('content', ''),
            candidate.get('title', ''),
            candidate.get('content', ''),
            title_weight=title_weight,
            content_weight=content_weight,
        )
        if score >= threshold:
            return candidate, score
        best_score = max(best_score, score)
    return None, best_score


def deduplicate_articles(articles, existing=None, threshold=None,
                         title_weight=None, content_weight=None):
    """Drop articles whose link or title/content duplicates a kept or stored one.

    Newest articles are considered first, so the most recent version of a
    story survives.
    """
    if not articles:
        return []

    config = get_config()
    if threshold is None:
        threshold = config['DUPLICATE_THRESHOLD']
    if title_weight is None:
        title_weight = config['TITLE_WEIGHT']
    if content_weight is None:
        content_weight = config['CONTENT_WEIGHT']

    existing = list(existing or [])
    seen_links = {normalize_link(a.get('original_link')) for a in existing}
    seen_links.discard('')

    articles_sorted = sorted(articles, key=_published_key, reverse=True)

    unique = []
    for article in articles_sorted:
        if is_duplicate_link(article, seen_links):
            logger.debug("Duplicate link skipped: %s", article.get('original_link'))
            continue

        match, score = find_duplicate(
            article, existing + unique, threshold, title_weight, content_weight
        )
        if match is not None:
            logger.info(
                "Near-duplicate skipped (%.2f): %r ~ %r",
                score, article.get('title', '')[:50], match.get('title', '')[:50],
            )
            continue

        unique.append(article)
        link = normalize_link(article.get('original_link'))
        if link:
            seen_links.add(link)

    return unique

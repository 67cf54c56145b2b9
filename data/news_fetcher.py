"""News collection from the Brave Search API"""
import logging
import time
from datetime import datetime
from urllib.parse import urlparse

import pytz
import requests

from config.loader import get_config
from data.translator import translate_article_if_needed
from processing.news_filter import classify_news_category

logger = logging.getLogger(__name__)

KST = pytz.timezone('Asia/Seoul')
BRAVE_SEARCH_URL = 'https://api.search.brave.com/res/v1/web/search'

NEWS_CATEGORIES = ['태국뉴스', '관련뉴스', '한국뉴스']
CATEGORY_LIMIT = 10
CATEGORY_DELAY_SECONDS = 0.5
MIN_CONTENT_LENGTH = 300


def today_kst():
    return datetime.now(KST).strftime('%Y-%m-%d')


def get_search_query_for_category(category, date):
    """Build the date-specific search query for a collection category"""
    date_str = date or today_kst()
    if category == '태국뉴스':
        return f"태국 뉴스 {date_str} site:th OR site:thailand"
    if category == '관련뉴스':
        return f"한국 태국 관련 뉴스 {date_str} site:kr OR site:co.kr"
    if category == '한국뉴스':
        return f"한국 뉴스 {date_str} site:kr OR site:co.kr"
    return f"뉴스 {date_str}"


def search_brave_news(query, count=10):
    """Query Brave Search and return its result list"""
    api_key = get_config().get('BRAVE_SEARCH_API_KEY')
    if not api_key:
        raise ValueError("Missing environment variable: BRAVE_SEARCH_API_KEY")

    logger.debug("Brave search: %r (count=%d)", query, count)
    response = requests.get(
        BRAVE_SEARCH_URL,
        params={
            'q': query,
            'count': count,
            'search_lang': 'ko',
            'country': 'KR',
            'safesearch': 'moderate',
        },
        headers={
            'X-Subscription-Token': api_key,
            'Accept': 'application/json',
        },
        timeout=15,
    )
    response.raise_for_status()

    data = response.json()
    results = (data.get('web') or {}).get('results') or (data.get('news') or {}).get('results') or []
    logger.info("Brave search returned %d results for %r", len(results), query)
    return results


def convert_brave_result(result, category, date):
    """Map a Brave search result to an article dict"""
    url = result.get('url', '')
    title = result.get('title', '')
    description = result.get('description', '')

    source_media = (result.get('meta_url') or {}).get('hostname') or urlparse(url).hostname or '알 수 없음'
    source_country = '태국' if category == '태국뉴스' else '한국'

    # The search API only returns a snippet, not the article body
    content = description or title
    if len(content) <= MIN_CONTENT_LENGTH:
        content = f"{content}\n\n자세한 내용은 원문을 참고하세요: {url}"

    return {
        'published_date': date,
        'source_country': source_country,
        'source_media': source_media,
        'title': title,
        'content': content,
        'category': category,
        'news_category': classify_news_category(title, description),
        'original_link': url,
    }


def fetch_news_from_brave(date=None):
    """Collect up to CATEGORY_LIMIT articles per collection category.

    Non-Korean titles and snippets are translated when GEMINI_API_KEY is set.

    A network failure in one category is logged and the next category is
    tried; HTTP errors and a missing API key abort the whole run.
    """
    today = today_kst()
    if not date:
        date = today
    elif date > today:
        logger.warning("Future date %s requested, using %s", date, today)
        date = today

    logger.info("Collecting news from Brave for %s", date)
    all_articles = []

    for i, category in enumerate(NEWS_CATEGORIES):
        if i > 0:
            time.sleep(CATEGORY_DELAY_SECONDS)

        query = get_search_query_for_category(category, date)
        try:
            results = search_brave_news(query, CATEGORY_LIMIT * 2)
        except requests.HTTPError:
            logger.error("Brave search failed for %s", category)
            raise
        except requests.RequestException as e:
            logger.warning("Network error collecting %s: %s", category, e)
            continue

        articles = []
        for result in results[:CATEGORY_LIMIT]:
            # Translate the snippet before the Korean link suffix is appended
            result = translate_article_if_needed(dict(result), fields=('title', 'description'))
            articles.append(convert_brave_result(result, category, date))
        all_articles.extend(articles)
        logger.info("Collected %d/%d articles for %s", len(articles), CATEGORY_LIMIT, category)

    return all_articles

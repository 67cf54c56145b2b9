"""Data fetching module"""
from .news_fetcher import fetch_news_from_brave, search_brave_news

__all__ = [
    'fetch_news_from_brave',
    'search_brave_news'
]

"""Namespaced in-memory cache with per-entry TTL"""
import random
import threading
import time

CLEANUP_PROBABILITY = 0.05

CACHE_NAMESPACES = {
    'NEWS': 'news',
    'NEWS_CATEGORY': 'news:category',
    'NEWS_ID': 'news:id',
    'NEWS_RELATED': 'news:related',
    'SIMILARITY': 'similarity',
}

# cache key -> {'value': ..., 'expires_at': float (epoch seconds)}
_store = {}
_lock = threading.Lock()


def _cache_key(namespace, key):
    return f"cache:{namespace}:{key}"


def get_cache(namespace, key, now=None):
    """Cached value, or None when missing or expired"""
    if now is None:
        now = time.time()
    cache_key = _cache_key(namespace, key)

    with _lock:
        entry = _store.get(cache_key)
        if entry is None:
            return None
        if now > entry['expires_at']:
            del _store[cache_key]
            return None
        return entry['value']


def set_cache(namespace, key, value, ttl_seconds=60, now=None):
    if now is None:
        now = time.time()

    with _lock:
        _store[_cache_key(namespace, key)] = {
            'value': value,
            'expires_at': now + ttl_seconds,
        }
        if random.random() < CLEANUP_PROBABILITY:
            _cleanup_expired_locked(now)


def delete_cache(namespace, key):
    with _lock:
        _store.pop(_cache_key(namespace, key), None)


def invalidate_namespace(namespace):
    """Delete every key under `namespace`, including nested namespaces"""
    prefix = _cache_key(namespace, '')
    with _lock:
        doomed = [k for k in _store if k.startswith(prefix)]
        for k in doomed:
            del _store[k]


def _cleanup_expired_locked(now):
    expired = [k for k, entry in _store.items() if now > entry['expires_at']]
    for k in expired:
        del _store[k]


def clear_cache():
    with _lock:
        _store.clear()


def get_cache_stats():
    with _lock:
        return {'in_memory_size': len(_store)}


def invalidate_news_cache(news_id=None):
    """Invalidate one article's cached views, or all news caches"""
    if news_id:
        delete_cache(CACHE_NAMESPACES['NEWS_ID'], news_id)
        delete_cache(CACHE_NAMESPACES['NEWS_RELATED'], news_id)
        # The article's category is unknown here
        invalidate_namespace(CACHE_NAMESPACES['NEWS_CATEGORY'])
    else:
        invalidate_namespace(CACHE_NAMESPACES['NEWS'])


def invalidate_category_cache(category):
    delete_cache(CACHE_NAMESPACES['NEWS_CATEGORY'], category)

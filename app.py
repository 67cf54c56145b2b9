#!/usr/bin/env python3
"""
Thai/Korean news similarity service
Two-layer ingestion: Junk filter -> Link + similarity dedup

Endpoints:
- /health
- /api/csrf-token
- /api/similarity (compare two news items)
- /api/dedup (deduplicate a batch against stored articles)
- /api/cron/fetch-news (collect from Brave Search, then dedup)
"""

import hashlib
import hmac
import json
import logging
import os
import time
from datetime import datetime
from functools import wraps

import pytz
import requests
from flask import Flask, jsonify, request

from cache import CACHE_NAMESPACES, get_cache, get_cache_stats, invalidate_news_cache, set_cache
from config.loader import get_config
from csrf import (
    CSRF_TOKEN_COOKIE_NAME,
    CSRF_TOKEN_HEADER,
    CSRF_TOKEN_MAX_AGE,
    generate_csrf_token,
    requires_csrf_protection,
    verify_csrf_token,
)
from data.news_fetcher import fetch_news_from_brave
from processing.pipeline import process_news_pipeline
from processing.text_similarity import (
    calculate_jaccard_similarity,
    calculate_levenshtein_similarity,
    calculate_news_similarity,
    similarity_to_percent,
)
from rate_limit import check_rate_limit, get_store_size

logger = logging.getLogger(__name__)

app = Flask(__name__)

KST = pytz.timezone('Asia/Seoul')
SIMILARITY_CACHE_TTL = 300
DEDUP_TEXT_FIELDS = ('title', 'content', 'original_link')


def _error(message, status):
    return jsonify({'success': False, 'error': message}), status


def _client_id():
    forwarded = request.headers.get('X-Forwarded-For', '')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.remote_addr or 'unknown'


def protected(view):
    """CSRF check for state-changing methods, then per-client rate limit"""
    @wraps(view)
    def wrapper(*args, **kwargs):
        if requires_csrf_protection(request.method):
            header_token = request.headers.get(CSRF_TOKEN_HEADER)
            cookie_token = request.cookies.get(CSRF_TOKEN_COOKIE_NAME)
            if not verify_csrf_token(header_token, cookie_token):
                logger.warning("CSRF check failed for %s %s", request.method, request.path)
                return _error('Invalid CSRF token', 403)

        config = get_config()
        result = check_rate_limit(
            f"{request.path}:{_client_id()}",
            max_requests=config['RATE_LIMIT_MAX_REQUESTS'],
            window_seconds=config['RATE_LIMIT_WINDOW_SECONDS'],
        )
        if not result['allowed']:
            retry_after = max(1, int(result["reset_time"] - time.time()))
            response, status = _error('Too many requests', 429)
            response.headers['Retry-After'] = str(retry_after)
            return response, status

        return view(*args, **kwargs)
    return wrapper


def _json_body():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValueError('Request body must be a JSON object')
    return body


def _weight(body, name, default):
    value = body.get(name, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f'{name} must be a number')
    return float(value)


@app.route("/health", methods=["GET"])
def health_check():
    """Health check"""
    now = datetime.now(KST)
    return jsonify({
        "status": "healthy",
        "timestamp": now.strftime("%Y-%m-%d %H:%M:%S %Z"),
        "environment": get_config()['APP_ENV'],
        "cache": get_cache_stats(),
        "rate_limit": {"tracked_clients": get_store_size()}
    }), 200


@app.route("/api/csrf-token", methods=["GET"])
def csrf_token():
    """Issue a CSRF token and mirror it into an httponly cookie"""
    token = generate_csrf_token()
    response = jsonify({'success': True, 'token': token})
    response.set_cookie(
        CSRF_TOKEN_COOKIE_NAME,
        token,
        max_age=CSRF_TOKEN_MAX_AGE,
        httponly=True,
        secure=get_config()['APP_ENV'] == 'production',
        samesite='Strict',
        path='/',
    )
    return response


@app.route("/api/similarity", methods=["POST"])
@protected
def similarity():
    """Compare two news items"""
    try:
        body = _json_body()
        config = get_config()
        title_weight = _weight(body, 'title_weight', config['TITLE_WEIGHT'])
        content_weight = _weight(body, 'content_weight', config['CONTENT_WEIGHT'])
        fields = [str(body.get(k) or '') for k in ('title1', 'content1', 'title2', 'content2')]
    except ValueError as e:
        return _error(str(e), 400)

    key_source = json.dumps([fields, title_weight, content_weight], ensure_ascii=False)
    cache_key = hashlib.sha256(key_source.encode('utf-8')).hexdigest()
    cached = get_cache(CACHE_NAMESPACES['SIMILARITY'], cache_key)
    if cached is not None:
        return jsonify(cached)

    title1, content1, title2, content2 = fields
    score = calculate_news_similarity(
        title1, content1, title2, content2,
        title_weight=title_weight, content_weight=content_weight,
    )
    result = {
        'success': True,
        'title_similarity': calculate_levenshtein_similarity(title1, title2),
        'content_similarity': calculate_jaccard_similarity(content1, content2),
        'similarity': score,
        'percent': similarity_to_percent(score),
        'is_duplicate': score >= config['DUPLICATE_THRESHOLD'],
    }
    set_cache(CACHE_NAMESPACES['SIMILARITY'], cache_key, result, ttl_seconds=SIMILARITY_CACHE_TTL)
    return jsonify(result)


@app.route("/api/dedup", methods=["POST"])
@protected
def dedup():
    """Filter and deduplicate a batch of articles"""
    try:
        body = _json_body()
        articles = body.get('articles') or []
        existing = body.get('existing') or []
        if not isinstance(articles, list) or not isinstance(existing, list):
            raise ValueError('articles and existing must be lists')
        if not all(isinstance(a, dict) for a in articles + existing):
            raise ValueError('every article must be a JSON object')
        for article in articles + existing:
            for field in DEDUP_TEXT_FIELDS:
                value = article.get(field)
                if value is not None and not isinstance(value, str):
                    raise ValueError(f"'{field}' must be a string")
    except ValueError as e:
        return _error(str(e), 400)

    result = process_news_pipeline(articles, existing=existing)
    return jsonify({'success': True, **result})


def _cron_authorized():
    secret = get_config().get('CRON_SECRET')
    if not secret:
        return True
    auth = request.headers.get('Authorization', '')
    return hmac.compare_digest(auth.encode('utf-8'), f"Bearer {secret}".encode('utf-8'))


@app.route("/api/cron/fetch-news", methods=["GET", "POST"])
def cron_fetch_news():
    """Collect today's news from Brave Search and run the pipeline"""
    if not _cron_authorized():
        return _error('Unauthorized', 401)

    date = request.args.get('date')
    try:
        raw_articles = fetch_news_from_brave(date)
    except ValueError as e:
        logger.error("News collection misconfigured: %s", e)
        return _error(str(e), 500)
    except requests.RequestException as e:
        logger.error("News collection failed: %s", e)
        return _error(f'News collection failed: {e}', 502)

    result = process_news_pipeline(raw_articles)
    invalidate_news_cache()
    return jsonify({
        'success': True,
        'timestamp': datetime.now(KST).isoformat(),
        **result
    })


# ============================================================================
# MAIN
# ============================================================================

if __name__ == "__main__":
    PORT = int(os.environ.get("PORT", 8080))
    config = get_config()

    logging.basicConfig(
        level=getattr(logging, config['LOG_LEVEL'], logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("=" * 80)
    print("News Similarity Service")
    print("=" * 80)
    print(f"Port: {PORT}")
    print(f"Environment: {config['APP_ENV']}")
    print(f"Duplicate threshold: {config['DUPLICATE_THRESHOLD']}")
    print(f"Weights: title {config['TITLE_WEIGHT']} / content {config['CONTENT_WEIGHT']}")
    print("=" * 80)

    app.run(host="0.0.0.0", port=PORT)

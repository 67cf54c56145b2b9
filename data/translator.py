"""Korean translation of collected news via the Gemini API"""
import logging
import re

import requests

from config.loader import get_config

logger = logging.getLogger(__name__)

GEMINI_URL = 'https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent'

_HANGUL_RE = re.compile(r'[가-힣]')


def is_korean(text):
    """True when the text contains at least one Hangul syllable"""
    return bool(_HANGUL_RE.search(text or ''))


def translate_to_korean(text):
    """Translate `text` to Korean; the original text comes back on any failure"""
    if not text or not text.strip():
        return text

    config = get_config()
    api_key = config.get('GEMINI_API_KEY')
    if not api_key:
        logger.debug("GEMINI_API_KEY not set; skipping translation")
        return text

    prompt = (
        "다음 텍스트를 자연스러운 한국어로 번역해주세요. 원문의 의미와 뉘앙스를 정확히 전달해야 합니다. "
        "번역만 출력하고 다른 설명은 하지 마세요.\n\n"
        f"원문:\n{text}"
    )

    try:
        response = requests.post(
            GEMINI_URL.format(model=config['GEMINI_MODEL']),
            headers={
                'x-goog-api-key': api_key,
                'Content-Type': 'application/json'
            },
            json={'contents': [{'parts': [{'text': prompt}]}]},
            timeout=60
        )
    except requests.RequestException as e:
        logger.warning("Translation request failed: %s", e)
        return text

    if response.status_code != 200:
        logger.warning("Gemini API error %s; keeping original text", response.status_code)
        return text

    try:
        result = response.json()
        translated = result['candidates'][0]['content']['parts'][0]['text']
    except (ValueError, KeyError, IndexError, TypeError) as e:
        logger.warning("Unexpected Gemini response (%s); keeping original text", e)
        return text

    translated = (translated or '').strip()
    return translated or text


def translate_article_if_needed(article, fields=('title', 'content')):
    """Translate the non-Korean text fields of `article` in place"""
    for field in fields:
        value = article.get(field) or ''
        if value and not is_korean(value):
            logger.info("Translating %s: %s", field, value[:50])
            article[field] = translate_to_korean(value)
    return article

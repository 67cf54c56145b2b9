"""Tests for Gemini-backed Korean translation (HTTP calls stubbed).

Run: python -m pytest tests/test_translator.py -v
"""
import pytest
import requests
from config.loader import reset_config
from data import translator
from data.translator import is_korean, translate_article_if_needed, translate_to_korean


# ── Helpers ──────────────────────────────────────────────────────────────


class _FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


def _gemini_payload(text):
    return {'candidates': [{'content': {'parts': [{'text': text}]}}]}


@pytest.fixture
def gemini_key(monkeypatch):
    monkeypatch.setenv('GEMINI_API_KEY', 'gemini-test-key')
    reset_config()


# ── Detection ────────────────────────────────────────────────────────────


class TestIsKorean:
    def test_hangul(self):
        assert is_korean("태국 방콕 축제")
        assert is_korean("Bangkok 축제 2026")

    def test_non_hangul(self):
        assert not is_korean("Bangkok festival opens")
        assert not is_korean("กรุงเทพ")
        assert not is_korean("")
        assert not is_korean(None)


# ── Translation ──────────────────────────────────────────────────────────


class TestTranslateToKorean:
    def test_no_key_skips_request(self, monkeypatch):
        def fail_post(*args, **kwargs):
            raise AssertionError("requests.post should not be called")

        monkeypatch.setattr(translator.requests, 'post', fail_post)
        assert translate_to_korean("Bangkok festival opens") == "Bangkok festival opens"

    def test_blank_text_untouched(self, gemini_key, monkeypatch):
        monkeypatch.setattr(translator.requests, 'post', lambda *a, **k: pytest.fail("unexpected call"))
        assert translate_to_korean("") == ""
        assert translate_to_korean("   ") == "   "

    def test_success(self, gemini_key, monkeypatch):
        calls = []

        def fake_post(url, headers=None, json=None, timeout=None):
            calls.append({'url': url, 'headers': headers, 'json': json, 'timeout': timeout})
            return _FakeResponse(_gemini_payload("  방콕 축제 개막  \n"))

        monkeypatch.setattr(translator.requests, 'post', fake_post)
        assert translate_to_korean("Bangkok festival opens") == "방콕 축제 개막"

        assert len(calls) == 1
        assert calls[0]['url'].endswith('/models/gemini-2.5-flash:generateContent')
        assert calls[0]['headers']['x-goog-api-key'] == 'gemini-test-key'
        assert "Bangkok festival opens" in calls[0]['json']['contents'][0]['parts'][0]['text']

    def test_model_from_config(self, gemini_key, monkeypatch):
        monkeypatch.setenv('GEMINI_MODEL', 'gemini-test-model')
        reset_config()
        urls = []

        def fake_post(url, **kwargs):
            urls.append(url)
            return _FakeResponse(_gemini_payload("번역"))

        monkeypatch.setattr(translator.requests, 'post', fake_post)
        translate_to_korean("hello")
        assert urls[0].endswith('/models/gemini-test-model:generateContent')

    def test_api_error_keeps_original(self, gemini_key, monkeypatch):
        monkeypatch.setattr(
            translator.requests, 'post',
            lambda *a, **k: _FakeResponse({'error': {'message': 'quota'}}, 429),
        )
        assert translate_to_korean("Bangkok festival opens") == "Bangkok festival opens"

    def test_network_error_keeps_original(self, gemini_key, monkeypatch):
        def broken_post(*args, **kwargs):
            raise requests.ConnectionError("connection reset")

        monkeypatch.setattr(translator.requests, 'post', broken_post)
        assert translate_to_korean("Bangkok festival opens") == "Bangkok festival opens"

    @pytest.mark.parametrize("payload", [
        {},
        {'candidates': []},
        {'candidates': [{'content': {'parts': []}}]},
        ValueError("not json"),
    ])
    def test_malformed_response_keeps_original(self, gemini_key, monkeypatch, payload):
        monkeypatch.setattr(translator.requests, 'post', lambda *a, **k: _FakeResponse(payload))
        assert translate_to_korean("Bangkok festival opens") == "Bangkok festival opens"

    def test_empty_translation_keeps_original(self, gemini_key, monkeypatch):
        monkeypatch.setattr(translator.requests, 'post', lambda *a, **k: _FakeResponse(_gemini_payload("  ")))
        assert translate_to_korean("Bangkok festival opens") == "Bangkok festival opens"


class TestTranslateArticle:
    def test_only_non_korean_fields(self, gemini_key, monkeypatch):
        sent = []

        def fake_post(url, json=None, **kwargs):
            sent.append(json['contents'][0]['parts'][0]['text'])
            return _FakeResponse(_gemini_payload("방콕 축제 개막"))

        monkeypatch.setattr(translator.requests, 'post', fake_post)
        article = {'title': "Bangkok festival opens", 'content': "방콕에서 축제가 열렸다", 'original_link': 'https://a.com/1'}
        result = translate_article_if_needed(article)

        assert result is article
        assert article['title'] == "방콕 축제 개막"
        assert article['content'] == "방콕에서 축제가 열렸다"
        assert len(sent) == 1

    def test_custom_fields_and_missing_values(self, gemini_key, monkeypatch):
        monkeypatch.setattr(translator.requests, 'post', lambda *a, **k: _FakeResponse(_gemini_payload("설명")))
        result = {'title': "제목", 'description': "A description"}
        translate_article_if_needed(result, fields=('title', 'description', 'snippet'))

        assert result == {'title': "제목", 'description': "설명"}

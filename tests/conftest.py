import pytest

from cache import clear_cache
from config.loader import reset_config
from rate_limit import clear_rate_limit_store

CONFIG_ENV_VARS = [
    'BRAVE_SEARCH_API_KEY',
    'CRON_SECRET',
    'GEMINI_API_KEY',
    'GEMINI_MODEL',
    'APP_ENV',
    'LOG_LEVEL',
    'DUPLICATE_THRESHOLD',
    'TITLE_WEIGHT',
    'CONTENT_WEIGHT',
    'RATE_LIMIT_MAX_REQUESTS',
    'RATE_LIMIT_WINDOW_SECONDS',
]


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """Fresh environment, config, rate-limit windows and cache for every test."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('APP_ENV', 'test')
    reset_config()
    clear_rate_limit_store()
    clear_cache()
    yield
    reset_config()
    clear_rate_limit_store()
    clear_cache()

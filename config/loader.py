"""Configuration loader for the news similarity service"""
import os

APP_ENVS = ('development', 'production', 'test')

DEFAULTS = {
    'APP_ENV': 'development',
    'LOG_LEVEL': 'INFO',
    'GEMINI_MODEL': 'gemini-2.5-flash',
    'DUPLICATE_THRESHOLD': 0.8,
    'TITLE_WEIGHT': 0.4,
    'CONTENT_WEIGHT': 0.6,
    'RATE_LIMIT_MAX_REQUESTS': 10,
    'RATE_LIMIT_WINDOW_SECONDS': 60,
}


def _env_number(name, cast):
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return DEFAULTS[name]
    try:
        return cast(raw.strip())
    except ValueError:
        raise ValueError(f"Invalid value for {name}: {raw!r}")


def load_config():
    """Load configuration from environment variables"""
    config = {
        'BRAVE_SEARCH_API_KEY': (os.environ.get('BRAVE_SEARCH_API_KEY') or '').strip() or None,
        'CRON_SECRET': (os.environ.get('CRON_SECRET') or '').strip() or None,
        'GEMINI_API_KEY': (os.environ.get('GEMINI_API_KEY') or '').strip() or None,
        'GEMINI_MODEL': (os.environ.get('GEMINI_MODEL') or DEFAULTS['GEMINI_MODEL']).strip(),
        'APP_ENV': (os.environ.get('APP_ENV') or DEFAULTS['APP_ENV']).strip().lower(),
        'LOG_LEVEL': (os.environ.get('LOG_LEVEL') or DEFAULTS['LOG_LEVEL']).strip().upper(),
        'DUPLICATE_THRESHOLD': _env_number('DUPLICATE_THRESHOLD', float),
        'TITLE_WEIGHT': _env_number('TITLE_WEIGHT', float),
        'CONTENT_WEIGHT': _env_number('CONTENT_WEIGHT', float),
        'RATE_LIMIT_MAX_REQUESTS': _env_number('RATE_LIMIT_MAX_REQUESTS', int),
        'RATE_LIMIT_WINDOW_SECONDS': _env_number('RATE_LIMIT_WINDOW_SECONDS', int),
    }

    if config['APP_ENV'] not in APP_ENVS:
        raise ValueError(f"APP_ENV must be one of {', '.join(APP_ENVS)}, got {config['APP_ENV']!r}")

    negative = [k for k in ('TITLE_WEIGHT', 'CONTENT_WEIGHT') if config[k] < 0]
    if negative:
        raise ValueError(f"Weights must be non-negative: {', '.join(negative)}")

    if config['RATE_LIMIT_MAX_REQUESTS'] < 1 or config['RATE_LIMIT_WINDOW_SECONDS'] < 1:
        raise ValueError("Rate limit settings must be positive")

    return config


# Global config instance (loaded on first use)
_CONFIG = None


def get_config():
    """Get the global config instance (lazy loading)"""
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_config()
    return _CONFIG


def reset_config():
    """Drop the cached config so the next get_config() re-reads the environment"""
    global _CONFIG
    _CONFIG = None

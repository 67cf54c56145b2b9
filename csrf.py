"""CSRF double-submit token helpers"""
import hmac
import secrets

CSRF_TOKEN_COOKIE_NAME = 'csrf-token'
CSRF_TOKEN_HEADER = 'X-CSRF-Token'
CSRF_TOKEN_MAX_AGE = 60 * 60 * 24  # 24 hours

PROTECTED_METHODS = ('POST', 'PUT', 'PATCH', 'DELETE')


def generate_csrf_token():
    """32 random bytes, hex encoded"""
    return secrets.token_hex(32)


def verify_csrf_token(request_token, cookie_token):
    """Compare header and cookie tokens in constant time"""
    if not request_token or not cookie_token:
        return False

    try:
        request_bytes = bytes.fromhex(request_token)
        cookie_bytes = bytes.fromhex(cookie_token)
    except ValueError:
        return False

    if len(request_bytes) != len(cookie_bytes):
        return False

    return hmac.compare_digest(request_bytes, cookie_bytes)


def requires_csrf_protection(method):
    return (method or '').upper() in PROTECTED_METHODS

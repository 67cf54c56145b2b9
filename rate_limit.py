"""Rate limiting: fixed-window request counter kept in memory.

State lives in this process only and is lost on restart. Expired windows
are swept now and then when a new window is opened.
"""
import random
import threading
import time

CLEANUP_PROBABILITY = 0.1

# identifier -> {'count': int, 'reset_time': float (epoch seconds)}
_store = {}
_lock = threading.Lock()


def check_rate_limit(identifier, max_requests=10, window_seconds=60, now=None):
    """Count a request for `identifier` and report whether it is allowed"""
    if now is None:
        now = time.time()

    with _lock:
        record = _store.get(identifier)

        if record is None or now > record['reset_time']:
            reset_time = now + window_seconds
            _store[identifier] = {'count': 1, 'reset_time': reset_time}
            if random.random() < CLEANUP_PROBABILITY:
                _cleanup_expired_locked(now)
            return {
                'allowed': True,
                'remaining': max_requests - 1,
                'reset_time': reset_time,
            }

        record['count'] += 1
        if record['count'] > max_requests:
            return {
                'allowed': False,
                'remaining': 0,
                'reset_time': record['reset_time'],
            }

        return {
            'allowed': True,
            'remaining': max_requests - record['count'],
            'reset_time': record['reset_time'],
        }


def _cleanup_expired_locked(now):
    expired = [key for key, record in _store.items() if now > record['reset_time']]
    for key in expired:
        del _store[key]
    return len(expired)


def cleanup_expired_records(now=None):
    """Drop every expired window. Returns how many were removed."""
    if now is None:
        now = time.time()
    with _lock:
        return _cleanup_expired_locked(now)


def clear_rate_limit_store():
    """Forget all windows (tests, restarts)"""
    with _lock:
        _store.clear()


def get_store_size():
    """Number of clients with a live window (reported by /health)"""
    with _lock:
        return len(_store)

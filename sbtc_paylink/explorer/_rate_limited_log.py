"""
Thread-safe rate-limited logging utilities.

Endpoint exhaustion can repeat on every poll of a payment monitor; these
helpers keep such warnings visible without flooding the log.
"""
import logging
import threading
from typing import Optional

from cachetools import TTLCache

logger = logging.getLogger(__name__)

# Keys are "<level>:<message>"; one entry per message per hour at most
_error_log_cache = TTLCache(maxsize=100, ttl=3600)
_error_log_cache_lock = threading.RLock()


def rate_limited_log(
    message: str,
    level: str = "warning",
    logger_instance: Optional[logging.Logger] = None
) -> bool:
    """
    Log a message unless the same message was logged at the same level recently.

    Args:
        message: Message to log
        level: Log level (debug, info, warning, error, critical)
        logger_instance: Logger to use (defaults to module logger)

    Returns:
        True if the message was emitted, False if it was suppressed
    """
    log_instance = logger_instance or logger
    log_method = getattr(log_instance, level.lower(), log_instance.warning)
    key = f"{level}:{message}"

    with _error_log_cache_lock:
        if key in _error_log_cache:
            return False
        log_method(message)
        _error_log_cache[key] = True
    return True


def reset_rate_limits() -> None:
    """Forget every suppressed message"""
    with _error_log_cache_lock:
        _error_log_cache.clear()

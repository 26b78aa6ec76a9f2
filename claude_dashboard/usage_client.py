"""
Rate-limit usage fetch with a two-tier TTL cache.

The in-process entry only helps repeated calls within one run; the JSON
file in the temp directory is shared by every status line invocation so
the API is hit at most once per TTL window.
"""

import json
import logging
import os
import time
import urllib.request

from pydantic import ValidationError

from .constants import (
    DEFAULT_CACHE_TTL,
    USAGE_API_BETA,
    USAGE_API_URL,
    USAGE_CACHE_FILE,
    USAGE_FETCH_TIMEOUT,
    USER_AGENT,
)
from .credentials import get_credentials
from .models import CacheEntry
from .schemas import UsageCacheFile, UsageLimits

logger = logging.getLogger(__name__)

_usage_cache = CacheEntry(data=None)


def is_cache_valid(entry: CacheEntry, ttl_seconds: float, now: float | None = None) -> bool:
    """True while the entry holds data younger than ``ttl_seconds``."""
    if entry.data is None:
        return False
    return entry.is_valid(ttl_seconds, time.time() if now is None else now)


def load_file_cache(ttl_seconds: float) -> UsageLimits | None:
    """Return the shared cache file's data if it is still fresh."""
    if not os.path.exists(USAGE_CACHE_FILE):
        return None
    try:
        with open(USAGE_CACHE_FILE, encoding="utf-8") as f:
            cached = UsageCacheFile.model_validate(json.load(f))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.debug("Ignoring unreadable usage cache %s: %s", USAGE_CACHE_FILE, e)
        return None
    entry = CacheEntry(data=cached.data, timestamp=cached.timestamp / 1000)
    if is_cache_valid(entry, ttl_seconds):
        return cached.data
    return None


def save_file_cache(limits: UsageLimits) -> None:
    payload = {"data": limits.model_dump(), "timestamp": int(time.time() * 1000)}
    try:
        with open(USAGE_CACHE_FILE, "w", encoding="utf-8") as f:
            json.dump(payload, f)
    except OSError as e:
        logger.debug("Could not write usage cache %s: %s", USAGE_CACHE_FILE, e)


def clear_cache() -> bool:
    """Forget both cache tiers. Returns True if a cache file was removed."""
    _usage_cache.data = None
    _usage_cache.timestamp = 0.0
    try:
        os.remove(USAGE_CACHE_FILE)
        return True
    except FileNotFoundError:
        return False


def _request_usage(token: str) -> dict:
    req = urllib.request.Request(
        USAGE_API_URL,
        method="GET",
        headers={
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
            "Authorization": f"Bearer {token}",
            "anthropic-beta": USAGE_API_BETA,
        },
    )
    with urllib.request.urlopen(req, timeout=USAGE_FETCH_TIMEOUT) as resp:
        return json.loads(resp.read())


def fetch_usage_limits(ttl_seconds: float = DEFAULT_CACHE_TTL) -> UsageLimits | None:
    """
    Return current rate-limit utilization, or None when unavailable.
    Order: in-memory cache, shared file cache, then one API request.
    """
    if is_cache_valid(_usage_cache, ttl_seconds):
        return _usage_cache.data

    cached = load_file_cache(ttl_seconds)
    if cached is not None:
        _usage_cache.data = cached
        _usage_cache.timestamp = time.time()
        return cached

    token = get_credentials()
    if not token:
        return None

    try:
        data = _request_usage(token)
        limits = UsageLimits(
            five_hour=data.get("five_hour"),
            seven_day=data.get("seven_day"),
            seven_day_sonnet=data.get("seven_day_sonnet"),
        )
    except Exception as e:
        logger.debug("Usage limits fetch failed: %s", e)
        return None

    _usage_cache.data = limits
    _usage_cache.timestamp = time.time()
    save_file_cache(limits)
    return limits

"""Shared cached + retrying HTTP session for the remote data sources."""
from __future__ import annotations

import requests
import requests_cache
from retry_requests import retry

from nightsky import config
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/http")

# One session per process; every client goes through shared_session().
session: requests.Session | None = None


def build_session(settings: config.Settings | None = None) -> requests.Session:
    """Return a requests session backed by an on-disk cache, retried with backoff."""
    settings = settings or config.settings
    cache_path = settings.cache_path
    cache_path.parent.mkdir(parents=True, exist_ok=True)
    cache_session = requests_cache.CachedSession(str(cache_path), expire_after=settings.cache_expire_seconds)
    logger.debug("Using requests_cache at %s", cache_path)
    return retry(cache_session, retries=5, backoff_factor=0.2)


def shared_session() -> requests.Session:
    """The process-wide session, built on first use."""
    global session
    if session is None:
        session = build_session()
    return session

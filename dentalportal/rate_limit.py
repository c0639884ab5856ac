"""
Global slowapi rate limiter.

Imported by routers for per-endpoint limits and mounted onto app.state in
main.py so the slowapi middleware can find it.

Storage comes from RATE_LIMIT_STORAGE_URI: ``memory://`` for a single
process, ``redis://...`` when several workers must share counters.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from dentalportal.config import get_settings

_settings = get_settings()

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=_settings.rate_limit_storage_uri,
    enabled=_settings.rate_limit_enabled,
)

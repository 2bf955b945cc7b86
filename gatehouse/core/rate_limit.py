"""
Rate limiter shared by the application.

Counters live in the configured limits storage; the default in-process
"memory://" store needs no external service.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from gatehouse.core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.rate_limit_storage_uri,
    default_limits=[settings.rate_limit_default],
    enabled=settings.rate_limit_enabled,
)

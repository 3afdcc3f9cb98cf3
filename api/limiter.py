"""
Rate limiter configuration for API endpoints.
Shared module so routes and the app use one limiter instance.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from config.settings import get_settings

limiter = Limiter(
    key_func=get_remote_address,
    enabled=get_settings().rate_limit_enabled
)

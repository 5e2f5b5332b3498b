"""
Per-IP rate limiting (SlowAPI); honours X-Forwarded-For behind a proxy.

The limiter is process-wide, like the route decorators that use it. The auth
limit is read per request from the settings of the most recently built app.
"""
from fastapi import Request

from slowapi import Limiter

from .config import Settings, settings

_active_settings: Settings = settings


def _get_client_ip(request: Request) -> str:
    """Real client IP behind a proxy (Render, Nginx)."""
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "127.0.0.1"


def use_settings(app_settings: Settings) -> None:
    global _active_settings
    _active_settings = app_settings


def auth_rate_limit() -> str:
    return f"{_active_settings.rate_limit_auth_per_minute}/minute"


limiter = Limiter(key_func=_get_client_ip)

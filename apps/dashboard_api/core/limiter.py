# apps/dashboard_api/core/limiter.py

from slowapi import Limiter
from fastapi import Request

from packages.market_lib.config import settings


def get_real_ip(request: Request) -> str:
    # 1. Try Cloudflare Header (Standard for Tunnels)
    if request.headers.get("cf-connecting-ip"):
        return request.headers["cf-connecting-ip"]

    # 2. Try X-Forwarded-For (Standard Proxy)
    if request.headers.get("x-forwarded-for"):
        return request.headers["x-forwarded-for"].split(",")[0].strip()

    # 3. Fallback to direct IP (Localhost dev)
    if request.client and request.client.host:
        return request.client.host
    return "127.0.0.1"


# Singleton: every router decorates against this same instance.
limiter = Limiter(key_func=get_real_ip, enabled=settings.api.rate_limit_enabled)

from __future__ import annotations

import os
from collections.abc import Callable
from typing import TypedDict

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from limits import parse as parse_limit
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter

# Read endpoints are cheap; writes touch the store
_LIMITS_BY_METHOD = {
    "GET": "60/minute",
    "HEAD": "60/minute",
    "POST": "30/minute",
}


class RateLimitInfo(TypedDict, total=False):
    method: str
    ip: str
    limit: str


def _client_ip(request: Request) -> str:
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "local"


# Counted with `limits` directly so the limit can differ per method
_storage = MemoryStorage()
_rate = MovingWindowRateLimiter(_storage)


def _enabled() -> bool:
    if os.getenv("RATE_LIMIT_ENABLED") in {"1", "true", "TRUE"}:
        return True
    return not os.getenv("TESTING")


def _rate_limited_response(info: RateLimitInfo) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={"error": {"code": "rate_limited", "message": "Too Many Requests", "detail": info}},
    )


async def rate_limit_middleware(request: Request, call_next: Callable) -> Response:
    limit_str = _LIMITS_BY_METHOD.get(request.method.upper())
    if not _enabled() or not limit_str:
        return await call_next(request)

    ip = _client_ip(request)
    if not _rate.hit(parse_limit(limit_str), f"ip:{ip}|m:{request.method.upper()}"):
        info: RateLimitInfo = {"method": request.method.upper(), "ip": ip, "limit": limit_str}
        request.state.rate_limit_info = info
        return _rate_limited_response(info)

    response = await call_next(request)
    response.headers.setdefault("X-RateLimit-Limit", limit_str)
    return response

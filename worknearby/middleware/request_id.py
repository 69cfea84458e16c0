from __future__ import annotations

import time
import uuid
from collections.abc import Callable

import sentry_sdk
import structlog
from fastapi import Request, Response

REQUEST_ID_HEADER = "X-Request-ID"


def _client_ip(request: Request) -> str:
    return (request.client.host if request.client else None) or "-"


async def request_id_middleware(request: Request, call_next: Callable) -> Response:
    """Propagate X-Request-ID and write one ``http_request`` access log line.

    The id is bound to structlog contextvars for the duration of the request
    so service-level events include it.
    """
    logger = structlog.get_logger(__name__)
    rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    structlog.contextvars.bind_contextvars(
        request_id=rid, path=request.url.path, method=request.method
    )
    try:
        sentry_sdk.set_tag("request_id", rid)
    except Exception:
        # Sentry must never break request handling
        pass

    start_ns = time.perf_counter_ns()
    fields = {"client_ip": _client_ip(request)}
    try:
        response = await call_next(request)
    except Exception:
        fields["duration_ms"] = round((time.perf_counter_ns() - start_ns) / 1_000_000.0, 3)
        logger.error("http_request", status=500, exc_info=True, **fields)
        structlog.contextvars.clear_contextvars()
        raise

    fields["duration_ms"] = round((time.perf_counter_ns() - start_ns) / 1_000_000.0, 3)
    logger.info("http_request", status=response.status_code, **fields)
    response.headers[REQUEST_ID_HEADER] = rid
    structlog.contextvars.clear_contextvars()
    return response

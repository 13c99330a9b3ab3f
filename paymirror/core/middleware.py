"""
ASGI middlewares shared by the whole app
"""

import logging
import time
import uuid

logger = logging.getLogger(__name__)

CORRELATION_HEADER = b"x-correlation-id"


class CorrelationIdMiddleware:
    """
    Reuse the caller's x-correlation-id (or mint one), expose it as
    request.state.correlation_id, echo it on the response and log one line
    per request.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        correlation_id = None
        for name, value in scope.get("headers", []):
            if name.lower() == CORRELATION_HEADER:
                correlation_id = value.decode("latin-1")
                break
        if not correlation_id:
            correlation_id = uuid.uuid4().hex

        scope.setdefault("state", {})["correlation_id"] = correlation_id
        started = time.perf_counter()
        status_code = 500

        async def send_with_correlation(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                message.setdefault("headers", [])
                message["headers"].append((CORRELATION_HEADER, correlation_id.encode("latin-1")))
            await send(message)

        try:
            await self.app(scope, receive, send_with_correlation)
        finally:
            duration_ms = (time.perf_counter() - started) * 1000
            logger.info(
                "%s %s -> %s (%.1fms) [%s]",
                scope.get("method"), scope.get("path"), status_code, duration_ms, correlation_id
            )


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)

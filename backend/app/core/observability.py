"""
Observability Middleware.

Tags each request with a correlation ID, times it and writes one
structured log line per request.
"""

import time
import uuid
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("ledger.http")

CORRELATION_HEADER = "X-Correlation-ID"
PROCESS_TIME_HEADER = "X-Process-Time"


def configure_logging(level: str) -> None:
    """Configure root logging for the server process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


class ObservabilityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers[CORRELATION_HEADER] = correlation_id
        response.headers[PROCESS_TIME_HEADER] = f"{elapsed_ms:.2f}"

        log_data = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.url.path,
            "query": str(request.url.query),
            "status_code": response.status_code,
            "duration_ms": round(elapsed_ms, 2),
            "ip": request.client.host if request.client else "unknown"
        }
        summary = "%s %s -> %s (%.2f ms)"
        args = (request.method, request.url.path, response.status_code, elapsed_ms)

        if response.status_code >= 500:
            logger.error(summary, *args, extra=log_data)
        elif response.status_code >= 400:
            logger.warning(summary, *args, extra=log_data)
        elif request.method == "OPTIONS":
            # CORS preflight noise
            logger.debug(summary, *args, extra=log_data)
        else:
            logger.info(summary, *args, extra=log_data)

        return response

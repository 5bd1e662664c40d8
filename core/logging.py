"""Logging setup and per-request access logging."""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            logger.error("%s %s failed after %dms", request.method, request.url.path, duration_ms)
            raise

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        user_id = getattr(request.state, "user_id", None)
        logger.info(
            "%s %s -> %s (%dms, user=%s)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            user_id,
        )
        return response

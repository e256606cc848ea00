"""Performance monitoring middleware for tracking request metrics."""

import logging
import threading
import time
from typing import Callable, Dict, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


class PerformanceMetrics:
    """Process-wide request counters."""

    def __init__(self):
        self._lock = threading.Lock()
        self.reset()

    def reset(self) -> None:
        with self._lock:
            self.request_count = 0
            self.total_duration = 0.0
            self.slow_requests = 0
            self.very_slow_requests = 0
            self.errors = 0

    def record_request(
        self, duration: float, is_error: bool = False, slow: bool = False, very_slow: bool = False
    ) -> None:
        """
        Record a request metric.

        Args:
            duration: Request duration in seconds
            is_error: Whether the request ended in a 5xx or an exception
            slow: Whether the request crossed the middleware's slow threshold
            very_slow: Whether it crossed the very slow threshold
        """
        with self._lock:
            self.request_count += 1
            self.total_duration += duration
            if is_error:
                self.errors += 1
            if very_slow:
                self.very_slow_requests += 1
            elif slow:
                self.slow_requests += 1

    def get_summary(self) -> Dict[str, float]:
        with self._lock:
            count = self.request_count
            return {
                "total_requests": count,
                "average_duration_ms": round(self.total_duration / count * 1000, 2) if count else 0.0,
                "slow_requests": self.slow_requests,
                "very_slow_requests": self.very_slow_requests,
                "slow_request_percentage": round(self.slow_requests / count * 100, 2) if count else 0.0,
                "errors": self.errors,
                "error_rate": round(self.errors / count * 100, 2) if count else 0.0,
            }


# Global metrics instance
metrics = PerformanceMetrics()


class PerformanceMiddleware(BaseHTTPMiddleware):
    """Times each request, logs slow ones and feeds the global metrics."""

    def __init__(
        self,
        app: ASGIApp,
        slow_request_threshold: float = 2.0,
        very_slow_request_threshold: float = 5.0,
        metrics_store: Optional[PerformanceMetrics] = None,
    ):
        super().__init__(app)
        self.slow_threshold = slow_request_threshold
        self.very_slow_threshold = very_slow_request_threshold
        self.metrics = metrics_store if metrics_store is not None else metrics

    def _record(self, duration: float, is_error: bool) -> None:
        self.metrics.record_request(
            duration,
            is_error=is_error,
            slow=duration >= self.slow_threshold,
            very_slow=duration >= self.very_slow_threshold,
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        method = request.method
        path = request.url.path

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            self._record(duration, is_error=True)
            logger.error(
                f"Request failed: {method} {path}",
                extra={"method": method, "path": path, "duration_ms": round(duration * 1000, 2), "error": str(e)},
                exc_info=True,
            )
            raise

        duration = time.time() - start_time
        duration_ms = round(duration * 1000, 2)
        self._record(duration, is_error=response.status_code >= 500)
        response.headers["X-Response-Time"] = f"{duration_ms}ms"

        log_data = {
            "method": method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        }
        # Gemini calls routinely take a few seconds; only the outliers are worth a warning
        if duration >= self.very_slow_threshold:
            logger.error(f"VERY SLOW REQUEST: {method} {path} took {duration_ms}ms", extra=log_data)
        elif duration >= self.slow_threshold:
            logger.warning(f"Slow request: {method} {path} took {duration_ms}ms", extra=log_data)

        return response

"""Request/response logging middleware."""

import json
import logging
import time
from typing import Any, Callable, Dict

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from recipeai.core.request_id import generate_request_id, set_request_id

logger = logging.getLogger(__name__)

# Base64 images and long ingredient lists would flood the logs
MAX_LOGGED_VALUE = 200
_MASKED_KEYS = ("api_key", "key", "password", "token", "secret", "auth")
_OMITTED_KEYS = ("image",)


def summarize_params(data: Any) -> Any:
    """Recursively mask secrets and truncate large values for logging."""
    if isinstance(data, dict):
        summary: Dict[str, Any] = {}
        for key, value in data.items():
            key_lower = str(key).lower()
            if key_lower in _OMITTED_KEYS:
                summary[key] = f"<{len(value) if isinstance(value, str) else '?'} chars>"
            elif any(sensitive in key_lower for sensitive in _MASKED_KEYS):
                summary[key] = "***"
            else:
                summary[key] = summarize_params(value)
        return summary
    if isinstance(data, list):
        return [summarize_params(item) for item in data[:20]]
    if isinstance(data, str) and len(data) > MAX_LOGGED_VALUE:
        return data[:MAX_LOGGED_VALUE] + "..."
    return data


async def get_request_params(request: Request) -> Dict[str, Any]:
    """Extract loggable query and JSON body parameters."""
    params: Dict[str, Any] = {}

    if request.query_params:
        params["query"] = dict(request.query_params)

    content_type = request.headers.get("content-type", "").lower()
    if "application/json" in content_type:
        # Starlette caches the body, so the route can still read it
        body_bytes = await request.body()
        if body_bytes:
            try:
                params["body"] = json.loads(body_bytes)
            except json.JSONDecodeError:
                params["body"] = body_bytes.decode("utf-8", errors="ignore")[:500]
    elif "multipart/form-data" in content_type:
        params["form"] = {"type": "multipart/form-data"}

    return params


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests and responses with timing."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = generate_request_id()
        set_request_id(request_id)
        request.state.request_id = request_id

        start_time = time.time()
        method = request.method
        path = request.url.path

        params = summarize_params(await get_request_params(request))

        logger.info(
            f"API Request: {method} {path}",
            extra={
                "method": method,
                "path": path,
                "params": params,
                "client_ip": request.client.host if request.client else None,
                "user_agent": request.headers.get("user-agent", "Unknown"),
            },
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"API Error: {method} {path} - {str(e)}",
                extra={
                    "method": method,
                    "path": path,
                    "process_time_ms": round((time.time() - start_time) * 1000, 2),
                },
                exc_info=True,
            )
            raise

        logger.info(
            f"API Response: {method} {path} - {response.status_code}",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "process_time_ms": round((time.time() - start_time) * 1000, 2),
            },
        )

        response.headers["X-Request-ID"] = request_id
        return response

import os
import threading
import time
from collections import defaultdict
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

_counters = defaultdict(list)
_lock = threading.Lock()


class RateLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        if os.getenv("RATE_LIMIT_ENABLED", "false").lower() != "true":
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        key = getattr(request.state, "api_key", None) or client
        limit = int(os.getenv("RATE_LIMIT_PER_MINUTE", "60"))
        now = time.time()

        with _lock:
            window = [t for t in _counters[key] if t > now - 60]
            window.append(now)
            _counters[key] = window

        if len(window) > limit:
            return JSONResponse({"detail": "Rate limit exceeded"}, status_code=429)

        return await call_next(request)


def reset_counters() -> None:
    with _lock:
        _counters.clear()

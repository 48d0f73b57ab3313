"""
Request tracing middleware for the portal API.
"""
import logging
import time
import uuid
from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

# Set up logging
logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tag every request with an id and log its outcome and duration.

    A caller-supplied ``X-Request-ID`` is reused so traces can span services.
    Headers are never logged, which keeps bearer tokens out of the logs.
    """
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        route = f"{request.method} {request.url.path}"
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"[{request_id}] {route} raised {type(e).__name__} after {time.perf_counter() - started:.4f}s")
            raise

        elapsed = time.perf_counter() - started
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[PROCESS_TIME_HEADER] = f"{elapsed:.4f}"

        # Denied and failed requests stand out at WARNING
        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(level, f"[{request_id}] {route} -> {response.status_code} in {elapsed:.4f}s")
        return response


def setup_middlewares(app: FastAPI) -> None:
    app.add_middleware(RequestLoggingMiddleware)

import time
import uuid
from typing import Callable, List, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from iar_uploader.core.constants import LOG_EXCLUDE_PATHS
from iar_uploader.core.logging import get_logger, request_id_ctx

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Request/response logging with a per-request id and timing headers
    """

    def __init__(self, app, exclude_paths: Optional[List[str]] = None):
        super().__init__(app)
        self.exclude_paths = exclude_paths or LOG_EXCLUDE_PATHS

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if self._should_skip_logging(request.url.path):
            return await call_next(request)

        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_ctx.set(request_id)
        start_time = time.perf_counter()

        logger.info(
            "REQUEST %s %s client=%s content_length=%s",
            request.method,
            request.url.path,
            request.client.host if request.client else "-",
            request.headers.get("Content-Length"),
        )

        try:
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "ERROR %s %s after %.4fs: %s",
                    request.method,
                    request.url.path,
                    time.perf_counter() - start_time,
                    e,
                )
                raise

            process_time = time.perf_counter() - start_time
            logger.info(
                "RESPONSE %s %s status=%d time=%.4fs",
                request.method,
                request.url.path,
                response.status_code,
                process_time,
            )
        finally:
            request_id_ctx.reset(token)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(round(process_time, 4))
        return response

    def _should_skip_logging(self, path: str) -> bool:
        """Check if path should skip detailed logging"""
        return any(path.startswith(excluded) for excluded in self.exclude_paths)


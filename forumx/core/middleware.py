"""Per-request context: request id propagation, trace id and access logging."""

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from forumx.core.context import clear_context, set_request_id, set_trace_id


logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds a request id (and trace id, if any) for the lifetime of a request.

    The request id is taken from ``X-Request-ID`` when the client sends one and
    is echoed back on the response. It is also stored on ``request.state`` so
    exception handlers and the moderation router can read it.
    """

    def __init__(
        self,
        app: ASGIApp,
        log_requests: bool = True,
        exclude_paths: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.log_requests = log_requests
        self.exclude_paths = tuple(exclude_paths or ["/health"])

    def _is_logged(self, path: str) -> bool:
        return self.log_requests and not path.startswith(self.exclude_paths)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        started = time.perf_counter()
        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        trace_id = _trace_id(request)
        if trace_id:
            set_trace_id(trace_id)

        path = request.url.path
        logged = self._is_logged(path)
        if logged:
            logger.info(
                "request_started",
                method=request.method,
                path=path,
                client_ip=_client_ip(request),
            )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                "request_failed",
                method=request.method,
                path=path,
                error=str(exc),
                error_type=type(exc).__name__,
                duration_ms=_elapsed_ms(started),
            )
            raise
        else:
            if logged:
                emit = logger.warning if response.status_code >= 400 else logger.info
                emit(
                    "request_completed",
                    method=request.method,
                    path=path,
                    status_code=response.status_code,
                    duration_ms=_elapsed_ms(started),
                )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_context()


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def _trace_id(request: Request) -> str | None:
    """Trace id from ``X-Trace-ID`` or, failing that, a W3C ``traceparent``.

    traceparent is ``{version}-{trace-id}-{parent-id}-{flags}``.
    """
    explicit = request.headers.get("x-trace-id")
    if explicit:
        return explicit
    parts = (request.headers.get("traceparent") or "").split("-")
    return parts[1] if len(parts) >= 2 and parts[1] else None


def _client_ip(request: Request) -> str | None:
    for header in ("x-forwarded-for", "x-real-ip"):
        value = request.headers.get(header)
        if value:
            return value.split(",")[0].strip()
    return request.client.host if request.client else None

# Core infrastructure
from forumx.core.context import (
    clear_context,
    get_context,
    get_request_id,
    get_trace_id,
    get_user_email,
    set_request_id,
    set_trace_id,
    set_user_email,
)
from forumx.core.database import init_async_cassandra, shutdown_async_cassandra
from forumx.core.errors import ForumError
from forumx.core.logging import configure_structlog, get_logger
from forumx.core.middleware import RequestContextMiddleware


__all__ = [
    "ForumError",
    "RequestContextMiddleware",
    "clear_context",
    "configure_structlog",
    "get_context",
    "get_logger",
    "get_request_id",
    "get_trace_id",
    "get_user_email",
    "init_async_cassandra",
    "set_request_id",
    "set_trace_id",
    "set_user_email",
    "shutdown_async_cassandra",
]

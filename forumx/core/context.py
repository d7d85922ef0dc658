"""Request context management using contextvars.

Each request gets a unique ID and, once the caller's identity token is
verified, the caller's email. Both are readable anywhere in the call stack
(the logging processors pick them up) without passing them explicitly.
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4


request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_email_var: ContextVar[str | None] = ContextVar("user_email", default=None)
trace_id_var: ContextVar[str | None] = ContextVar("trace_id", default=None)


def generate_request_id() -> str:
    """Generate a new unique request ID."""
    return str(uuid4())


def get_request_id() -> str:
    """Get the current request ID."""
    return request_id_var.get()


def set_request_id(request_id: str | None = None) -> str:
    """Set the request ID for the current context.

    Args:
        request_id: Optional request ID. If not provided, generates a new one.

    Returns:
        The request ID that was set.
    """
    rid = request_id or generate_request_id()
    request_id_var.set(rid)
    return rid


def get_user_email() -> str | None:
    """Get the verified caller email for the current request."""
    return user_email_var.get()


def set_user_email(email: str | None) -> None:
    """Set the verified caller email for the current request."""
    user_email_var.set(email)


def get_trace_id() -> str | None:
    """Get the current trace ID."""
    return trace_id_var.get()


def set_trace_id(trace_id: str | None) -> None:
    """Set the trace ID from distributed tracing headers."""
    trace_id_var.set(trace_id)


def get_context() -> dict[str, Any]:
    """Get the non-empty context variables as a dictionary."""
    context: dict[str, Any] = {}

    request_id = get_request_id()
    if request_id:
        context["request_id"] = request_id

    user_email = get_user_email()
    if user_email:
        context["user_email"] = user_email

    trace_id = get_trace_id()
    if trace_id:
        context["trace_id"] = trace_id

    return context


def clear_context() -> None:
    """Clear all context variables.

    Called at the end of each request so values never leak into the next one.
    """
    request_id_var.set("")
    user_email_var.set(None)
    trace_id_var.set(None)

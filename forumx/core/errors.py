"""Domain errors shared by every Forum-X module.

Services raise these; a single exception handler in ``forumx.main`` turns
them into JSON error responses using ``ERROR_STATUS_MAP``.
"""

from fastapi import status


class ForumError(Exception):
    """Base Forum-X error."""

    def __init__(self, message: str, code: str = "forum_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class InvalidArgumentError(ForumError):
    """Request is malformed or violates a business rule."""

    def __init__(self, message: str = "Invalid argument"):
        super().__init__(message, "invalid_argument")


class UnauthorizedError(ForumError):
    """Identity token missing or rejected."""

    def __init__(self, message: str = "Unauthorized Access"):
        super().__init__(message, "unauthorized")


class ForbiddenError(ForumError):
    """Caller is authenticated but not allowed to do this."""

    def __init__(self, message: str = "Forbidden Access"):
        super().__init__(message, "forbidden")


class NotFoundError(ForumError):
    """Referenced document does not exist."""

    def __init__(self, message: str = "Not found"):
        super().__init__(message, "not_found")


class RateLimitedError(ForumError):
    """Caller exceeded a rate limit."""

    def __init__(self, message: str = "Too many requests"):
        super().__init__(message, "rate_limited")


class StoreError(ForumError):
    """The content store failed or a conditional write could not be applied."""

    def __init__(self, message: str = "Store operation failed"):
        super().__init__(message, "store_error")


class PaymentProviderError(ForumError):
    """The payment provider rejected the request or could not be reached."""

    def __init__(self, message: str = "Payment provider error"):
        super().__init__(message, "payment_provider_error")


ERROR_STATUS_MAP: dict[str, int] = {
    "invalid_argument": status.HTTP_400_BAD_REQUEST,
    "unauthorized": status.HTTP_401_UNAUTHORIZED,
    "forbidden": status.HTTP_403_FORBIDDEN,
    "not_found": status.HTTP_404_NOT_FOUND,
    "rate_limited": status.HTTP_429_TOO_MANY_REQUESTS,
    "store_error": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "payment_provider_error": status.HTTP_502_BAD_GATEWAY,
}


def status_for(error: ForumError) -> int:
    """HTTP status code for a domain error."""
    return ERROR_STATUS_MAP.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

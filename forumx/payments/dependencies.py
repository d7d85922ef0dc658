"""FastAPI dependencies for payments."""

from typing import Annotated

from fastapi import Depends, Request

from forumx.core.dependencies import service_from_state

from .service import PaymentService


def get_payment_service(request: Request) -> PaymentService:
    """Get PaymentService from app state."""
    return service_from_state(request, "payment_service")


PaymentServiceDep = Annotated[PaymentService, Depends(get_payment_service)]

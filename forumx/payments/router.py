"""Membership payment routes."""

from fastapi import APIRouter, Response, status

from forumx.auth.dependencies import CurrentUser

from .dependencies import PaymentServiceDep
from .schemas import (
    MembershipIntentRequest,
    MembershipIntentResponse,
    MembershipPaymentRequest,
    MembershipPaymentResponse,
)


router = APIRouter(tags=["payments"])


@router.post(
    "/create-membership-intent",
    response_model=MembershipIntentResponse,
    summary="Create a payment intent for a membership",
)
async def create_membership_intent(
    body: MembershipIntentRequest,
    identity: CurrentUser,
    service: PaymentServiceDep,
) -> MembershipIntentResponse:
    client_secret = await service.create_membership_intent(
        amount_in_cents=body.amount_in_cents,
        membership_type=body.membership_type,
        user_id=body.user_id or identity.uid,
    )
    return MembershipIntentResponse(client_secret=client_secret)


@router.post(
    "/membership-payments",
    response_model=MembershipPaymentResponse,
    summary="Record a completed membership payment",
)
async def record_membership_payment(
    body: MembershipPaymentRequest,
    response: Response,
    _identity: CurrentUser,
    service: PaymentServiceDep,
) -> MembershipPaymentResponse:
    """Store the payment and upgrade the user to a gold member.

    Answers 404 (with the payment still recorded) when no user has ``userId``.
    """
    payment, upgraded = await service.record_payment(
        user_id=body.user_id,
        amount=body.amount,
        email=body.email,
        currency=body.currency,
        membership_type=body.membership_type,
        transaction_id=body.transaction_id,
    )
    if not upgraded:
        response.status_code = status.HTTP_404_NOT_FOUND
        return MembershipPaymentResponse(
            success=False,
            message="User not found, but payment recorded",
            inserted_id=payment.payment_id,
        )
    return MembershipPaymentResponse(
        success=True,
        message="Payment recorded and user membership updated successfully",
        inserted_id=payment.payment_id,
    )

"""Pydantic schemas for membership payments."""

from uuid import UUID

from pydantic import Field

from forumx.core.schemas import CamelModel


class MembershipIntentRequest(CamelModel):
    amount_in_cents: int = Field(gt=0, description="Amount in the smallest currency unit")
    membership_type: str | None = Field(None, max_length=100)
    user_id: str | None = Field(None, description="Identity provider uid")


class MembershipIntentResponse(CamelModel):
    client_secret: str


class MembershipPaymentRequest(CamelModel):
    """A payment confirmed on the client; ``userId`` is the identity uid."""

    user_id: str
    amount: int = Field(0, ge=0)
    email: str | None = None
    currency: str | None = Field(None, max_length=10)
    membership_type: str | None = Field(None, max_length=100)
    transaction_id: str | None = Field(None, max_length=200)


class MembershipPaymentResponse(CamelModel):
    success: bool
    message: str
    inserted_id: UUID | None = None

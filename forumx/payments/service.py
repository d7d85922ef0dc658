"""Membership payment service.

Creates payment intents with the Stripe SDK and records completed payments,
upgrading the paying user to a gold member.
"""

from typing import TYPE_CHECKING

import stripe
import structlog

from forumx.core.errors import InvalidArgumentError, PaymentProviderError
from forumx.users.models import Badge

from .models import Payment, create_payment


if TYPE_CHECKING:
    from forumx.config import Settings
    from forumx.store import ContentStore


logger = structlog.get_logger(__name__)


def build_stripe_client(
    settings: "Settings", http_client: stripe.HTTPClient | None = None
) -> stripe.StripeClient | None:
    """Create the Stripe client, or None when no secret key is configured."""
    if not settings.stripe_secret_key:
        return None
    return stripe.StripeClient(
        settings.stripe_secret_key,
        base_addresses={"api": settings.stripe_api_base},
        http_client=http_client
        or stripe.HTTPXClient(timeout=settings.stripe_timeout_seconds),
    )


class PaymentService:
    """Service for membership payments."""

    def __init__(
        self,
        store: "ContentStore",
        settings: "Settings",
        stripe_client: stripe.StripeClient | None = None,
    ):
        self.store = store
        self.stripe = stripe_client
        self._currency = settings.stripe_currency

    @property
    def is_configured(self) -> bool:
        return self.stripe is not None

    async def create_membership_intent(
        self,
        amount_in_cents: int,
        membership_type: str | None,
        user_id: str | None,
    ) -> str:
        """Create a payment intent and return its client secret.

        Raises:
            InvalidArgumentError: Non-positive amount.
            PaymentProviderError: Provider not configured, unreachable or
                rejected the request.
        """
        if amount_in_cents <= 0:
            raise InvalidArgumentError("amountInCents must be positive")
        if self.stripe is None:
            raise PaymentProviderError("Payment provider is not configured")

        metadata: dict[str, str] = {}
        if membership_type:
            metadata["membershipType"] = membership_type
        if user_id:
            metadata["userId"] = user_id

        try:
            intent = await self.stripe.payment_intents.create_async(
                params={
                    "amount": amount_in_cents,
                    "currency": self._currency,
                    "metadata": metadata,
                }
            )
        except stripe.APIConnectionError as e:
            logger.error("payment_provider_unreachable", error=str(e))
            raise PaymentProviderError("Payment provider unreachable") from e
        except stripe.StripeError as e:
            message = e.user_message or str(e)
            logger.error(
                "payment_intent_failed",
                status_code=e.http_status,
                provider_message=message,
            )
            raise PaymentProviderError(message) from e

        if not intent.client_secret:
            raise PaymentProviderError("Payment provider returned no client secret")

        logger.info(
            "payment_intent_created",
            intent_id=intent.id,
            amount=amount_in_cents,
            membership_type=membership_type,
            user_id=user_id,
        )
        return intent.client_secret

    async def record_payment(
        self,
        user_id: str,
        amount: int,
        email: str | None = None,
        currency: str | None = None,
        membership_type: str | None = None,
        transaction_id: str | None = None,
    ) -> tuple[Payment, bool]:
        """Store a payment and upgrade the user with this uid.

        Returns:
            Tuple of (payment, user_upgraded). The payment is recorded even
            when no user has this uid.
        """
        if not user_id:
            raise InvalidArgumentError("userId is required")

        payment = create_payment(
            user_id=user_id,
            amount=amount,
            currency=currency or self._currency,
            email=email,
            membership_type=membership_type,
            transaction_id=transaction_id,
        )
        await self.store.insert_payment(payment)

        user = await self.store.get_user_by_uid(user_id)
        if user is None:
            logger.warning(
                "payment_user_not_found",
                payment_id=str(payment.payment_id),
                user_id=user_id,
            )
            return payment, False

        await self.store.set_membership(user.email, membership=True, badge=Badge.GOLD)
        logger.info(
            "membership_upgraded",
            payment_id=str(payment.payment_id),
            email=user.email,
        )
        return payment, True

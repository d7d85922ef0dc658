"""Membership payments through a Stripe-compatible REST API."""

from .models import PAYMENTS_TABLES_CQL, Payment
from .service import PaymentService


__all__ = ["PAYMENTS_TABLES_CQL", "Payment", "PaymentService"]

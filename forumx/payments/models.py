"""Database models for membership payments.

Payments are append-only records of a completed payment intent. ``user_id``
holds the identity provider uid, which is how the payment flow finds the user
to upgrade.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4


PAYMENTS_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.payments (
    payment_id UUID PRIMARY KEY,
    user_id TEXT,
    email TEXT,
    amount INT,
    currency TEXT,
    membership_type TEXT,
    transaction_id TEXT,
    created_at TIMESTAMP
)
"""

PAYMENTS_USER_INDEX_CQL = """
CREATE INDEX IF NOT EXISTS payments_user_idx
ON {keyspace}.payments (user_id)
"""

PAYMENTS_TABLES_CQL = [
    PAYMENTS_TABLE_CQL,
    PAYMENTS_USER_INDEX_CQL,
]


@dataclass
class Payment:
    """Recorded membership payment."""

    payment_id: UUID
    user_id: str
    email: str | None
    amount: int
    currency: str
    membership_type: str | None
    transaction_id: str | None
    created_at: datetime

    @classmethod
    def from_row(cls, row: Any) -> "Payment":
        """Create Payment from Cassandra row."""
        return cls(
            payment_id=row.payment_id,
            user_id=row.user_id,
            email=row.email,
            amount=row.amount or 0,
            currency=row.currency,
            membership_type=row.membership_type,
            transaction_id=row.transaction_id,
            created_at=row.created_at,
        )


def create_payment(
    user_id: str,
    amount: int,
    currency: str,
    email: str | None = None,
    membership_type: str | None = None,
    transaction_id: str | None = None,
) -> Payment:
    return Payment(
        payment_id=uuid4(),
        user_id=user_id,
        email=email,
        amount=amount,
        currency=currency,
        membership_type=membership_type,
        transaction_id=transaction_id,
        created_at=datetime.now(UTC),
    )

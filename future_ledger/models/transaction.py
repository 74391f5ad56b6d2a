"""Transaction model."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from future_ledger.models.enums import TransactionStatus, TransactionType, VirtualType


@dataclass
class Transaction:
    """A monetary event, either recorded by the user or synthesized by a projection."""

    transaction_id: str
    description: str
    amount: Decimal
    date: date
    transaction_type: TransactionType
    status: TransactionStatus
    category: str = ""
    payment_month: str | None = None  # YYYY-MM competence override

    is_recurring: bool = False
    is_installment: bool = False
    current_installment: int | None = None
    total_installments: int | None = None
    installment_of: str | None = None  # owning goal/debt id
    card_id: str | None = None

    # Synthesized entries only; never persisted
    is_virtual: bool = False
    virtual_type: VirtualType | None = None
    virtual_id: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == TransactionStatus.PENDING

    @property
    def signed_amount(self) -> Decimal:
        """Amount with income positive and expense negative."""
        if self.transaction_type == TransactionType.INCOME:
            return self.amount
        return -self.amount

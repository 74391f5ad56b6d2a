"""Emergency fund model."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from future_ledger.models.enums import FundMovementType


@dataclass
class FundMovement:
    """Deposit into or withdrawal from the emergency fund."""

    date: date
    movement_type: FundMovementType
    amount: Decimal
    reference_month: str | None = None
    balance_after: Decimal | None = None
    reason: str | None = None


@dataclass
class EmergencyFund:
    """Singleton emergency fund."""

    current_balance: Decimal = Decimal("0")
    target_amount: Decimal = Decimal("0")
    monthly_contribution: Decimal = Decimal("0")
    show_in_pending: bool = False
    skipped_months: set[str] = field(default_factory=set)
    history: list[FundMovement] = field(default_factory=list)

    @property
    def is_funded(self) -> bool:
        return self.current_balance >= self.target_amount

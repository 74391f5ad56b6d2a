"""Savings and debt goal models."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from future_ledger.models.enums import GoalType


@dataclass
class GoalContribution:
    """A contribution recorded against a goal."""

    date: date
    amount: Decimal
    reference_month: str | None = None  # YYYY-MM the contribution pays for
    balance_after: Decimal | None = None


@dataclass
class Goal:
    """Savings target or debt being paid down in monthly installments."""

    goal_id: str
    name: str
    goal_type: GoalType
    monthly_installment: Decimal = Decimal("0")  # 0 disables virtual installments
    start_date: date | None = None
    total_installments: int | None = None  # None means open-ended
    target_amount: Decimal = Decimal("0")
    current_amount: Decimal = Decimal("0")
    completed: bool = False
    show_in_pending: bool = False
    skipped_months: set[str] = field(default_factory=set)
    history: list[GoalContribution] = field(default_factory=list)

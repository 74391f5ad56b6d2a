"""Domain models for the future ledger."""

from future_ledger.models.credit_card import CreditCard
from future_ledger.models.emergency_fund import EmergencyFund, FundMovement
from future_ledger.models.enums import (
    FundMovementType,
    GoalType,
    TransactionStatus,
    TransactionType,
    VirtualType,
)
from future_ledger.models.goal import Goal, GoalContribution
from future_ledger.models.transaction import Transaction

__all__ = [
    "CreditCard",
    "EmergencyFund",
    "FundMovement",
    "FundMovementType",
    "Goal",
    "GoalContribution",
    "GoalType",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
    "VirtualType",
]

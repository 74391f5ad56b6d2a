"""Enumeration types for ledger entities."""

from enum import Enum


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class TransactionStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class VirtualType(str, Enum):
    GOAL = "goal"
    FUND = "fund"
    BILL = "bill"


class GoalType(str, Enum):
    SAVING = "Saving"
    DEBT = "Debt"


class FundMovementType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"

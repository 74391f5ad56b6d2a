"""Projectors synthesizing virtual transactions for goals and the emergency fund."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from future_ledger.models import Transaction
from future_ledger.projectors.emergency_fund import project_fund
from future_ledger.projectors.goal import matches_goal, project_goal

if TYPE_CHECKING:
    from future_ledger.store.settings import Settings


def generate_saving_opportunities(settings: Settings, month: date) -> list[Transaction]:
    """Virtual goal installments and fund contribution for the viewed ``month``."""
    virtual: list[Transaction] = []
    for goal in settings.goals:
        transaction = project_goal(goal, month, settings.transactions)
        if transaction is not None:
            virtual.append(transaction)

    fund_transaction = project_fund(settings.emergency_fund, month)
    if fund_transaction is not None:
        virtual.append(fund_transaction)
    return virtual


__all__ = [
    "generate_saving_opportunities",
    "matches_goal",
    "project_fund",
    "project_goal",
]

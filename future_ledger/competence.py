"""Competence month resolution.

A transaction's competence month is the budget period it is charged
against. Explicit ``payment_month`` values always win; otherwise the
day-of-month cutoff applies: anything dated up to the 12th belongs to the
previous month's budget.
"""

from dataclasses import replace
from datetime import date

from future_ledger.models import Transaction
from future_ledger.months import add_months, month_key

CUTOFF_DAY = 12


def competence_month(value: date) -> str:
    """Return the competence month key for a calendar day."""
    if value.day <= CUTOFF_DAY:
        return month_key(add_months(value, -1))
    return month_key(value)


def resolve_competence(transaction: Transaction) -> str:
    """Competence month of a transaction, honoring an explicit payment month."""
    return transaction.payment_month or competence_month(transaction.date)


def with_competence(transaction: Transaction) -> Transaction:
    """Return a copy carrying a derived payment month, or the original if set.

    The stored record is never touched.
    """
    if transaction.payment_month:
        return transaction
    return replace(transaction, payment_month=competence_month(transaction.date))

"""Virtual monthly contribution to the emergency fund."""

from datetime import date
from decimal import Decimal

from future_ledger.competence import competence_month
from future_ledger.models import (
    EmergencyFund,
    FundMovementType,
    Transaction,
    TransactionStatus,
    TransactionType,
    VirtualType,
)
from future_ledger.months import month_key, start_of_month

FUND_TRANSACTION_ID = "vfund_emergency"
FUND_VIRTUAL_ID = "emergency_fund"
FUND_DESCRIPTION = "Contribuição para Fundo de Emergência"
FUND_CATEGORY = "Investimentos"


def deposited_in_month(fund: EmergencyFund, key: str) -> Decimal:
    """Sum of deposits attributed to competence month ``key``. Withdrawals are ignored."""
    total = Decimal("0")
    for movement in fund.history:
        if movement.movement_type != FundMovementType.DEPOSIT:
            continue
        if (movement.reference_month or competence_month(movement.date)) == key:
            total += movement.amount
    return total


def project_fund(fund: EmergencyFund | None, month: date) -> Transaction | None:
    """Build the fund contribution due in ``month``, if any.

    Unlike goal installments the contribution is a same-month obligation:
    it is dated on the 1st and its payment month is the viewed month.
    """
    if fund is None or not fund.show_in_pending:
        return None
    contribution = fund.monthly_contribution or Decimal("0")
    if contribution <= 0 or fund.is_funded:
        return None

    key = month_key(month)
    if key in fund.skipped_months:
        return None
    if deposited_in_month(fund, key) >= contribution:
        return None

    return Transaction(
        transaction_id=FUND_TRANSACTION_ID,
        description=FUND_DESCRIPTION,
        amount=contribution,
        date=start_of_month(month),
        transaction_type=TransactionType.EXPENSE,
        status=TransactionStatus.PENDING,
        category=FUND_CATEGORY,
        payment_month=key,
        is_virtual=True,
        virtual_type=VirtualType.FUND,
        virtual_id=FUND_VIRTUAL_ID,
    )

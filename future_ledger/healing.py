"""Self-repair of stored recurring transactions.

Two fixes run before every projection:

- recurring dates whose day overflows the month (e.g. ``2026-02-30``) are
  clamped to the last valid day while loading;
- recurring income series (grouped by description and amount) with missing
  months in between are backfilled with clones of the first occurrence.

Healing appends real transactions to the settings. Re-running it over
already healed data is a no-op.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import TYPE_CHECKING

from future_ledger.competence import competence_month
from future_ledger.logging import get_logger
from future_ledger.models import Transaction, TransactionType
from future_ledger.months import add_months, clamp_iso_date, month_key, start_of_month, with_day

if TYPE_CHECKING:
    from future_ledger.store.settings import Settings

logger = get_logger(__name__)


@dataclass
class RepairReport:
    """Outcome of one repair pass."""

    sanitized: int = 0
    healed: list[Transaction] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.sanitized > 0 or bool(self.healed)


def sanitize_recurring_dates(records: list[dict]) -> int:
    """Clamp overflowing dates of raw recurring transaction records in place.

    Returns the number of records fixed.
    """
    fixed = 0
    for record in records:
        raw_date = record.get("date")
        if not record.get("is_recurring") or not isinstance(raw_date, str):
            continue
        clamped, changed = clamp_iso_date(raw_date)
        if changed:
            logger.info(
                "Fixing invalid date %s -> %s for %s", raw_date, clamped, record.get("description")
            )
            record["date"] = clamped
            fixed += 1
    return fixed


def _series_key(transaction: Transaction) -> tuple[str, Decimal]:
    return transaction.description, transaction.amount


def recurring_income_series(transactions: list[Transaction]) -> dict[tuple[str, Decimal], list[Transaction]]:
    """Group real recurring income by (description, amount), sorted by date."""
    groups: dict[tuple[str, Decimal], list[Transaction]] = {}
    for transaction in transactions:
        if (
            transaction.is_recurring
            and not transaction.is_virtual
            and transaction.transaction_type == TransactionType.INCOME
        ):
            groups.setdefault(_series_key(transaction), []).append(transaction)
    for group in groups.values():
        group.sort(key=lambda t: t.date)
    return groups


def find_series_gaps(group: list[Transaction]) -> list[Transaction]:
    """Build the missing monthly occurrences between a series' first and last member."""
    if len(group) < 2:
        return []

    template = group[0]
    present = {month_key(t.date) for t in group}
    cursor = start_of_month(template.date)
    last = start_of_month(group[-1].date)

    missing = []
    while cursor < last:
        key = month_key(cursor)
        if key not in present:
            healed_date = with_day(cursor, template.date.day)
            missing.append(
                replace(
                    template,
                    transaction_id=f"healed_{key}_{uuid.uuid4().hex[:12]}",
                    date=healed_date,
                    payment_month=competence_month(healed_date),
                )
            )
        cursor = add_months(cursor, 1)
    return missing


def heal_recurring_series(transactions: list[Transaction]) -> list[Transaction]:
    """Append missing recurring income occurrences to ``transactions``.

    Returns the transactions that were added.
    """
    healed: list[Transaction] = []
    for (description, _amount), group in recurring_income_series(transactions).items():
        for transaction in find_series_gaps(group):
            logger.info("Healing gap for %s in %s", description, month_key(transaction.date))
            healed.append(transaction)
    transactions.extend(healed)
    return healed


def repair(settings: Settings) -> RepairReport:
    """Run the explicit repair pass over stored settings.

    Date sanitization happens while loading; this reports it together with
    the series healing done here so the caller can persist once.
    """
    report = RepairReport(sanitized=settings.sanitized_dates)
    report.healed = heal_recurring_series(settings.transactions)
    if report.changed:
        logger.info(
            "Repair pass fixed %d dates and healed %d transactions",
            report.sanitized,
            len(report.healed),
        )
    return report

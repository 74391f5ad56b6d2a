"""Aggregation of pending credit card purchases into monthly bills."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from future_ledger.competence import competence_month
from future_ledger.exceptions import DataIntegrityGapError
from future_ledger.logging import get_logger
from future_ledger.models import (
    CreditCard,
    Transaction,
    TransactionStatus,
    TransactionType,
    VirtualType,
)
from future_ledger.months import add_months, month_key, start_of_month, with_day

logger = get_logger(__name__)

BILL_CATEGORY = "Fatura Cartão"
BILL_DESCRIPTION = "Fatura: {name}"


def bill_reference_month(purchase_date: date, card: CreditCard) -> date:
    """Month whose bill a purchase lands on.

    Purchases on or after the closing day roll over to the next month.
    """
    reference = start_of_month(purchase_date)
    if purchase_date.day >= card.closing_day:
        reference = add_months(reference, 1)
    return reference


def bill_due_date(purchase_date: date, card: CreditCard) -> date:
    return with_day(bill_reference_month(purchase_date, card), card.due_day)


def bill_key(card: CreditCard, due_date: date) -> str:
    return f"{card.card_id}-{month_key(due_date)}"


class BillAggregator:
    """Sum pending card purchases into one virtual bill per card and due month."""

    def __init__(self, cards: Iterable[CreditCard], strict: bool = False) -> None:
        """Initialize the aggregator.

        Parameters
        ----------
        cards : Iterable[CreditCard]
            Known cards.
        strict : bool
            Raise ``DataIntegrityGapError`` on purchases of unknown cards
            instead of skipping them.
        """
        self.cards = {card.card_id: card for card in cards}
        self.strict = strict
        self.skipped: list[Transaction] = []

    def aggregate(self, transactions: Iterable[Transaction]) -> list[Transaction]:
        """Build bills from pending card-tagged ``transactions``.

        Non-pending or untagged transactions are ignored.
        """
        bills: dict[str, Transaction] = {}

        for transaction in transactions:
            if not transaction.card_id or not transaction.is_pending:
                continue

            card = self.cards.get(transaction.card_id)
            if card is None:
                self._unknown_card(transaction)
                continue

            due_date = bill_due_date(transaction.date, card)
            key = bill_key(card, due_date)
            bill = bills.get(key)
            if bill is None:
                bill = bills[key] = self._new_bill(key, card, due_date)
            bill.amount += transaction.amount

        logger.debug("Aggregated %d bills", len(bills))
        return list(bills.values())

    def _unknown_card(self, transaction: Transaction) -> None:
        message = (
            f"Transaction {transaction.transaction_id} references unknown card {transaction.card_id}"
        )
        if self.strict:
            raise DataIntegrityGapError(message)
        logger.warning("%s, skipping", message)
        self.skipped.append(transaction)

    @staticmethod
    def _new_bill(key: str, card: CreditCard, due_date: date) -> Transaction:
        return Transaction(
            transaction_id=f"bill-{key}",
            description=BILL_DESCRIPTION.format(name=card.name),
            amount=Decimal("0"),
            date=due_date,
            transaction_type=TransactionType.EXPENSE,
            status=TransactionStatus.PENDING,
            category=BILL_CATEGORY,
            payment_month=competence_month(due_date),
            card_id=card.card_id,
            is_virtual=True,
            virtual_type=VirtualType.BILL,
            virtual_id=key,
        )


def aggregate_bills(
    transactions: Iterable[Transaction],
    cards: Iterable[CreditCard],
    strict: bool = False,
) -> list[Transaction]:
    """Convenience wrapper around ``BillAggregator``."""
    return BillAggregator(cards, strict=strict).aggregate(transactions)

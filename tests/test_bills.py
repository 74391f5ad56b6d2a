"""Tests for credit card bill aggregation."""

import logging
from datetime import date
from decimal import Decimal

import pytest

from future_ledger.bills import (
    BillAggregator,
    aggregate_bills,
    bill_due_date,
    bill_reference_month,
)
from future_ledger.exceptions import DataIntegrityGapError
from future_ledger.models import CreditCard, TransactionStatus, VirtualType


class TestBillDates:
    """Tests for closing and due day arithmetic."""

    def test_before_closing_stays_in_month(self, sample_card: CreditCard) -> None:
        assert bill_reference_month(date(2025, 3, 5), sample_card) == date(2025, 3, 1)

    def test_on_closing_day_rolls_over(self, sample_card: CreditCard) -> None:
        assert bill_reference_month(date(2025, 3, 20), sample_card) == date(2025, 4, 1)

    def test_due_date(self, sample_card: CreditCard) -> None:
        assert bill_due_date(date(2025, 3, 25), sample_card) == date(2025, 4, 10)

    def test_due_day_clamped(self) -> None:
        card = CreditCard(card_id="c31", name="Inter", closing_day=20, due_day=31)
        assert bill_due_date(date(2025, 4, 2), card) == date(2025, 4, 30)

    def test_december_rolls_into_next_year(self, sample_card: CreditCard) -> None:
        assert bill_due_date(date(2025, 12, 28), sample_card) == date(2026, 1, 10)


class TestBillAggregator:
    """Tests for BillAggregator."""

    def test_purchases_split_across_closing_day(self, sample_card: CreditCard, make_transaction) -> None:
        purchases = [
            make_transaction(amount=Decimal("150"), date=date(2025, 3, 5), card_id=sample_card.card_id),
            make_transaction(amount=Decimal("50"), date=date(2025, 3, 25), card_id=sample_card.card_id),
        ]
        bills = {b.transaction_id: b for b in aggregate_bills(purchases, [sample_card])}

        assert set(bills) == {"bill-card-test-001-2025-03", "bill-card-test-001-2025-04"}

        march = bills["bill-card-test-001-2025-03"]
        assert march.amount == Decimal("150")
        assert march.date == date(2025, 3, 10)
        assert march.payment_month == "2025-02"

        april = bills["bill-card-test-001-2025-04"]
        assert april.amount == Decimal("50")
        assert april.date == date(2025, 4, 10)
        assert april.payment_month == "2025-03"

    def test_same_cycle_summed_exactly(self, sample_card: CreditCard, make_transaction) -> None:
        amounts = [Decimal("10.10"), Decimal("20.20"), Decimal("0.05")]
        purchases = [
            make_transaction(amount=a, date=date(2025, 5, d), card_id=sample_card.card_id)
            for a, d in zip(amounts, [1, 10, 19])
        ]
        bills = aggregate_bills(purchases, [sample_card])

        assert len(bills) == 1
        assert bills[0].amount == Decimal("30.35")

    def test_bill_metadata(self, sample_card: CreditCard, make_transaction) -> None:
        purchase = make_transaction(date=date(2025, 5, 25), card_id=sample_card.card_id)
        (bill,) = aggregate_bills([purchase], [sample_card])

        assert bill.description == "Fatura: Nubank"
        assert bill.category == "Fatura Cartão"
        assert bill.is_virtual
        assert bill.virtual_type == VirtualType.BILL
        assert bill.card_id == sample_card.card_id
        assert bill.status == TransactionStatus.PENDING

    def test_cards_billed_separately(self, sample_card: CreditCard, make_transaction) -> None:
        other = CreditCard(card_id="card-test-002", name="Itaú", closing_day=20, due_day=10)
        purchases = [
            make_transaction(date=date(2025, 5, 3), card_id=sample_card.card_id),
            make_transaction(date=date(2025, 5, 3), card_id=other.card_id),
        ]
        bills = aggregate_bills(purchases, [sample_card, other])

        assert sorted(b.description for b in bills) == ["Fatura: Itaú", "Fatura: Nubank"]

    def test_only_pending_card_purchases(self, sample_card: CreditCard, make_transaction) -> None:
        transactions = [
            make_transaction(card_id=sample_card.card_id, status=TransactionStatus.PAID),
            make_transaction(),
        ]
        assert aggregate_bills(transactions, [sample_card]) == []

    def test_unknown_card_skipped(self, sample_card: CreditCard, make_transaction, caplog) -> None:
        orphan = make_transaction(card_id="missing-card")
        aggregator = BillAggregator([sample_card])

        with caplog.at_level(logging.WARNING, logger="future_ledger.bills"):
            bills = aggregator.aggregate([orphan])

        assert bills == []
        assert aggregator.skipped == [orphan]
        assert "missing-card" in caplog.text

    def test_unknown_card_strict(self, sample_card: CreditCard, make_transaction) -> None:
        orphan = make_transaction(card_id="missing-card")

        with pytest.raises(DataIntegrityGapError):
            aggregate_bills([orphan], [sample_card], strict=True)

    def test_purchases_untouched(self, sample_card: CreditCard, make_transaction) -> None:
        purchase = make_transaction(amount=Decimal("42"), card_id=sample_card.card_id)
        aggregate_bills([purchase], [sample_card])

        assert purchase.amount == Decimal("42")
        assert purchase.payment_month is None

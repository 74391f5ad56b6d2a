"""Pytest configuration and fixtures."""

import logging
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Callable, Iterator

import pytest

from future_ledger.events import EventBus
from future_ledger.models import (
    CreditCard,
    EmergencyFund,
    Goal,
    GoalType,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from future_ledger.store import JsonSettingsStore, Settings


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo setup_logging side effects between tests."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("future_ledger").setLevel(logging.NOTSET)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def today() -> date:
    """Fixed reference date for projections."""
    return date(2025, 10, 20)


@pytest.fixture
def sample_card() -> CreditCard:
    """Card closing on the 20th, due on the 10th."""
    return CreditCard(card_id="card-test-001", name="Nubank", closing_day=20, due_day=10)


@pytest.fixture
def debt_goal() -> Goal:
    """Twelve-installment car debt starting mid January 2025."""
    return Goal(
        goal_id="g1",
        name="Carro",
        goal_type=GoalType.DEBT,
        monthly_installment=Decimal("500"),
        start_date=date(2025, 1, 15),
        total_installments=12,
        show_in_pending=True,
    )


@pytest.fixture
def emergency_fund() -> EmergencyFund:
    return EmergencyFund(
        current_balance=Decimal("900"),
        target_amount=Decimal("1000"),
        monthly_contribution=Decimal("100"),
        show_in_pending=True,
    )


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory for real transactions with sensible defaults."""
    counter = iter(range(1, 10_000))

    def _make(**overrides) -> Transaction:
        values = {
            "transaction_id": f"tx-{next(counter):04d}",
            "description": "Mercado",
            "amount": Decimal("100.00"),
            "date": date(2025, 11, 20),
            "transaction_type": TransactionType.EXPENSE,
            "status": TransactionStatus.PENDING,
            "category": "Alimentação",
        }
        values.update(overrides)
        return Transaction(**values)

    return _make


@pytest.fixture
def settings() -> Settings:
    """Empty settings with the salary paid on the 5th."""
    return Settings(salary_payday=5)


@pytest.fixture
def store(tmp_path: Path) -> JsonSettingsStore:
    return JsonSettingsStore(tmp_path / "settings.json")


@pytest.fixture
def bus() -> EventBus:
    """Isolated event bus."""
    return EventBus()

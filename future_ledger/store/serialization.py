"""Conversion between ledger entities and JSON-compatible dicts."""

from dataclasses import fields, is_dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from future_ledger.healing import sanitize_recurring_dates
from future_ledger.logging import get_logger
from future_ledger.models import (
    CreditCard,
    EmergencyFund,
    FundMovement,
    FundMovementType,
    Goal,
    GoalContribution,
    GoalType,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from future_ledger.months import parse_date
from future_ledger.store.settings import Settings

logger = get_logger(__name__)


def to_dict(obj: Any) -> dict:
    """Convert a dataclass into a JSON-compatible dict.

    Plain dicts pass through; anything else is wrapped as ``{"value": str(obj)}``.
    """
    if isinstance(obj, dict):
        return obj
    if not is_dataclass(obj):
        return {"value": str(obj)}
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, date):
        # datetime included
        return value.isoformat()
    elif is_dataclass(value):
        return to_dict(value)
    elif isinstance(value, (set, frozenset)):
        return sorted(serialize_value(v) for v in value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def settings_to_dict(settings: Settings) -> dict:
    """Serialize the aggregate, leaving out anything virtual."""
    virtual = [t for t in settings.transactions if t.is_virtual]
    if virtual:
        logger.warning("Dropping %d virtual transactions from persisted settings", len(virtual))
    return {
        "transactions": [to_dict(t) for t in settings.transactions if not t.is_virtual],
        "goals": [to_dict(g) for g in settings.goals],
        "emergency_fund": to_dict(settings.emergency_fund),
        "credit_cards": [to_dict(c) for c in settings.credit_cards],
        "categories": list(settings.categories),
        "salary_payday": settings.salary_payday,
    }


def settings_from_dict(data: dict) -> Settings:
    """Build the aggregate from stored data.

    Recurring transactions whose day overflows their month are clamped
    first; the number of fixes is kept on ``Settings.sanitized_dates`` so
    the caller knows the store needs rewriting.
    """
    raw_transactions = [dict(t) for t in data.get("transactions") or []]
    sanitized = sanitize_recurring_dates(raw_transactions)

    fund_data = data.get("emergency_fund")
    settings = Settings(
        transactions=[transaction_from_dict(t) for t in raw_transactions],
        goals=[goal_from_dict(g) for g in data.get("goals") or []],
        emergency_fund=fund_from_dict(fund_data) if fund_data else EmergencyFund(),
        credit_cards=[card_from_dict(c) for c in data.get("credit_cards") or []],
        categories=list(data.get("categories") or []),
        salary_payday=int(data.get("salary_payday") or 1),
    )
    settings.sanitized_dates = sanitized
    return settings


def transaction_from_dict(data: dict) -> Transaction:
    return Transaction(
        transaction_id=data["transaction_id"],
        description=data.get("description", ""),
        amount=_decimal(data.get("amount")),
        date=parse_date(data["date"]),
        transaction_type=TransactionType(data.get("transaction_type", "expense")),
        status=TransactionStatus(data.get("status", "pending")),
        category=data.get("category") or "",
        payment_month=data.get("payment_month") or None,
        is_recurring=bool(data.get("is_recurring", False)),
        is_installment=bool(data.get("is_installment", False)),
        current_installment=data.get("current_installment"),
        total_installments=data.get("total_installments"),
        installment_of=data.get("installment_of"),
        card_id=data.get("card_id"),
    )


def goal_from_dict(data: dict) -> Goal:
    start = data.get("start_date")
    return Goal(
        goal_id=data["goal_id"],
        name=data.get("name", ""),
        goal_type=GoalType(data.get("goal_type", "Saving")),
        monthly_installment=_decimal(data.get("monthly_installment")),
        start_date=parse_date(start) if start else None,
        total_installments=data.get("total_installments") or None,
        target_amount=_decimal(data.get("target_amount")),
        current_amount=_decimal(data.get("current_amount")),
        completed=bool(data.get("completed", False)),
        show_in_pending=bool(data.get("show_in_pending", False)),
        skipped_months=set(data.get("skipped_months") or []),
        history=[
            GoalContribution(
                date=parse_date(h["date"]),
                amount=_decimal(h.get("amount")),
                reference_month=h.get("reference_month"),
                balance_after=_optional_decimal(h.get("balance_after")),
            )
            for h in data.get("history") or []
        ],
    )


def fund_from_dict(data: dict) -> EmergencyFund:
    return EmergencyFund(
        current_balance=_decimal(data.get("current_balance")),
        target_amount=_decimal(data.get("target_amount")),
        monthly_contribution=_decimal(data.get("monthly_contribution")),
        show_in_pending=bool(data.get("show_in_pending", False)),
        skipped_months=set(data.get("skipped_months") or []),
        history=[
            FundMovement(
                date=parse_date(h["date"]),
                movement_type=FundMovementType(h.get("movement_type", "deposit")),
                amount=_decimal(h.get("amount")),
                reference_month=h.get("reference_month"),
                balance_after=_optional_decimal(h.get("balance_after")),
                reason=h.get("reason"),
            )
            for h in data.get("history") or []
        ],
    )


def card_from_dict(data: dict) -> CreditCard:
    return CreditCard(
        card_id=data["card_id"],
        name=data.get("name", ""),
        closing_day=int(data["closing_day"]),
        due_day=int(data["due_day"]),
        limit=_decimal(data.get("limit")),
    )


def _decimal(value: Any) -> Decimal:
    """Parse a stored amount; absent values count as zero."""
    if value is None or value == "":
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {value!r}") from exc


def _optional_decimal(value: Any) -> Decimal | None:
    return None if value is None else _decimal(value)

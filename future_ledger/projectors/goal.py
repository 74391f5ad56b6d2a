"""Virtual installments for savings and debt goals.

Viewing month N shows what falls due in month N+1 ("pay ahead"): the
salary of month N pays next month's bills, so the virtual entry carries
``payment_month`` N and a due date in N+1.

Installment numbers are 1-based: installment ``n`` of a goal that starts
on ``start_date`` is due ``n - 1`` months after it.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from future_ledger.competence import competence_month, resolve_competence
from future_ledger.logging import get_logger
from future_ledger.models import (
    Goal,
    GoalType,
    Transaction,
    TransactionStatus,
    TransactionType,
    VirtualType,
)
from future_ledger.months import add_months, is_before_month, month_diff, month_key, start_of_month

logger = get_logger(__name__)

GOAL_CATEGORY = "Metas"
DEBT_DESCRIPTION = "Pagamento de Dívida: {name}"
SAVING_DESCRIPTION = "Economia para a meta: {name}"

# Open-ended goals scan this many installments past the estimate
OPEN_ENDED_LOOKAHEAD = 12


def is_eligible(goal: Goal, month: date) -> bool:
    """Whether ``goal`` may produce a virtual installment when viewing ``month``."""
    if not goal.show_in_pending or goal.completed:
        return False
    if goal.goal_type not in (GoalType.SAVING, GoalType.DEBT):
        return False
    if (goal.monthly_installment or Decimal("0")) <= 0:
        return False
    if goal.start_date and is_before_month(month, goal.start_date):
        return False
    return month_key(month) not in goal.skipped_months


def contributed_in_month(goal: Goal, key: str) -> Decimal:
    """Sum of history contributions attributed to competence month ``key``."""
    total = Decimal("0")
    for entry in goal.history:
        entry_month = entry.reference_month or competence_month(entry.date)
        if entry_month == key:
            total += entry.amount
    return total


def matches_goal(transaction: Transaction, goal: Goal) -> bool:
    """Whether a real transaction pays for ``goal``.

    Falls back to a description substring match for transactions recorded
    without an ``installment_of`` link.
    """
    if transaction.installment_of == goal.goal_id:
        return True
    return bool(goal.name) and goal.name in transaction.description


def has_real_payment(goal: Goal, transactions: Iterable[Transaction], key: str) -> bool:
    """Whether a recorded transaction already covers ``goal`` in month ``key``."""
    return any(
        not t.is_virtual and resolve_competence(t) == key and matches_goal(t, goal)
        for t in transactions
    )


def resolve_due_date(goal: Goal, month: date) -> tuple[date, int | None] | None:
    """Due date and installment number of the item due the month after ``month``.

    Returns ``None`` when the series is exhausted.
    """
    next_month = add_months(start_of_month(month), 1)
    fallback = (next_month, None)
    if goal.start_date is None:
        return fallback

    start = goal.start_date
    target_key = month_key(next_month)
    total = goal.total_installments
    estimate = month_diff(next_month, start) + 1
    last_checked = total if total else estimate + OPEN_ENDED_LOOKAHEAD

    for number in range(max(1, estimate - 1), last_checked + 1):
        due = add_months(start, number - 1)
        if month_key(due) == target_key:
            if total and number > total:
                return None
            return due, number

    if goal.goal_type == GoalType.DEBT and total and estimate > total:
        return None
    return fallback


def project_goal(
    goal: Goal,
    month: date,
    transactions: Iterable[Transaction] = (),
) -> Transaction | None:
    """Build the virtual installment ``goal`` shows when viewing ``month``.

    Parameters
    ----------
    goal : Goal
        Goal to project.
    month : date
        Any day of the viewed calendar month.
    transactions : Iterable[Transaction]
        Real transactions, used to avoid duplicating a recorded payment.

    Returns
    -------
    Transaction | None
        The virtual transaction, or ``None`` when nothing is due.
    """
    if not is_eligible(goal, month):
        return None

    key = month_key(month)
    if contributed_in_month(goal, key) >= goal.monthly_installment:
        return None
    if has_real_payment(goal, transactions, key):
        logger.debug("Goal %s already paid for %s", goal.goal_id, key)
        return None

    resolved = resolve_due_date(goal, month)
    if resolved is None:
        return None
    due_date, number = resolved

    template = DEBT_DESCRIPTION if goal.goal_type == GoalType.DEBT else SAVING_DESCRIPTION
    description = template.format(name=goal.name)
    if number is not None and goal.total_installments:
        description += f" ({number}/{goal.total_installments})"

    return Transaction(
        transaction_id=f"vgoal_{goal.goal_id}",
        description=description,
        amount=goal.monthly_installment,
        date=due_date,
        transaction_type=TransactionType.EXPENSE,
        status=TransactionStatus.PENDING,
        category=GOAL_CATEGORY,
        payment_month=month_key(add_months(due_date, -1)),
        is_installment=goal.goal_type == GoalType.DEBT,
        current_installment=number,
        total_installments=goal.total_installments,
        installment_of=goal.goal_id,
        is_virtual=True,
        virtual_type=VirtualType.GOAL,
        virtual_id=goal.goal_id,
    )

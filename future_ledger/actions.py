"""User mutations on the settings aggregate.

Every action persists the settings and emits ``data-changed`` so open
views re-project.
"""

from datetime import date
from decimal import Decimal

from future_ledger.events import DATA_CHANGED, EventBus, event_bus
from future_ledger.exceptions import InvalidEntityStateError
from future_ledger.logging import get_logger
from future_ledger.models import FundMovement, FundMovementType, GoalContribution
from future_ledger.months import month_key, parse_month
from future_ledger.store.json_file import JsonSettingsStore
from future_ledger.store.settings import Settings

logger = get_logger(__name__)


class LedgerActions:
    """Confirm, skip and re-assign operations behind the ledger view."""

    def __init__(
        self,
        settings: Settings,
        store: JsonSettingsStore | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self.bus = bus or event_bus

    def confirm_goal_contribution(
        self,
        goal_id: str,
        amount: Decimal,
        reference_month: str | None = None,
        on: date | None = None,
    ) -> GoalContribution:
        """Record a contribution to a goal, completing it once the target is met."""
        goal = self.settings.get_goal(goal_id)
        if amount <= 0:
            raise InvalidEntityStateError(f"Contribution to {goal_id} must be positive")
        reference_month = _normalize_month(reference_month)

        goal.current_amount += amount
        contribution = GoalContribution(
            date=on or date.today(),
            amount=amount,
            reference_month=reference_month,
            balance_after=goal.current_amount,
        )
        goal.history.append(contribution)

        if not goal.completed and goal.target_amount > 0 and goal.current_amount >= goal.target_amount:
            goal.completed = True
            logger.info("Goal %s completed", goal.name)

        self._commit()
        return contribution

    def confirm_fund_contribution(
        self,
        amount: Decimal,
        reference_month: str | None = None,
        on: date | None = None,
        reason: str = "Contribuição via Timeline",
    ) -> FundMovement:
        """Deposit into the emergency fund."""
        if amount <= 0:
            raise InvalidEntityStateError("Fund contribution must be positive")
        reference_month = _normalize_month(reference_month)

        fund = self.settings.emergency_fund
        fund.current_balance += amount
        movement = FundMovement(
            date=on or date.today(),
            movement_type=FundMovementType.DEPOSIT,
            amount=amount,
            reference_month=reference_month,
            balance_after=fund.current_balance,
            reason=reason,
        )
        fund.history.append(movement)
        self._commit()
        return movement

    def skip_goal_month(self, goal_id: str, month: str) -> None:
        """Hide a goal's virtual installment for ``month``."""
        month = month_key(parse_month(month))
        goal = self.settings.get_goal(goal_id)
        if month not in goal.skipped_months:
            goal.skipped_months.add(month)
            self._commit()

    def skip_fund_month(self, month: str) -> None:
        """Hide the fund contribution for ``month``."""
        month = month_key(parse_month(month))
        fund = self.settings.emergency_fund
        if month not in fund.skipped_months:
            fund.skipped_months.add(month)
            self._commit()

    def set_payment_month(self, transaction_id: str, month: str | None) -> None:
        """Explicitly override (or clear) a stored transaction's competence month."""
        month = _normalize_month(month)
        transaction = self.settings.get_transaction(transaction_id)
        transaction.payment_month = month
        self._commit()

    def _commit(self) -> None:
        if self.store is not None:
            self.store.save(self.settings)
        self.bus.emit(DATA_CHANGED)


def _normalize_month(month: str | None) -> str | None:
    """Validate a month key and return it zero-padded (``"2025-6"`` -> ``"2025-06"``)."""
    if not month:
        return None
    return month_key(parse_month(month))

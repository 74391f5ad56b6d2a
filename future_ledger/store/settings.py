"""Settings aggregate: the user's persisted ledger state."""

from dataclasses import dataclass, field

from future_ledger.exceptions import EntityNotFoundError, InvalidEntityStateError
from future_ledger.models import CreditCard, EmergencyFund, Goal, Transaction


@dataclass
class Settings:
    """Aggregate root owning real transactions, goals, the fund and cards."""

    transactions: list[Transaction] = field(default_factory=list)
    goals: list[Goal] = field(default_factory=list)
    emergency_fund: EmergencyFund = field(default_factory=EmergencyFund)
    credit_cards: list[CreditCard] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    salary_payday: int = 1

    # Recurring dates clamped while loading, not yet persisted
    sanitized_dates: int = field(default=0, compare=False)

    def add_transaction(self, transaction: Transaction) -> None:
        """Add a real transaction to the store."""
        if transaction.is_virtual:
            raise InvalidEntityStateError(
                f"Virtual transaction {transaction.transaction_id} cannot be stored"
            )
        self.transactions.append(transaction)

    def add_goal(self, goal: Goal) -> None:
        self.goals.append(goal)

    def add_credit_card(self, card: CreditCard) -> None:
        self.credit_cards.append(card)

    def find_card(self, card_id: str) -> CreditCard | None:
        return next((c for c in self.credit_cards if c.card_id == card_id), None)

    def find_goal(self, goal_id: str) -> Goal | None:
        return next((g for g in self.goals if g.goal_id == goal_id), None)

    def get_goal(self, goal_id: str) -> Goal:
        """Get a goal or raise if it does not exist."""
        goal = self.find_goal(goal_id)
        if goal is None:
            raise EntityNotFoundError(f"Goal {goal_id} not found")
        return goal

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Get a real transaction or raise if it does not exist."""
        for transaction in self.transactions:
            if transaction.transaction_id == transaction_id:
                return transaction
        raise EntityNotFoundError(f"Transaction {transaction_id} not found")

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "transactions": len(self.transactions),
            "goals": len(self.goals),
            "credit_cards": len(self.credit_cards),
            "fund_movements": len(self.emergency_fund.history),
        }

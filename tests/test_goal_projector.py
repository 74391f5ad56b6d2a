"""Tests for virtual goal installments."""

from datetime import date
from decimal import Decimal

import pytest

from future_ledger.models import Goal, GoalContribution, GoalType, TransactionStatus, VirtualType
from future_ledger.projectors import generate_saving_opportunities
from future_ledger.projectors.goal import (
    matches_goal,
    project_goal,
    resolve_due_date,
)
from future_ledger.store import Settings


@pytest.fixture
def saving_goal() -> Goal:
    return Goal(
        goal_id="s1",
        name="Viagem",
        goal_type=GoalType.SAVING,
        monthly_installment=Decimal("300"),
        show_in_pending=True,
    )


class TestDebtInstallments:
    """Tests for installment numbering and series exhaustion."""

    def test_last_installment(self, debt_goal: Goal) -> None:
        tx = project_goal(debt_goal, date(2025, 11, 1))

        assert tx is not None
        assert tx.date == date(2025, 12, 15)
        assert tx.description == "Pagamento de Dívida: Carro (12/12)"
        assert tx.payment_month == "2025-11"
        assert tx.amount == Decimal("500")
        assert tx.current_installment == 12
        assert tx.total_installments == 12

    def test_exhausted_series(self, debt_goal: Goal) -> None:
        assert project_goal(debt_goal, date(2025, 12, 1)) is None
        assert project_goal(debt_goal, date(2026, 3, 1)) is None

    def test_start_month_shows_second_installment(self, debt_goal: Goal) -> None:
        tx = project_goal(debt_goal, date(2025, 1, 20))

        assert tx is not None
        assert tx.date == date(2025, 2, 15)
        assert tx.description.endswith("(2/12)")
        assert tx.payment_month == "2025-01"

    def test_before_start_month(self, debt_goal: Goal) -> None:
        assert project_goal(debt_goal, date(2024, 12, 1)) is None

    def test_virtual_metadata(self, debt_goal: Goal) -> None:
        tx = project_goal(debt_goal, date(2025, 6, 1))

        assert tx.transaction_id == "vgoal_g1"
        assert tx.is_virtual
        assert tx.virtual_type == VirtualType.GOAL
        assert tx.virtual_id == "g1"
        assert tx.installment_of == "g1"
        assert tx.is_installment
        assert tx.category == "Metas"
        assert tx.status == TransactionStatus.PENDING

    def test_due_day_clamped_to_short_month(self, debt_goal: Goal) -> None:
        debt_goal.start_date = date(2025, 1, 31)
        due_date, number = resolve_due_date(debt_goal, date(2025, 1, 1))

        assert due_date == date(2025, 2, 28)
        assert number == 2


class TestSavingInstallments:
    """Tests for savings goals."""

    def test_without_start_date_due_first_of_next_month(self, saving_goal: Goal) -> None:
        tx = project_goal(saving_goal, date(2025, 6, 10))

        assert tx.date == date(2025, 7, 1)
        assert tx.description == "Economia para a meta: Viagem"
        assert tx.payment_month == "2025-06"
        assert tx.current_installment is None
        assert not tx.is_installment

    def test_open_ended_keeps_start_day_without_suffix(self, saving_goal: Goal) -> None:
        saving_goal.start_date = date(2025, 3, 10)
        tx = project_goal(saving_goal, date(2025, 6, 1))

        assert tx.date == date(2025, 7, 10)
        assert tx.current_installment == 5
        assert tx.description == "Economia para a meta: Viagem"

    def test_past_total_falls_back_to_first_of_month(self, saving_goal: Goal) -> None:
        saving_goal.start_date = date(2025, 1, 10)
        saving_goal.total_installments = 3
        tx = project_goal(saving_goal, date(2025, 6, 1))

        assert tx is not None
        assert tx.date == date(2025, 7, 1)
        assert tx.current_installment is None
        assert tx.description == "Economia para a meta: Viagem"


class TestEligibility:
    """Tests for the eligibility gate."""

    @pytest.mark.parametrize("month", [date(2025, m, 1) for m in range(1, 13)])
    def test_zero_installment_never_projects(self, debt_goal: Goal, month: date) -> None:
        debt_goal.monthly_installment = Decimal("0")
        assert project_goal(debt_goal, month) is None

    @pytest.mark.parametrize("month", [date(2025, m, 1) for m in range(1, 13)])
    def test_completed_never_projects(self, debt_goal: Goal, month: date) -> None:
        debt_goal.completed = True
        assert project_goal(debt_goal, month) is None

    def test_opt_in_required(self, saving_goal: Goal) -> None:
        saving_goal.show_in_pending = False
        assert project_goal(saving_goal, date(2025, 6, 1)) is None

    def test_skipped_month(self, saving_goal: Goal) -> None:
        saving_goal.skipped_months.add("2025-06")

        assert project_goal(saving_goal, date(2025, 6, 1)) is None
        assert project_goal(saving_goal, date(2025, 7, 1)) is not None


class TestContributionGate:
    """Tests for suppression by recorded contributions."""

    def test_full_contribution_suppresses(self, debt_goal: Goal) -> None:
        debt_goal.history.append(
            GoalContribution(date=date(2025, 12, 2), amount=Decimal("500"), reference_month="2025-11")
        )
        assert project_goal(debt_goal, date(2025, 11, 1)) is None

    def test_partial_contribution_keeps_installment(self, debt_goal: Goal) -> None:
        debt_goal.history.append(
            GoalContribution(date=date(2025, 11, 20), amount=Decimal("200"), reference_month="2025-11")
        )
        assert project_goal(debt_goal, date(2025, 11, 1)) is not None

    def test_contribution_without_reference_uses_competence(self, debt_goal: Goal) -> None:
        debt_goal.history.append(GoalContribution(date=date(2025, 11, 20), amount=Decimal("500")))
        assert project_goal(debt_goal, date(2025, 11, 1)) is None

    def test_early_month_contribution_counts_for_previous_month(self, debt_goal: Goal) -> None:
        debt_goal.history.append(GoalContribution(date=date(2025, 11, 5), amount=Decimal("500")))

        assert project_goal(debt_goal, date(2025, 11, 1)) is not None
        assert project_goal(debt_goal, date(2025, 10, 1)) is None


class TestDuplicateGate:
    """Tests for suppression by recorded real payments."""

    def test_linked_payment_suppresses(self, debt_goal: Goal, make_transaction) -> None:
        paid = make_transaction(description="Parcela", installment_of="g1", payment_month="2025-11")
        assert project_goal(debt_goal, date(2025, 11, 1), [paid]) is None

    def test_description_match_suppresses(self, debt_goal: Goal, make_transaction) -> None:
        paid = make_transaction(description="Parcela Carro", date=date(2025, 11, 20))
        assert project_goal(debt_goal, date(2025, 11, 1), [paid]) is None

    def test_payment_in_other_month_does_not_suppress(self, debt_goal: Goal, make_transaction) -> None:
        paid = make_transaction(description="Parcela Carro", date=date(2025, 12, 20))
        assert project_goal(debt_goal, date(2025, 11, 1), [paid]) is not None

    def test_unrelated_transaction_does_not_suppress(self, debt_goal: Goal, make_transaction) -> None:
        other = make_transaction(description="Mercado", date=date(2025, 11, 20))
        assert project_goal(debt_goal, date(2025, 11, 1), [other]) is not None

    def test_nameless_goal_matches_only_by_link(self, debt_goal: Goal, make_transaction) -> None:
        debt_goal.name = ""
        assert not matches_goal(make_transaction(description="Mercado"), debt_goal)
        assert matches_goal(make_transaction(installment_of="g1"), debt_goal)


class TestGenerateSavingOpportunities:
    """Tests for the combined goal and fund projection."""

    def test_goals_then_fund(self, debt_goal: Goal, saving_goal: Goal, emergency_fund) -> None:
        settings = Settings(goals=[debt_goal, saving_goal], emergency_fund=emergency_fund)
        virtual = generate_saving_opportunities(settings, date(2025, 11, 1))

        assert [t.transaction_id for t in virtual] == ["vgoal_g1", "vgoal_s1", "vfund_emergency"]
        assert all(t.is_virtual for t in virtual)

    def test_real_transactions_suppress(self, debt_goal: Goal, make_transaction) -> None:
        settings = Settings(goals=[debt_goal])
        settings.add_transaction(make_transaction(description="Parcela Carro 12/12", payment_month="2025-11"))

        assert generate_saving_opportunities(settings, date(2025, 11, 1)) == []

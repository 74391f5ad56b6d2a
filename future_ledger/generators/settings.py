"""Sample settings generator for demos and pipeline tests."""

from __future__ import annotations

import random
from datetime import date
from decimal import Decimal

from future_ledger.generators.base import BaseGenerator
from future_ledger.models import (
    CreditCard,
    EmergencyFund,
    FundMovement,
    FundMovementType,
    Goal,
    GoalType,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from future_ledger.months import add_months, start_of_month, with_day
from future_ledger.store.settings import Settings


class SampleSettingsGenerator(BaseGenerator):
    """Generate a plausible household ledger around a reference date."""

    CATEGORIES = [
        "Moradia",
        "Alimentação",
        "Transporte",
        "Saúde",
        "Lazer",
        "Assinaturas",
        "Educação",
        "Investimentos",
        "Outros",
        "Salário",
        "Renda Extra",
    ]

    # description, category, amount range (BRL)
    RECURRING_EXPENSES = [
        ("Aluguel", "Moradia", (1200, 3500)),
        ("Internet", "Moradia", (90, 200)),
        ("Plano de Saúde", "Saúde", (250, 900)),
        ("Netflix", "Assinaturas", (40, 60)),
    ]

    CARD_ISSUERS = ["Nubank", "Itaú", "Inter", "C6", "Santander"]

    # MCC-style purchase categories with amount ranges
    PURCHASE_CATEGORIES = {
        "Alimentação": (30, 600),
        "Transporte": (15, 300),
        "Lazer": (20, 400),
        "Saúde": (20, 350),
        "Outros": (10, 800),
    }

    def generate(
        self,
        today: date | None = None,
        months_back: int = 6,
        months_ahead: int = 6,
        salary_gap: bool = False,
        num_cards: int = 2,
        purchases_per_card: int = 8,
    ) -> Settings:
        """Generate a full settings aggregate.

        Parameters
        ----------
        today : date | None
            Reference date; past items are paid, future ones pending.
        months_back : int
            Months of history before ``today``.
        months_ahead : int
            Months of scheduled recurring items after ``today``.
        salary_gap : bool
            Leave one month out of the salary series so healing has work to do.
        num_cards : int
            Number of credit cards.
        purchases_per_card : int
            Pending purchases per card.

        Returns
        -------
        Settings
            Generated settings.
        """
        today = today or date.today()
        payday = random.randint(1, 10)
        settings = Settings(categories=list(self.CATEGORIES), salary_payday=payday)

        months = [
            add_months(start_of_month(today), offset)
            for offset in range(-months_back, months_ahead + 1)
        ]

        skipped = months[len(months) // 2] if salary_gap and len(months) > 2 else None
        salary_description = f"Salário {self.fake.company()}"
        salary = self.money(3000, 15000)
        for month in months:
            if month == skipped:
                continue
            settings.add_transaction(
                self._recurring(
                    salary_description, "Salário", salary, with_day(month, payday),
                    TransactionType.INCOME, today,
                )
            )

        for description, category, (low, high) in self.RECURRING_EXPENSES:
            amount = self.money(low, high)
            day = random.randint(1, 28)
            for month in months:
                settings.add_transaction(
                    self._recurring(
                        description, category, amount, with_day(month, day),
                        TransactionType.EXPENSE, today,
                    )
                )

        for _ in range(num_cards):
            card = self.generate_card()
            settings.add_credit_card(card)
            for _ in range(purchases_per_card):
                settings.add_transaction(self.generate_purchase(card, today, months_ahead))

        settings.add_goal(self.generate_saving_goal(today))
        settings.add_goal(self.generate_debt_goal(today))
        settings.emergency_fund = self.generate_fund(today)
        return settings

    def generate_card(self) -> CreditCard:
        closing_day = random.randint(1, 28)
        return CreditCard(
            card_id=self.new_id(),
            name=random.choice(self.CARD_ISSUERS),
            closing_day=closing_day,
            due_day=(closing_day + 6) % 28 + 1,  # a week after closing
            limit=Decimal(str(random.choice([2000, 5000, 8000, 15000]))),
        )

    def generate_purchase(self, card: CreditCard, today: date, months_ahead: int) -> Transaction:
        category = random.choice(list(self.PURCHASE_CATEGORIES))
        low, high = self.PURCHASE_CATEGORIES[category]
        month = add_months(start_of_month(today), random.randint(0, max(0, months_ahead - 1)))
        return Transaction(
            transaction_id=self.new_id(),
            description=self.fake.company(),
            amount=self.money(low, high),
            date=with_day(month, random.randint(1, 31)),
            transaction_type=TransactionType.EXPENSE,
            status=TransactionStatus.PENDING,
            category=category,
            card_id=card.card_id,
        )

    def generate_saving_goal(self, today: date) -> Goal:
        target = Decimal(str(random.choice([5000, 10000, 20000])))
        return Goal(
            goal_id=self.new_id(),
            name=f"Viagem para {self.fake.city()}",
            goal_type=GoalType.SAVING,
            monthly_installment=(target / 20).quantize(Decimal("0.01")),
            start_date=add_months(today, -random.randint(0, 3)),
            target_amount=target,
            show_in_pending=True,
        )

    def generate_debt_goal(self, today: date) -> Goal:
        total = random.choice([12, 24, 36])
        installment = self.money(300, 1500)
        return Goal(
            goal_id=self.new_id(),
            name=f"Financiamento {self.fake.last_name()}",
            goal_type=GoalType.DEBT,
            monthly_installment=installment,
            start_date=with_day(add_months(today, -random.randint(1, 6)), random.randint(1, 28)),
            total_installments=total,
            target_amount=installment * total,
            show_in_pending=True,
        )

    def generate_fund(self, today: date) -> EmergencyFund:
        contribution = Decimal(str(random.choice([100, 200, 500])))
        balance = contribution * random.randint(1, 10)
        return EmergencyFund(
            current_balance=balance,
            target_amount=contribution * 30,
            monthly_contribution=contribution,
            show_in_pending=True,
            history=[
                FundMovement(
                    date=add_months(today, -1),
                    movement_type=FundMovementType.DEPOSIT,
                    amount=contribution,
                    balance_after=balance,
                )
            ],
        )

    def _recurring(
        self,
        description: str,
        category: str,
        amount: Decimal,
        when: date,
        transaction_type: TransactionType,
        today: date,
    ) -> Transaction:
        return Transaction(
            transaction_id=self.new_id(),
            description=description,
            amount=amount,
            date=when,
            transaction_type=transaction_type,
            status=TransactionStatus.PAID if when <= today else TransactionStatus.PENDING,
            category=category,
            is_recurring=True,
        )

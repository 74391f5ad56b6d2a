"""Projection pipeline assembling the future ledger.

``FutureLedger.project`` runs, in order:

1. the explicit repair pass (date sanitization + recurring series healing),
   persisting and re-running until nothing changes;
2. goal and emergency fund projections for each of the next months;
3. card bill aggregation and competence month backfill;
4. the pending list filter and the monthly net totals for the chart.

Virtual transactions and derived copies live only in the returned
``LedgerProjection``; the settings aggregate only ever gains healed real
transactions.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from future_ledger import healing
from future_ledger.bills import BillAggregator
from future_ledger.competence import with_competence
from future_ledger.config import LedgerConfig
from future_ledger.events import DATA_CHANGED, EventBus, event_bus
from future_ledger.logging import get_logger
from future_ledger.models import Transaction, TransactionStatus, TransactionType
from future_ledger.months import add_months, month_key, month_name, start_of_month, with_day
from future_ledger.projectors import generate_saving_opportunities
from future_ledger.store.json_file import JsonSettingsStore
from future_ledger.store.settings import Settings

logger = get_logger(__name__)


@dataclass
class LedgerFilters:
    """User filters applied to the pending list and the chart."""

    text: str = ""
    category: str | None = None  # None or "all" disables the filter
    month: str | None = None  # YYYY-MM, pending list only

    def matches(self, transaction: Transaction) -> bool:
        """Text and category filters shared by the list and the chart."""
        if self.text and self.text.lower() not in transaction.description.lower():
            return False
        if self.category and self.category != "all" and transaction.category != self.category:
            return False
        return True


@dataclass
class ProjectionStats:
    """Summary figures shown next to the pending list."""

    current_balance: Decimal = Decimal("0")
    projected_income: Decimal = Decimal("0")
    projected_expenses: Decimal = Decimal("0")

    @property
    def final_balance(self) -> Decimal:
        return self.current_balance + self.projected_income - self.projected_expenses


@dataclass
class LedgerProjection:
    """Result of one projection pass."""

    pending_list: list[Transaction] = field(default_factory=list)
    monthly_net_totals: list[tuple[str, Decimal]] = field(default_factory=list)
    stats: ProjectionStats = field(default_factory=ProjectionStats)
    display_set: list[Transaction] = field(default_factory=list)
    repair: healing.RepairReport = field(default_factory=healing.RepairReport)


class FutureLedger:
    """Projection assembler over a ``Settings`` aggregate."""

    def __init__(
        self,
        settings: Settings,
        store: JsonSettingsStore | None = None,
        bus: EventBus | None = None,
        config: LedgerConfig | None = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self.bus = bus or event_bus
        self.config = config or LedgerConfig()

    def repair(self) -> healing.RepairReport:
        """Sanitize and heal stored transactions until a fixed point is reached.

        Each pass that changes anything is persisted before the next one runs.
        A failed save propagates; the in-memory fixes are kept.
        """
        total = healing.RepairReport()
        for _ in range(self.config.projection.max_repair_passes):
            report = healing.repair(self.settings)
            if not report.changed:
                break
            total.sanitized += report.sanitized
            total.healed.extend(report.healed)
            self._persist()
        else:
            logger.warning(
                "Repair did not settle after %d passes", self.config.projection.max_repair_passes
            )

        if total.changed:
            self.bus.emit(DATA_CHANGED)
        return total

    def virtual_transactions(self, today: date) -> list[Transaction]:
        """Goal and fund projections for the months after ``today``.

        Dates are moved to the salary payday so they line up with income.
        """
        virtual: list[Transaction] = []
        current = start_of_month(today)
        for offset in range(1, self.config.projection.virtual_months + 1):
            month = add_months(current, offset)
            for transaction in generate_saving_opportunities(self.settings, month):
                transaction.date = with_day(month, self.settings.salary_payday or 1)
                virtual.append(transaction)
        logger.debug("Generated %d virtual transactions", len(virtual))
        return virtual

    def display_transactions(self, today: date) -> list[Transaction]:
        """Real and virtual transactions with card purchases replaced by bills."""
        everything = list(self.settings.transactions) + self.virtual_transactions(today)

        card_purchases = [t for t in everything if t.card_id and t.is_pending]
        regular = [with_competence(t) for t in everything if not t.card_id]

        aggregator = BillAggregator(
            self.settings.credit_cards, strict=self.config.strict_card_references
        )
        return regular + aggregator.aggregate(card_purchases)

    def pending_list(
        self,
        display: list[Transaction],
        filters: LedgerFilters,
        today: date,
    ) -> list[Transaction]:
        """Pending items whose competence month is within the upcoming window."""
        first_key = month_key(add_months(today, 1))
        end_key = month_key(add_months(today, self.config.projection.pending_window_months))

        pending = [
            t
            for t in display
            if filters.matches(t)
            and first_key <= t.payment_month < end_key
            and (not filters.month or t.payment_month == filters.month)
            and t.status == TransactionStatus.PENDING
        ]
        return sorted(pending, key=lambda t: (t.payment_month, t.date))

    def monthly_net_totals(
        self,
        display: list[Transaction],
        filters: LedgerFilters,
        today: date,
    ) -> list[tuple[str, Decimal]]:
        """Net total per competence month, from the current month onwards.

        Paid items count too, so a month's bar shows its full cost.
        """
        current = start_of_month(today)
        buckets = [add_months(current, i) for i in range(self.config.projection.chart_months)]
        totals = {month_key(m): Decimal("0") for m in buckets}

        for transaction in display:
            if not filters.matches(transaction):
                continue
            key = transaction.payment_month
            if key in totals:
                totals[key] += transaction.signed_amount

        return [(month_name(m), totals[month_key(m)]) for m in buckets]

    def current_balance(self, today: date) -> Decimal:
        """Balance of paid real transactions up to and including ``today``."""
        return sum(
            (
                t.signed_amount
                for t in self.settings.transactions
                if t.status == TransactionStatus.PAID and t.date <= today
            ),
            Decimal("0"),
        )

    def project(
        self,
        filters: LedgerFilters | None = None,
        today: date | None = None,
        repair: bool = True,
    ) -> LedgerProjection:
        """Run the whole pipeline and return the pending list and chart series."""
        filters = filters or LedgerFilters()
        today = today or date.today()

        report = self.repair() if repair else healing.RepairReport()

        display = self.display_transactions(today)
        pending = self.pending_list(display, filters, today)

        stats = ProjectionStats(current_balance=self.current_balance(today))
        for transaction in pending:
            if transaction.transaction_type == TransactionType.INCOME:
                stats.projected_income += transaction.amount
            else:
                stats.projected_expenses += transaction.amount

        logger.info(
            "Projected %d pending items from %d displayed transactions",
            len(pending),
            len(display),
        )
        return LedgerProjection(
            pending_list=pending,
            monthly_net_totals=self.monthly_net_totals(display, filters, today),
            stats=stats,
            display_set=display,
            repair=report,
        )

    def _persist(self) -> None:
        if self.store is not None:
            self.store.save(self.settings)
        else:
            self.settings.sanitized_dates = 0

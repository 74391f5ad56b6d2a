#!/usr/bin/env python3
"""Project the future ledger for a settings file and print it.

Runs the repair pass (persisting healed transactions back to the file),
then prints the pending list and the monthly net totals.
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from future_ledger.config import LedgerConfig
from future_ledger.ledger import FutureLedger, LedgerFilters
from future_ledger.logging import setup_logging
from future_ledger.store import JsonSettingsStore
from future_ledger.store.serialization import serialize_value


def parse_args(config: LedgerConfig) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print the projected future ledger")
    parser.add_argument(
        "--settings",
        type=Path,
        default=config.store.settings_path,
        help=f"Settings file (default: {config.store.settings_path})",
    )
    parser.add_argument("--text", default="", help="Description substring filter")
    parser.add_argument("--category", default=None, help="Category filter")
    parser.add_argument("--month", default=None, help="Competence month filter (YYYY-MM)")
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        default=None,
        help="Reference date as YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--no-repair",
        action="store_true",
        help="Skip the repair pass and leave the settings file untouched",
    )
    parser.add_argument("--json", action="store_true", help="Print machine-readable JSON")
    return parser.parse_args()


def main() -> None:
    """Run the projection and print it."""
    config = LedgerConfig.from_env()
    args = parse_args(config)
    setup_logging(config.log_level, config.log_format)

    store = JsonSettingsStore(args.settings, pretty=config.store.pretty_json)
    ledger = FutureLedger(store.load(), store=store, config=config)
    projection = ledger.project(
        LedgerFilters(text=args.text, category=args.category, month=args.month),
        today=args.today,
        repair=not args.no_repair,
    )

    if args.json:
        output = {
            "pending_list": serialize_value(projection.pending_list),
            "monthly_net_totals": [[label, str(value)] for label, value in projection.monthly_net_totals],
            "final_balance": str(projection.stats.final_balance),
        }
        print(json.dumps(output, indent=2, ensure_ascii=False))
        return

    print("=" * 60)
    print("Lançamentos Futuros")
    print("=" * 60)
    for transaction in projection.pending_list:
        sign = "+" if transaction.signed_amount >= 0 else "-"
        print(
            f"  {transaction.payment_month}  {transaction.date.isoformat()}  "
            f"{sign}{transaction.amount:>12}  {transaction.description}"
        )
    if not projection.pending_list:
        print("  Nenhum lançamento futuro encontrado.")

    print("\nVisão Mensal")
    for label, value in projection.monthly_net_totals:
        print(f"  {label:<10} {value:>12}")

    stats = projection.stats
    print(f"\nReceitas Previstas: {stats.projected_income}")
    print(f"Despesas Previstas: {stats.projected_expenses}")
    print(f"Saldo Projetado:    {stats.final_balance}")


if __name__ == "__main__":
    main()

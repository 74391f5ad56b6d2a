#!/usr/bin/env python3
"""Generate a sample settings file.

The file can be fed to ``project_ledger.py`` for manual validation of the
projection pipeline.
"""

import argparse
import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from future_ledger.generators import SampleSettingsGenerator
from future_ledger.logging import get_logger, setup_logging
from future_ledger.store import JsonSettingsStore

logger = get_logger("generate_sample_data")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate sample future-ledger settings")
    parser.add_argument(
        "--output",
        type=Path,
        default=project_root / "local" / "settings.json",
        help="Settings file to write (default: local/settings.json)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        default=None,
        help="Reference date as YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--months-back",
        type=int,
        default=6,
        help="Months of history to generate (default: 6)",
    )
    parser.add_argument(
        "--months-ahead",
        type=int,
        default=6,
        help="Months of scheduled items to generate (default: 6)",
    )
    parser.add_argument(
        "--salary-gap",
        action="store_true",
        help="Leave a gap in the salary series to exercise healing",
    )
    parser.add_argument("--log-level", default="INFO", help="Log level (default: INFO)")
    return parser.parse_args()


def main() -> None:
    """Generate the sample settings file."""
    args = parse_args()
    setup_logging(args.log_level)

    generator = SampleSettingsGenerator(seed=args.seed)
    settings = generator.generate(
        today=args.today,
        months_back=args.months_back,
        months_ahead=args.months_ahead,
        salary_gap=args.salary_gap,
    )

    store = JsonSettingsStore(args.output)
    store.save(settings)

    print("=" * 60)
    print(f"Settings written to: {args.output}")
    for entity_type, count in settings.summary().items():
        print(f"  {entity_type}: {count}")
    print("=" * 60)


if __name__ == "__main__":
    main()

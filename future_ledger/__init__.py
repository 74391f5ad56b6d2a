"""Forward-looking personal finance ledger."""

from future_ledger.ledger import FutureLedger, LedgerFilters, LedgerProjection
from future_ledger.projectors import generate_saving_opportunities

__all__ = [
    "FutureLedger",
    "LedgerFilters",
    "LedgerProjection",
    "generate_saving_opportunities",
]

__version__ = "0.1.0"

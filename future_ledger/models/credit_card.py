"""Credit card model."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class CreditCard:
    """Credit card whose pending purchases are grouped into monthly bills."""

    card_id: str
    name: str
    closing_day: int  # 1-31
    due_day: int  # day of month the bill is due
    limit: Decimal = Decimal("0")

"""Seeded Faker wrapper shared by the sample data generators."""

from __future__ import annotations

import random
from abc import ABC
from decimal import Decimal

from faker import Faker

CENTS = Decimal("0.01")


class BaseGenerator(ABC):
    """Common state for generators: one Faker instance and a seeded ``random``.

    Parameters
    ----------
    seed : int | None
        Seed for both Faker and the ``random`` module; ``None`` leaves
        them unseeded.
    locale : str
        Faker locale. Descriptions and names default to Brazilian Portuguese.
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "pt_BR",
    ) -> None:
        self.seed = seed
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
            random.seed(seed)

    def new_id(self) -> str:
        return self.fake.uuid4()

    @staticmethod
    def money(low: float, high: float) -> Decimal:
        """Random BRL amount between ``low`` and ``high``, rounded to cents."""
        return Decimal(str(random.uniform(low, high))).quantize(CENTS)

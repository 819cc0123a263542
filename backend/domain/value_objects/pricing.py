"""
Pricing Value Object

Per-dozen cost and sale values. The settings row holds the defaults; every
order keeps its own copy taken at creation time.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Pricing:
    """Cost and sale price of one dozen."""

    cost_per_dozen: float = 0.0
    sale_per_dozen: float = 0.0

    def is_valid(self) -> bool:
        """Both values are finite and not negative."""
        return all(
            math.isfinite(value) and value >= 0
            for value in (self.cost_per_dozen, self.sale_per_dozen)
        )

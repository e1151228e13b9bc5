"""
Player Measures

One generic bounded value type with clamping and optional decay, plus the
five player stats built on it. Subtypes only configure bounds and add a
status classifier; clamping lives in Measure alone.
"""

import math
from enum import Enum
from typing import Dict, Optional

from config import CONFIG


class MeasureType(str, Enum):
    HEALTH = "health"
    HAPPINESS = "happiness"
    EDUCATION = "education"
    CAREER = "career"
    WEALTH = "wealth"


class Measure:
    """A numeric stat kept inside [min_value, max_value] after every mutation."""

    measure_type: Optional[MeasureType] = None

    def __init__(
        self,
        value: float,
        min_value: float = 0,
        max_value: float = math.inf,
        decay_rate: float = 0,
    ):
        if min_value > max_value:
            raise ValueError(f"min_value {min_value} exceeds max_value {max_value}")
        if decay_rate < 0:
            raise ValueError(f"decay_rate cannot be negative, got {decay_rate}")
        self.min_value = min_value
        self.max_value = max_value
        self.decay_rate = decay_rate
        self.initial_value = self._clamp(value)
        self.value = self.initial_value

    def _clamp(self, value: float) -> float:
        return max(self.min_value, min(self.max_value, value))

    def _set(self, new_value: float) -> float:
        old = self.value
        self.value = self._clamp(new_value)
        return self.value - old

    def increase(self, amount: float) -> float:
        """Raise the value; returns the delta actually applied."""
        if amount < 0:
            raise ValueError(f"increase amount must be non-negative, got {amount}")
        return self._set(self.value + amount)

    def decrease(self, amount: float) -> float:
        """Lower the value; returns the (positive) amount actually removed."""
        if amount < 0:
            raise ValueError(f"decrease amount must be non-negative, got {amount}")
        return -self._set(self.value - amount)

    def update(self, delta: float) -> float:
        return self._set(self.value + delta)

    def apply_decay(self) -> float:
        if self.decay_rate == 0:
            return 0
        return self._set(self.value - self.decay_rate)

    def get_percentage(self) -> float:
        if math.isinf(self.max_value) or math.isinf(self.min_value):
            return 0
        span = self.max_value - self.min_value
        if span == 0:
            return 100
        return (self.value - self.min_value) / span * 100

    def is_at_max(self) -> bool:
        return self.value >= self.max_value

    def is_at_min(self) -> bool:
        return self.value <= self.min_value

    def reset(self, value: Optional[float] = None) -> None:
        self.value = self._clamp(self.initial_value if value is None else value)

    def clone(self) -> "Measure":
        copy = self.__class__.__new__(self.__class__)
        copy.min_value = self.min_value
        copy.max_value = self.max_value
        copy.decay_rate = self.decay_rate
        copy.initial_value = self.initial_value
        copy.value = self.value
        return copy

    def get_status(self) -> str:
        return f"{self.value}"

    def to_dict(self) -> Dict[str, object]:
        return {
            "type": self.measure_type.value if self.measure_type else None,
            "value": self.value,
            "min": self.min_value,
            "max": self.max_value,
            "percentage": self.get_percentage(),
            "status": self.get_status(),
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.value})"


def _percent_tier(percentage: float, labels) -> str:
    for threshold, label in zip((80, 60, 40, 20), labels):
        if percentage >= threshold:
            return label
    return labels[-1]


class Health(Measure):
    measure_type = MeasureType.HEALTH

    def __init__(self, value: float = 100, decay_rate: float = 0):
        super().__init__(value, 0, CONFIG.measures.max_health, decay_rate)

    def get_status(self) -> str:
        return _percent_tier(
            self.get_percentage(), ("Excellent", "Good", "Fair", "Poor", "Critical")
        )

    def is_critical(self) -> bool:
        return self.get_percentage() <= 20

    def can_work_hard(self) -> bool:
        return self.get_percentage() >= 40


class Happiness(Measure):
    measure_type = MeasureType.HAPPINESS

    def __init__(self, value: float = 50, decay_rate: float = 0):
        super().__init__(value, 0, CONFIG.measures.max_happiness, decay_rate)

    def get_status(self) -> str:
        return _percent_tier(
            self.get_percentage(), ("Ecstatic", "Happy", "Content", "Unhappy", "Miserable")
        )

    def is_miserable(self) -> bool:
        return self.get_percentage() <= 20

    def is_happy(self) -> bool:
        return self.get_percentage() >= 60


class Education(Measure):
    """Permanent investment: never decays."""

    measure_type = MeasureType.EDUCATION

    def __init__(self, value: float = 0):
        super().__init__(value, 0, CONFIG.measures.max_education, 0)

    def get_status(self) -> str:
        if self.value >= 90:
            return "PhD Level"
        if self.value >= 75:
            return "Masters Level"
        if self.value >= 60:
            return "Bachelors Level"
        if self.value >= 40:
            return "Some College"
        if self.value >= 20:
            return "High School"
        return "Basic"

    def get_tier(self) -> int:
        for tier, threshold in ((5, 80), (4, 60), (3, 40), (2, 20)):
            if self.value >= threshold:
                return tier
        return 1

    def meets_requirement(self, required: float) -> bool:
        return self.value >= required


class Career(Measure):
    """Total experience points; unbounded above."""

    measure_type = MeasureType.CAREER

    def __init__(self, value: float = 0):
        super().__init__(value, 0, math.inf, 0)

    def get_status(self) -> str:
        for threshold, label in (
            (1000, "Industry Expert"),
            (500, "Senior Professional"),
            (250, "Experienced"),
            (100, "Intermediate"),
            (25, "Junior"),
        ):
            if self.value >= threshold:
                return label
        return "Entry Level"

    def get_level(self) -> int:
        return int(self.value // 100) + 1

    def meets_threshold(self, threshold: float) -> bool:
        return self.value >= threshold


class Wealth(Measure):
    """Cash on hand; may go negative."""

    measure_type = MeasureType.WEALTH

    def __init__(self, value: float = 0):
        super().__init__(value, -math.inf, math.inf, 0)

    def get_status(self) -> str:
        for threshold, label in (
            (10000, "Wealthy"),
            (5000, "Prosperous"),
            (1000, "Comfortable"),
            (0, "Modest"),
            (-500, "In Debt"),
        ):
            if self.value >= threshold:
                return label
        return "Deep in Debt"

    def is_in_debt(self) -> bool:
        return self.value < 0

    def can_afford(self, amount: float) -> bool:
        return self.value >= amount

    def get_debt_amount(self) -> float:
        return -self.value if self.value < 0 else 0

    def get_tier(self) -> int:
        for tier, threshold in ((5, 10000), (4, 5000), (3, 1000), (2, 0)):
            if self.value >= threshold:
                return tier
        return 1

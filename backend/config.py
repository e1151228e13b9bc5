"""
Game Configuration

Centralizes all tunable parameters for the Jones Town engine.
This replaces scattered "magic numbers" throughout the codebase.
"""

from dataclasses import dataclass, field
from typing import Dict


@dataclass
class TimeConfig:
    """Time-related constants."""
    time_units_per_week: int = 600  # Budget restored at every week rollover
    time_units_per_hour: int = 5


@dataclass
class GridConfig:
    """Board dimensions."""
    width: int = 5
    height: int = 5


@dataclass
class MeasureLimitsConfig:
    """Upper bounds for the bounded player measures."""
    max_health: int = 100
    max_happiness: int = 100
    max_education: int = 100


@dataclass
class EconomyConfig:
    """Prices, rents and stock quotes for the constant-price economy."""

    default_item_price: int = 100  # Fallback for unknown item ids (logged)
    restaurant_markup: float = 1.5  # Applied to meals and burgers at restaurants
    sell_ratio: float = 0.5  # Pawn shop pays this share of possession value
    weeks_per_month: int = 4

    rent_low_cost: int = 305
    rent_security: int = 445

    item_prices: Dict[str, int] = field(default_factory=lambda: {
        "casual-clothes": 50,
        "dress-clothes": 75,
        "business-suit": 150,
        "burger": 10,
        "groceries": 25,
        "prepared-meal": 15,
        "refrigerator": 500,
        "tv": 300,
        "stove": 400,
        "study-1hr": 15,
        "study-2hr": 30,
        "study-4hr": 60,
    })

    stock_prices: Dict[str, int] = field(default_factory=lambda: {
        "t-bills": 100,
        "gold": 450,
        "silver": 150,
        "pig-bellies": 15,
        "blue-chip": 50,
        "penny": 5,
    })
    default_stock: str = "blue-chip"


@dataclass
class RentPolicyConfig:
    """Penalties applied when a renter cannot cover the weekly rent."""
    missed_rent_health_penalty: int = 5
    missed_rent_happiness_penalty: int = 10


@dataclass
class JobConfig:
    """Career ladder and work session parameters."""

    max_job_rank: int = 9
    education_per_rank: int = 5  # Required education = rank * 5
    experience_per_rank: int = 10  # Required experience = rank * 10
    experience_gain_per_hour: int = 5

    apply_time_cost: int = 5
    quit_time_cost: int = 5
    work_period: int = 60  # Time units in one work session
    garnish_rate: float = 0.3  # Share of pay withheld toward rent debt
    health_loss_per_hour: float = 2.0


@dataclass
class ActionCostConfig:
    """Time costs (and cash costs where fixed) for street and building actions."""

    move_base: int = 5
    move_per_step: int = 2
    enter_building: int = 5
    exit_building: int = 0
    shop: int = 5
    sell: int = 5
    rent_home: int = 10
    pay_rent: int = 5

    study_time: int = 20
    study_cost: int = 15
    study_education_gain: int = 1

    relax_time: int = 24
    relax_effect_low_cost: int = 3  # Health and happiness per time unit rested
    relax_effect_security: int = 7


@dataclass
class VictoryConfig:
    """Default victory thresholds."""
    wealth: int = 10000
    health: int = 100
    happiness: int = 100
    career: int = 850
    education: int = 100


@dataclass
class StartingConfig:
    """Default starting stats for a new player."""
    cash: int = 1000
    health: int = 100
    happiness: int = 50
    education: int = 0
    career: int = 0


@dataclass
class GameConfig:
    """Master configuration for the whole game."""

    # Sub-configurations
    time: TimeConfig = field(default_factory=TimeConfig)
    grid: GridConfig = field(default_factory=GridConfig)
    measures: MeasureLimitsConfig = field(default_factory=MeasureLimitsConfig)
    economy: EconomyConfig = field(default_factory=EconomyConfig)
    rent: RentPolicyConfig = field(default_factory=RentPolicyConfig)
    jobs: JobConfig = field(default_factory=JobConfig)
    actions: ActionCostConfig = field(default_factory=ActionCostConfig)
    victory: VictoryConfig = field(default_factory=VictoryConfig)
    starting: StartingConfig = field(default_factory=StartingConfig)

    max_players: int = 4

    def __post_init__(self):
        """Validation and derived values."""
        if self.time.time_units_per_week <= 0:
            raise ValueError("time_units_per_week must be positive")
        if self.time.time_units_per_hour <= 0:
            raise ValueError("time_units_per_hour must be positive")

        if self.grid.width <= 0 or self.grid.height <= 0:
            raise ValueError("grid dimensions must be positive")

        if not (0.0 <= self.economy.sell_ratio <= 1.0):
            raise ValueError("sell_ratio must be in [0, 1]")
        if self.economy.restaurant_markup < 1.0:
            raise ValueError("restaurant_markup must be at least 1.0")
        if self.economy.default_stock not in self.economy.stock_prices:
            raise ValueError("default_stock must be a listed stock")

        if not (0.0 <= self.jobs.garnish_rate <= 1.0):
            raise ValueError("garnish_rate must be in [0, 1]")
        if self.jobs.max_job_rank <= 0:
            raise ValueError("max_job_rank must be positive")

        if self.max_players <= 0:
            raise ValueError("max_players must be positive")


# Global configuration instance
CONFIG = GameConfig()

"""
Economy Model

Constant-price economy: item prices, wages, rents, stock quotes and resale
values. Every method is a pure lookup or multiplication; nothing here holds
game state, so the game rebuilds a fresh model on initialize/deserialize.

Time-varying prices would plug in behind get_stock_price(week), which
currently ignores the week.
"""

import logging
import math
from typing import Dict, Optional

from config import CONFIG, EconomyConfig
from enums import BuildingType

logger = logging.getLogger(__name__)


class EconomyModel:
    """Pricing and wage tables for one game."""

    def __init__(self, config: Optional[EconomyConfig] = None):
        self.config = config or CONFIG.economy
        self._rents: Dict[BuildingType, int] = {
            BuildingType.LOW_COST_APARTMENT: self.config.rent_low_cost,
            BuildingType.SECURITY_APARTMENT: self.config.rent_security,
        }

    def get_price(self, item_id: str, building_type: BuildingType) -> int:
        base_price = self.config.item_prices.get(item_id)
        if base_price is None:
            logger.warning(
                f"Price not found for item: {item_id} at {building_type}, using default"
            )
            return self.config.default_item_price

        # Restaurants charge more for food than the supermarket
        if building_type == BuildingType.RESTAURANT and ("meal" in item_id or "burger" in item_id):
            return math.floor(base_price * self.config.restaurant_markup)
        return base_price

    def get_wage(self, job, hours_worked: float) -> float:
        # Negative hours give a negative wage; callers never pass them
        return job.wage_per_hour * hours_worked

    def get_rent(self, home_type: BuildingType) -> int:
        return self._rents.get(home_type, 0)

    def get_monthly_rent(self, home_type: BuildingType) -> int:
        return self.get_rent(home_type) * self.config.weeks_per_month

    def get_stock_price(self, week: int) -> int:
        return self.config.stock_prices[self.config.default_stock]

    def get_stock_price_by_id(self, stock_id: str) -> int:
        price = self.config.stock_prices.get(stock_id.lower())
        if price is None:
            return self.config.stock_prices[self.config.default_stock]
        return price

    def get_all_stock_prices(self) -> Dict[str, int]:
        return dict(self.config.stock_prices)

    def calculate_sell_price(self, possession) -> int:
        return math.floor(possession.value * self.config.sell_ratio)

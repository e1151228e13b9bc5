"""
Unit tests for EconomyModel

Tests cover:
- Item price lookup with the restaurant markup
- Unknown items falling back to the default price
- Rents, wages, stock quotes and pawn resale values
"""

import logging

from economy import EconomyModel
from enums import BuildingType
from jobs import JobSystem
from possessions import make_appliance, make_food


class TestEconomyModel:
    """Test suite for the constant-price economy"""

    def setup_method(self):
        self.economy = EconomyModel()

    def test_base_prices(self):
        assert self.economy.get_price("casual-clothes", BuildingType.CLOTHES_STORE) == 50
        assert self.economy.get_price("business-suit", BuildingType.CLOTHES_STORE) == 150
        assert self.economy.get_price("burger", BuildingType.SUPERMARKET) == 10

    def test_restaurant_markup_applies_to_meals_only(self):
        assert self.economy.get_price("burger", BuildingType.RESTAURANT) == 15
        assert self.economy.get_price("prepared-meal", BuildingType.RESTAURANT) == 22
        assert self.economy.get_price("groceries", BuildingType.RESTAURANT) == 25

    def test_unknown_item_uses_default_and_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            price = self.economy.get_price("hovercraft", BuildingType.PAWN_SHOP)

        assert price == 100
        assert "Price not found for item: hovercraft" in caplog.text

    def test_rents(self):
        assert self.economy.get_rent(BuildingType.LOW_COST_APARTMENT) == 305
        assert self.economy.get_rent(BuildingType.SECURITY_APARTMENT) == 445
        assert self.economy.get_rent(BuildingType.BANK) == 0
        assert self.economy.get_monthly_rent(BuildingType.LOW_COST_APARTMENT) == 1220

    def test_wage_is_rate_times_hours(self):
        cook = JobSystem().get_job_by_id("restaurant-cook")
        assert self.economy.get_wage(cook, 12) == 36
        assert self.economy.get_wage(cook, 0) == 0
        # Negative hours are not clamped
        assert self.economy.get_wage(cook, -2) == -6

    def test_stock_prices(self):
        assert self.economy.get_stock_price(1) == 50
        assert self.economy.get_stock_price(99) == 50
        assert self.economy.get_stock_price_by_id("GOLD") == 450
        assert self.economy.get_stock_price_by_id("unobtainium") == 50
        assert self.economy.get_all_stock_prices()["penny"] == 5

    def test_sell_price_is_floored_half(self):
        assert self.economy.calculate_sell_price(make_food("Pizza", 15)) == 7
        assert self.economy.calculate_sell_price(make_appliance("TV", 300)) == 150

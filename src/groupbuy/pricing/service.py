"""Pricing domain service: the engine plus the configured order pricing policy."""
from __future__ import annotations

from typing import Any, Protocol

from groupbuy.core.config import Settings
from groupbuy.pricing import engine
from groupbuy.pricing.engine import PriceQuote, PricingPolicy


class IPricingService(Protocol):
    @property
    def policy(self) -> PricingPolicy:
        ...

    def quote(self, starting_price: Any, final_price: Any, target_quantity: Any, current_quantity: Any) -> PriceQuote:
        ...

    def order_unit_price(
        self, starting_price: Any, final_price: Any, target_quantity: Any, current_quantity: Any
    ) -> Any:
        ...


class PricingService:
    def __init__(self, settings: Settings):
        self._policy = PricingPolicy(settings.order_pricing)

    @property
    def policy(self) -> PricingPolicy:
        return self._policy

    def quote(self, starting_price: Any, final_price: Any, target_quantity: Any, current_quantity: Any) -> PriceQuote:
        return engine.quote(starting_price, final_price, target_quantity, current_quantity)

    def order_unit_price(
        self, starting_price: Any, final_price: Any, target_quantity: Any, current_quantity: Any
    ) -> Any:
        return engine.order_unit_price(self._policy, starting_price, final_price, target_quantity, current_quantity)

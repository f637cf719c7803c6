"""Pricing: stateless quote query."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from groupbuy.core.errors import ValidationError
from groupbuy.ddd import Query
from groupbuy.pricing import engine
from groupbuy.pricing.engine import PricingPolicy
from groupbuy.pricing.service import IPricingService


@dataclass
class QuotePrice(Query):
    starting_price: float
    final_price: float
    target_quantity: int
    current_quantity: int = 0
    policy: Optional[str] = None


class QuotePriceHandler:
    def __init__(self, pricing_service: IPricingService):
        self._pricing = pricing_service

    def __call__(self, query: QuotePrice) -> dict:
        if query.policy is None:
            policy = self._pricing.policy
        else:
            try:
                policy = PricingPolicy(query.policy.lower())
            except ValueError:
                raise ValidationError(f"unknown pricing policy {query.policy!r}") from None
        result = self._pricing.quote(
            query.starting_price, query.final_price, query.target_quantity, query.current_quantity
        ).to_dict()
        result["policy"] = policy.value
        result["order_unit_price"] = engine.order_unit_price(
            policy, query.starting_price, query.final_price, query.target_quantity, query.current_quantity
        )
        return result

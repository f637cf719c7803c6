"""Group-buy pricing: linear price interpolation and the figures derived from campaign progress."""
from groupbuy.pricing.engine import (
    PriceQuote,
    PricingPolicy,
    current_price,
    discount_percent,
    estimated_revenue,
    is_target_reached,
    order_unit_price,
    progress_bar_percent,
    progress_percent,
    quote,
    remaining_quantity,
    round_half_up,
)

__all__ = [
    "PriceQuote",
    "PricingPolicy",
    "current_price",
    "discount_percent",
    "estimated_revenue",
    "is_target_reached",
    "order_unit_price",
    "progress_bar_percent",
    "progress_percent",
    "quote",
    "remaining_quantity",
    "round_half_up",
]

"""
Group-buy pricing engine.

A campaign's unit price moves in a straight line from ``starting_price``
(nobody has joined) to ``final_price`` (``target_quantity`` units committed)
and stays there once the target is passed. Every function here is pure and
never raises: malformed numbers degrade to a defined fallback instead.
"""
from __future__ import annotations

import enum
import math
from dataclasses import asdict, dataclass
from typing import Any


class PricingPolicy(str, enum.Enum):
    """Which unit price a newly placed order is charged."""

    TIERED = "tiered"  # starting price until the target is reached, then final price
    LINEAR = "linear"  # the interpolated current price


def _number(value: Any) -> float:
    """float(value), or NaN when value is not numeric."""
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def round_half_up(value: float, places: int = 2) -> float:
    """Round to ``places`` decimals with halves rounded up.

    Values too large to scale are already coarser than a cent and come back unchanged.
    """
    scale = 10**places
    scaled = value * scale + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / scale


def current_price(starting_price: Any, final_price: Any, target_quantity: Any, current_quantity: Any) -> Any:
    """
    Unit price after ``current_quantity`` units have been committed.

    Interpolates linearly between the two endpoints, caps progress at the
    target, clamps into [min(start, final), max(start, final)] and rounds to
    cents. A zero target or any non-finite input returns ``starting_price``
    unchanged.
    """
    s, f, t, x = (_number(v) for v in (starting_price, final_price, target_quantity, current_quantity))
    if not all(math.isfinite(v) for v in (s, f, t, x)):
        return starting_price
    t = max(0.0, t)
    x = max(0.0, x)
    if t == 0:
        return starting_price

    progress = min(x, t)
    if progress == t:
        y = f
    else:
        slope = (f - s) / t
        y = s + slope * progress
        if math.isnan(y):
            return starting_price
    clamped = min(max(y, min(s, f)), max(s, f))
    return round_half_up(clamped)


def discount_percent(starting_price: Any, final_price: Any) -> int:
    """
    Whole-number "save X%" figure between the two price endpoints.

    Negative when the final price is above the starting price. A starting
    price that is zero, negative or non-numeric yields 0.
    """
    s = _number(starting_price)
    f = _number(final_price)
    if not (math.isfinite(s) and math.isfinite(f)) or s <= 0:
        return 0
    ratio = (s - f) / s * 100
    if not math.isfinite(ratio):
        return 0
    return int(math.floor(ratio + 0.5))


def progress_percent(current_quantity: Any, target_quantity: Any) -> float:
    """current / target * 100, not clamped (137.5 means the target was passed)."""
    c = _number(current_quantity)
    t = _number(target_quantity)
    if not (math.isfinite(c) and math.isfinite(t)):
        return 0.0
    if t <= 0:
        # a zero target is reached from the start
        return 100.0
    percent = c / t * 100
    return percent if math.isfinite(percent) else 0.0


def progress_bar_percent(current_quantity: Any, target_quantity: Any) -> float:
    """progress_percent clamped into [0, 100] for bounded progress bars."""
    return min(max(progress_percent(current_quantity, target_quantity), 0.0), 100.0)


def is_target_reached(current_quantity: Any, target_quantity: Any) -> bool:
    c = _number(current_quantity)
    t = _number(target_quantity)
    if math.isnan(c) or math.isnan(t):
        return False
    return c >= t


def remaining_quantity(current_quantity: Any, target_quantity: Any) -> int:
    """Units still needed before the final price applies; 0 once the target is reached."""
    c = _number(current_quantity)
    t = _number(target_quantity)
    if not (math.isfinite(c) and math.isfinite(t)):
        return 0
    return max(0, math.ceil(t - max(c, 0.0)))


def order_unit_price(
    policy: PricingPolicy | str,
    starting_price: Any,
    final_price: Any,
    target_quantity: Any,
    current_quantity: Any,
) -> Any:
    """Unit price charged for an order placed while ``current_quantity`` units are committed."""
    if PricingPolicy(policy) is PricingPolicy.LINEAR:
        return current_price(starting_price, final_price, target_quantity, current_quantity)
    if is_target_reached(current_quantity, target_quantity):
        return final_price
    return starting_price


def estimated_revenue(starting_price: Any, final_price: Any, target_quantity: Any, current_quantity: Any) -> float:
    """Seller dashboard figure: committed units times the tier price they currently fall in."""
    c = _number(current_quantity)
    tier = order_unit_price(PricingPolicy.TIERED, starting_price, final_price, target_quantity, current_quantity)
    value = c * _number(tier)
    if not math.isfinite(value):
        return 0.0
    return round_half_up(value)


@dataclass(frozen=True)
class PriceQuote:
    """Every derived pricing figure for one (starting, final, target, current) tuple."""

    current_price: Any
    discount_percent: int
    progress_percent: float
    progress_bar_percent: float
    target_reached: bool
    remaining_quantity: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def quote(starting_price: Any, final_price: Any, target_quantity: Any, current_quantity: Any) -> PriceQuote:
    return PriceQuote(
        current_price=current_price(starting_price, final_price, target_quantity, current_quantity),
        discount_percent=discount_percent(starting_price, final_price),
        progress_percent=progress_percent(current_quantity, target_quantity),
        progress_bar_percent=progress_bar_percent(current_quantity, target_quantity),
        target_reached=is_target_reached(current_quantity, target_quantity),
        remaining_quantity=remaining_quantity(current_quantity, target_quantity),
    )

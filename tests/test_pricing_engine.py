import math
from decimal import Decimal

import pytest

from groupbuy.pricing import (
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

CASES = [
    (100.0, 50.0, 10),
    (299.99, 199.99, 25),
    (19.99, 14.49, 7),
    (50.0, 100.0, 4),  # final above starting
    (12.5, 12.5, 3),
]


def _decimals(value: float) -> int:
    return -Decimal(repr(value)).normalize().as_tuple().exponent


@pytest.mark.parametrize("s,f,t", CASES)
def test_no_buyers_gives_starting_price(s, f, t):
    assert current_price(s, f, t, 0) == s


@pytest.mark.parametrize("s,f,t", CASES)
def test_target_gives_final_price(s, f, t):
    assert current_price(s, f, t, t) == f


@pytest.mark.parametrize("s,f,t", CASES)
def test_no_extrapolation_past_target(s, f, t):
    at_target = current_price(s, f, t, t)
    for x in (t + 1, t * 2, t * 100):
        assert current_price(s, f, t, x) == at_target


@pytest.mark.parametrize("s,f,t", [c for c in CASES if c[1] < c[0]])
def test_price_never_increases_with_progress(s, f, t):
    prices = [current_price(s, f, t, x) for x in range(t + 1)]
    assert all(later <= earlier for earlier, later in zip(prices, prices[1:]))


@pytest.mark.parametrize("s,f,t", CASES)
def test_price_stays_between_endpoints(s, f, t):
    for x in range(0, t * 3):
        assert min(s, f) <= current_price(s, f, t, x) <= max(s, f)


@pytest.mark.parametrize("s,f,t", CASES)
def test_price_has_at_most_two_decimals(s, f, t):
    for x in range(0, t + 2):
        assert _decimals(current_price(s, f, t, x)) <= 2


@pytest.mark.parametrize("x", [0, 1, 10, 1000])
def test_zero_target_returns_starting_price(x):
    assert current_price(100, 50, 0, x) == 100


def test_concrete_scenario():
    assert current_price(100, 50, 10, 0) == 100.00
    assert current_price(100, 50, 10, 5) == 75.00
    assert current_price(100, 50, 10, 10) == 50.00
    assert current_price(100, 50, 10, 20) == 50.00


def test_rounds_to_cents():
    assert current_price(10, 9, 3, 1) == 9.67
    assert current_price(10, 9, 3, 2) == 9.33


def test_final_above_starting_interpolates_upward():
    assert current_price(50, 100, 10, 5) == 75.0
    assert current_price(50, 100, 10, 50) == 100.0


def test_negative_quantities_are_floored():
    assert current_price(100, 50, 10, -5) == 100
    assert current_price(100, 50, -10, 5) == 100


@pytest.mark.parametrize(
    "args",
    [
        (100, 50, math.inf, 5),
        (100, 50, 10, math.nan),
        (100, math.inf, 10, 5),
        (100, 50, 10, None),
        (100, "fifty", 10, 5),
    ],
)
def test_non_finite_input_returns_starting_price(args):
    assert current_price(*args) == 100


def test_non_finite_starting_price_is_returned_unchanged():
    assert math.isnan(current_price(math.nan, 50, 10, 5))


def test_discount_percent():
    assert discount_percent(100, 50) == 50
    assert discount_percent(299.99, 199.99) == 33
    assert discount_percent(100, 100) == 0
    assert discount_percent(50, 100) == -100


def test_discount_percent_without_starting_price():
    assert discount_percent(0, 50) == 0


def test_progress_percent():
    assert progress_percent(5, 10) == 50
    assert progress_percent(0, 10) == 0
    assert progress_percent(15, 10) == 150


def test_progress_percent_with_zero_target():
    assert progress_percent(3, 0) == 100.0


def test_progress_bar_is_clamped():
    assert progress_bar_percent(15, 10) == 100.0
    assert progress_bar_percent(5, 10) == 50.0
    assert progress_bar_percent(-3, 10) == 0.0


def test_target_reached():
    assert is_target_reached(10, 10) is True
    assert is_target_reached(9, 10) is False
    assert is_target_reached(11, 10) is True


def test_remaining_quantity():
    assert remaining_quantity(3, 10) == 7
    assert remaining_quantity(10, 10) == 0
    assert remaining_quantity(25, 10) == 0


def test_tiered_order_price_snaps_at_target():
    assert order_unit_price(PricingPolicy.TIERED, 100, 50, 10, 0) == 100
    assert order_unit_price(PricingPolicy.TIERED, 100, 50, 10, 9) == 100
    assert order_unit_price(PricingPolicy.TIERED, 100, 50, 10, 10) == 50


def test_linear_order_price_follows_current_price():
    for x in (0, 3, 5, 10, 12):
        assert order_unit_price("linear", 100, 50, 10, x) == current_price(100, 50, 10, x)


def test_unknown_policy_is_rejected():
    with pytest.raises(ValueError):
        order_unit_price("auction", 100, 50, 10, 5)


def test_estimated_revenue_uses_tier_price():
    assert estimated_revenue(100, 50, 10, 4) == 400.0
    assert estimated_revenue(100, 50, 10, 12) == 600.0
    assert estimated_revenue(100, 50, 10, 0) == 0.0


def test_quote_bundles_derived_values():
    q = quote(100, 50, 10, 5)
    assert q.to_dict() == {
        "current_price": 75.0,
        "discount_percent": 50,
        "progress_percent": 50.0,
        "progress_bar_percent": 50.0,
        "target_reached": False,
        "remaining_quantity": 5,
    }


def test_round_half_up():
    assert round_half_up(0.125) == 0.13
    assert round_half_up(74.994) == 74.99
    assert round_half_up(1e307) == 1e307


def test_huge_prices_do_not_overflow():
    assert current_price(1e307, 1e306, 10, 5) == pytest.approx(5.5e306)
    assert current_price(1e307, 1e306, 10, 10) == pytest.approx(1e306)
    assert estimated_revenue(1e307, 1e306, 10, 5) == pytest.approx(5e307)
    assert quote(1e307, 1e306, 10, 5).discount_percent == 90


def test_overflowing_intermediates_fall_back():
    # infinite slope with no progress
    assert current_price(-1e308, 1e308, 10, 0) == -1e308
    assert discount_percent(1e-300, 1e10) == 0
    assert progress_percent(1e308, 1e-10) == 0.0
    assert progress_percent(10**400, 10) == 0.0
    assert current_price(100, 50, 10**400, 5) == 100

from __future__ import annotations

import pytest

from tmctol import DEFAULT_CONFIG, create_system
from tmctol.core.router import Router
from tmctol.core.types import Route
from tmctol.errors import (
    BelowMinimum,
    BootstrapTooSmall,
    InvalidConfig,
    NoRoute,
    PoolNotInitialized,
    SlippageExceeded,
)
from tmctol.kernels.fixed_point import PPM, PRECISION

P = PRECISION


def _bootstrapped():
    system = create_system()
    system.router.buy(100 * P)
    return system


def test_router_fee_validation():
    system = create_system()
    with pytest.raises(InvalidConfig):
        Router(
            system.pool,
            system.minter,
            system.fee_burner,
            router_fee_ppm=PPM,
            min_trade_amount=0,
            min_bootstrap_amount=0,
        )


def test_router_fee_is_floored():
    router = create_system().router
    assert router.router_fee(100 * P) == P // 2
    assert router.router_fee(199) == 0


def test_buy_below_minimum_is_rejected():
    system = create_system()
    with pytest.raises(BelowMinimum):
        system.router.buy(DEFAULT_CONFIG.min_swap_amount - 1)
    with pytest.raises(BelowMinimum):
        system.router.buy(0)


def test_bootstrap_requires_minimum_and_leaves_state_untouched():
    system = create_system()
    before = system.audit()
    with pytest.raises(BootstrapTooSmall):
        system.router.buy(50 * P)
    assert system.audit() == before


def test_bootstrap_buy_mints_and_seeds_pool():
    system = create_system()
    res = system.router.buy(100 * P)

    assert res.route is Route.CURVE
    assert res.router_fee == P // 2
    assert res.foreign_net == 100 * P - P // 2
    assert res.native_out > 0
    assert res.price_after > res.price_before
    assert len(res.allocation) == len(DEFAULT_CONFIG.buckets)
    assert system.pool.has_liquidity()
    # Fee arrived before any liquidity existed.
    assert system.fee_burner.buffer_b == P // 2
    assert system.check_invariants() == []


def test_buy_with_impossible_minimum_and_no_pool_has_no_route():
    system = create_system()
    before = system.audit()
    with pytest.raises(NoRoute):
        system.router.buy(100 * P, min_native_out=10**30)
    assert system.audit() == before


def test_cheaper_pool_wins_after_bootstrap():
    system = _bootstrapped()
    res = system.router.buy(10 * P)
    assert res.route is Route.POOL
    assert res.price_impact_ppm is not None
    assert res.allocation == ()
    # The buffered foreign fees crossed the threshold and were burned.
    assert system.fee_burner.buffer_b == 0
    assert system.fee_burner.total_burned > 0
    assert system.check_invariants() == []


def test_failed_execution_rolls_back_fee_handling():
    system = _bootstrapped()
    net = 10 * P - system.router.router_fee(10 * P)
    quote = system.pool.get_out_native(net)
    before = system.audit()

    # The quote is exact, but forwarding the fee swaps first and moves the pool.
    with pytest.raises(SlippageExceeded):
        system.router.buy(10 * P, min_native_out=quote)

    assert system.audit() == before


def test_sell_before_pool_exists():
    system = create_system()
    with pytest.raises(PoolNotInitialized):
        system.router.sell(P)


def test_sell_swaps_net_through_pool_and_burns_fee():
    system = _bootstrapped()
    supply = system.minter.supply
    res = system.router.sell(10 * P)

    assert res.route is Route.POOL
    assert res.router_fee == 10 * P * DEFAULT_CONFIG.fee_router_ppm // PPM
    assert res.native_net == 10 * P - res.router_fee
    assert res.foreign_out > 0
    assert res.price_after < res.price_before
    assert system.minter.supply == supply - res.router_fee
    assert system.check_invariants() == []


def test_sell_below_minimum_value_is_rejected():
    system = _bootstrapped()
    with pytest.raises(BelowMinimum):
        system.router.sell(P // 100)
    with pytest.raises(BelowMinimum):
        system.router.sell(0)


def test_sell_slippage_rolls_back_fee_burn():
    system = _bootstrapped()
    before = system.audit()
    with pytest.raises(SlippageExceeded):
        system.router.sell(10 * P, min_foreign_out=10**30)
    assert system.audit() == before

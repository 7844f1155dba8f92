from __future__ import annotations

import logging

import pytest

from tmctol.core.bucket import LiquidityBucket
from tmctol.core.pool import ConstantProductPool
from tmctol.core.types import Applied, Deferred, PartiallyApplied, Skipped
from tmctol.errors import InvalidAmount, NoLiquidity
from tmctol.kernels.fixed_point import PRECISION

P = PRECISION


def test_zero_deposit_is_skipped():
    bucket = LiquidityBucket("A", ConstantProductPool())
    res = bucket.deposit(0, 0)
    assert isinstance(res.deposit, Skipped)
    assert isinstance(res.zap, Skipped)
    assert bucket.owned_lp == 0


def test_negative_deposit_rejected():
    with pytest.raises(InvalidAmount):
        LiquidityBucket("A", ConstantProductPool()).deposit(-1, 0)


def test_one_sided_deposit_into_empty_pool_is_buffered_then_paired():
    pool = ConstantProductPool()
    bucket = LiquidityBucket("A", pool)

    res = bucket.deposit(P, 0)
    assert isinstance(res.deposit, Deferred)
    assert (bucket.buffer_a, bucket.buffer_b) == (P, 0)
    assert not pool.has_liquidity()

    res = bucket.deposit(0, 4 * P)
    assert isinstance(res.deposit, Applied)
    assert res.lp_minted == 2 * P
    assert pool.reserves() == (P, 4 * P)
    assert (bucket.buffer_a, bucket.buffer_b) == (0, 0)
    assert bucket.owned_lp == pool.lp_supply == 2 * P


def test_zap_deposits_matched_pair_and_swaps_foreign_leftover():
    pool = ConstantProductPool(fee_ppm=0)
    pool.add_liquidity(100 * P, 100 * P)
    bucket = LiquidityBucket("A", pool)

    res = bucket.deposit(10 * P, 30 * P)

    assert res.lp_minted == 10 * P
    assert isinstance(res.deposit, PartiallyApplied)
    assert res.deposit.remainder == 20 * P
    assert isinstance(res.zap, Applied)
    assert res.zap.used == 20 * P
    assert res.zap.produced == 16_923_076_923_076

    # Zap output is held for the next deposit, the foreign side is spent.
    assert bucket.buffer_a == 16_923_076_923_076
    assert bucket.buffer_b == 0
    assert bucket.contributed_a == 10 * P
    assert bucket.contributed_b == 30 * P
    assert pool.reserves() == (110 * P - 16_923_076_923_076, 130 * P)


def test_native_leftover_stays_buffered():
    pool = ConstantProductPool()
    pool.add_liquidity(100 * P, 100 * P)
    bucket = LiquidityBucket("A", pool)

    res = bucket.deposit(30 * P, 10 * P)
    assert res.lp_minted == 10 * P
    assert isinstance(res.zap, Skipped)
    assert (bucket.buffer_a, bucket.buffer_b) == (20 * P, 0)


def test_failed_zap_swap_is_deferred_and_logged(caplog, monkeypatch):
    pool = ConstantProductPool()
    pool.add_liquidity(100 * P, 100 * P)
    bucket = LiquidityBucket("A", pool)

    def failing_swap(foreign_in, min_native_out=0):
        raise NoLiquidity("pool drained")

    monkeypatch.setattr(pool, "swap_foreign_to_native", failing_swap)
    with caplog.at_level(logging.WARNING, logger="tmctol.core.bucket"):
        res = bucket.deposit(0, P)

    assert isinstance(res.zap, Deferred)
    assert res.zap.reason == "pool drained"
    assert bucket.buffer_b == P
    assert bucket.owned_lp == 0
    assert pool.reserves() == (100 * P, 100 * P)
    assert "zap swap deferred" in caplog.text


def test_owned_lp_never_decreases_across_deposits():
    pool = ConstantProductPool(fee_ppm=3_000)
    bucket = LiquidityBucket("A", pool)
    seen = 0
    for native, foreign in [(5 * P, 7 * P), (P, 0), (0, 3 * P), (2 * P, 2 * P), (0, 0)]:
        bucket.deposit(native, foreign)
        assert bucket.owned_lp >= seen
        seen = bucket.owned_lp
    assert bucket.owned_lp <= pool.lp_supply


def test_snapshot_and_restore():
    pool = ConstantProductPool()
    pool.add_liquidity(100 * P, 100 * P)
    bucket = LiquidityBucket("B", pool)
    cp = bucket.checkpoint()
    bucket.deposit(3 * P, 3 * P)
    snap = bucket.snapshot()
    assert snap.bucket_id == "B"
    assert snap.owned_lp == 3 * P
    bucket.restore(cp)
    assert bucket.snapshot().owned_lp == 0


def test_zap_dust_is_absorbed_by_the_pool():
    pool = ConstantProductPool()
    pool.add_liquidity(1_000, 10**18)
    bucket = LiquidityBucket("A", pool)

    res = bucket.deposit(0, 1)

    assert res.zap == Applied(used=1, produced=0)
    assert (bucket.buffer_a, bucket.buffer_b) == (0, 0)
    assert bucket.contributed_b == 1
    assert pool.reserves() == (1_000, 10**18 + 1)

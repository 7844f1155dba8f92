"""Audit snapshot and invariant checks for a wired system.

Each `inv_*` function returns True when the invariant holds and `check_all()`
returns the ids of violated invariants (empty = all pass). These are checked
at operation boundaries only.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from ..kernels.fixed_point import PPM
from .fee_burner import FeeBurner
from .minter import CurveMinter
from .pool import ConstantProductPool
from .types import BucketBalance


@dataclass(frozen=True)
class AuditReport:
    supply: int
    total_minted: int
    total_burned: int
    curve_price: int
    pool_price: int | None
    reserve_native: int
    reserve_foreign: int
    lp_supply: int
    owned_lp: int
    fee_buffer_native: int
    fee_buffer_foreign: int
    buckets: Tuple[BucketBalance, ...]


def build_report(pool: ConstantProductPool, minter: CurveMinter, fee_burner: FeeBurner) -> AuditReport:
    tol = minter.allocator
    return AuditReport(
        supply=minter.supply,
        total_minted=minter.total_minted,
        total_burned=fee_burner.total_burned,
        curve_price=minter.price(),
        pool_price=pool.price() if pool.has_liquidity() else None,
        reserve_native=pool.reserve_a,
        reserve_foreign=pool.reserve_b,
        lp_supply=pool.lp_supply,
        owned_lp=tol.total_owned_lp(),
        fee_buffer_native=fee_burner.buffer_a,
        fee_buffer_foreign=fee_burner.buffer_b,
        buckets=tuple(b.snapshot() for b in tol.buckets),
    )


Components = Tuple[ConstantProductPool, CurveMinter, FeeBurner]


def inv_mass_conservation(c: Components) -> bool:
    _, minter, fee_burner = c
    return minter.supply + fee_burner.total_burned == minter.total_minted


def inv_minter_shares(c: Components) -> bool:
    _, minter, _ = c
    return minter.user_ppm + minter.treasury_ppm == PPM


def inv_bucket_shares(c: Components) -> bool:
    _, minter, _ = c
    return sum(minter.allocator.shares_ppm) == PPM


def inv_pool_liquidity_coherent(c: Components) -> bool:
    pool, _, _ = c
    if pool.reserve_a == 0 and pool.reserve_b == 0:
        return pool.lp_supply == 0
    return pool.reserve_a > 0 and pool.reserve_b > 0 and pool.lp_supply > 0


def inv_owned_lp_bounded(c: Components) -> bool:
    pool, minter, _ = c
    return minter.allocator.total_owned_lp() <= pool.lp_supply


def inv_non_negative(c: Components) -> bool:
    pool, minter, fee_burner = c
    values = [pool.reserve_a, pool.reserve_b, pool.lp_supply, minter.supply, fee_burner.buffer_a, fee_burner.buffer_b]
    for b in minter.allocator.buckets:
        values.extend(b.checkpoint())
    return all(v >= 0 for v in values)


ALL_INVARIANTS: Dict[str, Callable[[Components], bool]] = {
    "mass_conservation": inv_mass_conservation,
    "minter_shares": inv_minter_shares,
    "bucket_shares": inv_bucket_shares,
    "pool_liquidity_coherent": inv_pool_liquidity_coherent,
    "owned_lp_bounded": inv_owned_lp_bounded,
    "non_negative": inv_non_negative,
}


def check_all(pool: ConstantProductPool, minter: CurveMinter, fee_burner: FeeBurner) -> list[str]:
    c = (pool, minter, fee_burner)
    return [name for name, fn in ALL_INVARIANTS.items() if not fn(c)]

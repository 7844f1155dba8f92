"""
Liquidity bucket: one independently tracked cell of treasury-owned liquidity.

A bucket stages incoming native/foreign amounts in its buffers and converts
them into pool liquidity with a "zap":

1. deposit the largest pair matching the pool's current reserve ratio
2. swap the leftover foreign through the pool into native
3. keep whatever was not consumed (including the zap output) buffered for the
   next deposit

Buffers are internal working state; they are never counted as owned liquidity
and never paid out. `owned_lp` only grows: the core never redeems bucket shares.

Sub-step failures are reported as `Deferred` outcomes and logged; they never
propagate to the minting caller.
"""

from __future__ import annotations

import logging
from typing import Tuple

from ..errors import InvalidAmount, TmctolError
from ..kernels.cpmm_ppm import ratio_matched_pair
from .pool import ConstantProductPool
from .types import (
    Applied,
    BucketBalance,
    BucketDepositResult,
    Deferred,
    Outcome,
    PartiallyApplied,
    Skipped,
)

logger = logging.getLogger(__name__)


class LiquidityBucket:
    def __init__(self, bucket_id: str, pool: ConstantProductPool) -> None:
        self.bucket_id = bucket_id
        self.pool = pool
        self.buffer_a = 0
        self.buffer_b = 0
        self.owned_lp = 0
        self.contributed_a = 0
        self.contributed_b = 0

    def snapshot(self) -> BucketBalance:
        return BucketBalance(
            bucket_id=self.bucket_id,
            buffer_native=self.buffer_a,
            buffer_foreign=self.buffer_b,
            owned_lp=self.owned_lp,
            contributed_native=self.contributed_a,
            contributed_foreign=self.contributed_b,
        )

    def deposit(self, native: int, foreign: int) -> BucketDepositResult:
        """Queue `(native, foreign)` and convert as much as possible into liquidity."""
        if native < 0 or foreign < 0:
            raise InvalidAmount(f"amounts cannot be negative: ({native}, {foreign})")
        if native == 0 and foreign == 0:
            return self._result(0, 0, 0, Skipped(), Skipped())

        if not self.pool.has_liquidity():
            return self._initialize_pool(self.buffer_a + native, self.buffer_b + foreign)
        return self._zap(self.buffer_a + native, self.buffer_b + foreign)

    # -- Internals -----------------------------------------------------------

    def _result(self, lp_minted: int, native_used: int, foreign_used: int, deposit: Outcome, zap: Outcome) -> BucketDepositResult:
        return BucketDepositResult(
            bucket_id=self.bucket_id,
            lp_minted=lp_minted,
            native_used=native_used,
            foreign_used=foreign_used,
            buffer_native=self.buffer_a,
            buffer_foreign=self.buffer_b,
            deposit=deposit,
            zap=zap,
        )

    def _initialize_pool(self, total_a: int, total_b: int) -> BucketDepositResult:
        if total_a == 0 or total_b == 0:
            self.buffer_a, self.buffer_b = total_a, total_b
            return self._result(0, 0, 0, Deferred("one-sided amounts, waiting for both assets"), Skipped())

        try:
            res = self.pool.add_liquidity(total_a, total_b)
        except TmctolError as exc:
            logger.warning("bucket %s pool initialization deferred: %s", self.bucket_id, exc)
            self.buffer_a, self.buffer_b = total_a, total_b
            return self._result(0, 0, 0, Deferred(str(exc)), Skipped())

        self.owned_lp += res.lp_minted
        self.contributed_a += res.native_used
        self.contributed_b += res.foreign_used
        self.buffer_a, self.buffer_b = res.native_rest, res.foreign_rest
        return self._result(
            res.lp_minted,
            res.native_used,
            res.foreign_used,
            Applied(used=res.native_used + res.foreign_used, produced=res.lp_minted),
            Skipped(),
        )

    def _deposit_matched(self, rest_a: int, rest_b: int) -> Tuple[int, int, int, Outcome]:
        """Deposit the ratio-matched part. Returns (lp, used_a, used_b, outcome)."""
        if rest_a == 0 or rest_b == 0:
            return 0, 0, 0, Skipped()

        add_a, add_b = ratio_matched_pair(
            amount_a=rest_a,
            amount_b=rest_b,
            reserve_a=self.pool.reserve_a,
            reserve_b=self.pool.reserve_b,
        )
        if add_a == 0 or add_b == 0:
            return 0, 0, 0, Deferred("ratio-matched pair rounds to zero")

        try:
            res = self.pool.add_liquidity(add_a, add_b)
        except TmctolError as exc:
            logger.warning("bucket %s add_liquidity deferred: %s", self.bucket_id, exc)
            return 0, 0, 0, Deferred(str(exc))

        used = res.native_used + res.foreign_used
        remainder = (rest_a - res.native_used) + (rest_b - res.foreign_used)
        outcome: Outcome = Applied(used=used, produced=res.lp_minted)
        if remainder > 0:
            outcome = PartiallyApplied(used=used, remainder=remainder, produced=res.lp_minted)
        return res.lp_minted, res.native_used, res.foreign_used, outcome

    def _zap(self, total_a: int, total_b: int) -> BucketDepositResult:
        lp_minted, native_used, foreign_used, deposit = self._deposit_matched(total_a, total_b)
        rest_a = total_a - native_used
        rest_b = total_b - foreign_used

        zap: Outcome = Skipped()
        if rest_b > 0 and self.pool.has_liquidity():
            try:
                swap = self.pool.swap_foreign_to_native(rest_b, 0)
            except TmctolError as exc:
                logger.warning("bucket %s zap swap deferred: %s", self.bucket_id, exc)
                zap = Deferred(str(exc))
            else:
                # Swapped foreign now sits in the reserves; its native output
                # stays buffered until the next deposit pairs it.
                zap = Applied(used=rest_b, produced=swap.amount_out)
                rest_a += swap.amount_out
                foreign_used += rest_b
                rest_b = 0

        self.owned_lp += lp_minted
        self.contributed_a += native_used
        self.contributed_b += foreign_used
        self.buffer_a, self.buffer_b = rest_a, rest_b
        return self._result(lp_minted, native_used, foreign_used, deposit, zap)

    # -- Checkpointing -------------------------------------------------------

    def checkpoint(self) -> Tuple[int, int, int, int, int]:
        return self.buffer_a, self.buffer_b, self.owned_lp, self.contributed_a, self.contributed_b

    def restore(self, cp: Tuple[int, int, int, int, int]) -> None:
        self.buffer_a, self.buffer_b, self.owned_lp, self.contributed_a, self.contributed_b = cp

    def __repr__(self) -> str:
        return f"LiquidityBucket({self.bucket_id!r}, owned_lp={self.owned_lp})"

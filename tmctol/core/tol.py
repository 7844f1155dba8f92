"""
Treasury-owned liquidity (TOL) allocator.

Splits each mint allocation across an ordered list of buckets by ppm shares.
Every bucket but the last receives `floor(total * share / PPM)`; the last one
receives the exact remainder, so no rounding dust is lost for any bucket count.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from ..errors import InvalidConfig
from ..kernels.fixed_point import PPM, mul_div
from .bucket import LiquidityBucket
from .pool import ConstantProductPool
from .types import BucketBalance, BucketDepositResult


def split_by_shares(total: int, shares_ppm: Sequence[int]) -> List[int]:
    """Floor-split `total` by ppm shares, remainder to the last entry."""
    parts = [mul_div(total, ppm, PPM) for ppm in shares_ppm[:-1]]
    parts.append(total - sum(parts))
    return parts


class TreasuryLiquidityAllocator:
    def __init__(self, pool: ConstantProductPool, bucket_shares: Sequence[Tuple[str, int]]) -> None:
        if not bucket_shares:
            raise InvalidConfig("at least one bucket is required")
        ids = [bucket_id for bucket_id, _ in bucket_shares]
        if len(set(ids)) != len(ids):
            raise InvalidConfig(f"bucket ids must be unique: {ids}")
        total = sum(ppm for _, ppm in bucket_shares)
        if total != PPM:
            raise InvalidConfig(f"bucket shares must sum to {PPM}, got {total}")

        self.pool = pool
        self.shares_ppm: Tuple[int, ...] = tuple(ppm for _, ppm in bucket_shares)
        self.buckets: Tuple[LiquidityBucket, ...] = tuple(LiquidityBucket(bucket_id, pool) for bucket_id in ids)

    def allocate(self, total_native: int, total_foreign: int) -> Tuple[BucketDepositResult, ...]:
        """Fan `(total_native, total_foreign)` out to the buckets. Never raises on bucket failures."""
        natives = split_by_shares(total_native, self.shares_ppm)
        foreigns = split_by_shares(total_foreign, self.shares_ppm)
        return tuple(
            bucket.deposit(native, foreign)
            for bucket, native, foreign in zip(self.buckets, natives, foreigns)
        )

    def bucket(self, bucket_id: str) -> LiquidityBucket:
        for b in self.buckets:
            if b.bucket_id == bucket_id:
                return b
        raise KeyError(bucket_id)

    def snapshot(self) -> Dict[str, BucketBalance]:
        return {b.bucket_id: b.snapshot() for b in self.buckets}

    def total_owned_lp(self) -> int:
        return sum(b.owned_lp for b in self.buckets)

    def total_buffered(self) -> Tuple[int, int]:
        return sum(b.buffer_a for b in self.buckets), sum(b.buffer_b for b in self.buckets)

    def checkpoint(self) -> Tuple[tuple, ...]:
        return tuple(b.checkpoint() for b in self.buckets)

    def restore(self, cp: Tuple[tuple, ...]) -> None:
        for b, bcp in zip(self.buckets, cp):
            b.restore(bcp)

"""
Fee buffer / burner.

Router fees arrive in the input asset of each trade. Native fees are burned
through the minter directly; foreign fees are buffered until they reach
`min_swap_threshold`, then swapped through the pool and the native output is
burned. A failed swap keeps the foreign buffer for a later attempt, and a
failed burn keeps the native amount in the native buffer: fees are never lost
and never abort the trade that paid them.
"""

from __future__ import annotations

import logging
from typing import Tuple

from ..errors import InvalidConfig, TmctolError
from .minter import CurveMinter
from .pool import ConstantProductPool
from .types import Applied, Deferred, FeeBurnResult, Outcome, Skipped

logger = logging.getLogger(__name__)


class FeeBurner:
    def __init__(self, pool: ConstantProductPool, minter: CurveMinter, *, min_swap_threshold: int) -> None:
        if min_swap_threshold < 0:
            raise InvalidConfig("min_swap_threshold must be non-negative")
        self.pool = pool
        self.minter = minter
        self.min_swap_threshold = min_swap_threshold
        self.buffer_a = 0
        self.buffer_b = 0
        self.total_burned = 0
        self.total_foreign_swapped = 0
        self.fees_native = 0
        self.fees_foreign = 0

    def receive_native_fee(self, amount: int) -> FeeBurnResult:
        if amount <= 0:
            return self._result(0, 0, Skipped(), Skipped())
        self.fees_native += amount
        self.buffer_a += amount
        burned, burn = self._burn_buffered()
        return self._result(burned, 0, Skipped(), burn)

    def receive_foreign_fee(self, amount: int) -> FeeBurnResult:
        if amount <= 0:
            return self._result(0, 0, Skipped(), Skipped())
        self.fees_foreign += amount
        self.buffer_b += amount

        swapped = 0
        swap: Outcome = Skipped()
        if self.buffer_b < self.min_swap_threshold:
            swap = Deferred(f"buffer {self.buffer_b} below swap threshold {self.min_swap_threshold}")
        elif not self.pool.has_liquidity():
            swap = Deferred("pool has no liquidity")
        else:
            try:
                res = self.pool.swap_foreign_to_native(self.buffer_b, 0)
            except TmctolError as exc:
                logger.warning("fee swap deferred, keeping %d foreign buffered: %s", self.buffer_b, exc)
                swap = Deferred(str(exc))
            else:
                swapped = self.buffer_b
                swap = Applied(used=swapped, produced=res.amount_out)
                self.total_foreign_swapped += swapped
                self.buffer_b = 0
                self.buffer_a += res.amount_out

        burned, burn = self._burn_buffered()
        return self._result(burned, swapped, swap, burn)

    def _burn_buffered(self) -> Tuple[int, Outcome]:
        pending = self.buffer_a
        if pending == 0:
            return 0, Skipped()
        try:
            self.minter.burn(pending)
        except TmctolError as exc:
            logger.warning("fee burn deferred, keeping %d native buffered: %s", pending, exc)
            return 0, Deferred(str(exc))
        self.buffer_a = 0
        self.total_burned += pending
        return pending, Applied(used=pending)

    def _result(self, burned: int, swapped: int, swap: Outcome, burn: Outcome) -> FeeBurnResult:
        return FeeBurnResult(
            native_burned=burned,
            foreign_swapped=swapped,
            buffer_native=self.buffer_a,
            buffer_foreign=self.buffer_b,
            swap=swap,
            burn=burn,
        )

    def checkpoint(self) -> Tuple[int, ...]:
        return (
            self.buffer_a,
            self.buffer_b,
            self.total_burned,
            self.total_foreign_swapped,
            self.fees_native,
            self.fees_foreign,
        )

    def restore(self, cp: Tuple[int, ...]) -> None:
        (
            self.buffer_a,
            self.buffer_b,
            self.total_burned,
            self.total_foreign_swapped,
            self.fees_native,
            self.fees_foreign,
        ) = cp

"""
System wiring and the single-writer facade.

`create_system(config)` builds pool -> allocator/buckets -> minter -> fee
burner -> router. `TmctolSystem` serializes every mutating entry point and
every snapshot read through one re-entrant lock, since invariants are only
checked at operation boundaries and assume no interleaving.
"""

from __future__ import annotations

import threading
from typing import Dict, Optional, Tuple

from ..config import DEFAULT_CONFIG, SystemConfig
from ..errors import InvariantViolation
from .fee_burner import FeeBurner
from .invariants import AuditReport, build_report, check_all
from .minter import CurveMinter
from .pool import ConstantProductPool
from .router import Router
from .tol import TreasuryLiquidityAllocator
from .types import BucketBalance, BuyResult, SellResult


class TmctolSystem:
    def __init__(
        self,
        config: SystemConfig,
        pool: ConstantProductPool,
        tol: TreasuryLiquidityAllocator,
        minter: CurveMinter,
        fee_burner: FeeBurner,
        router: Router,
    ) -> None:
        self.config = config
        self.pool = pool
        self.tol = tol
        self.minter = minter
        self.fee_burner = fee_burner
        self.router = router
        self._lock = threading.RLock()

    # -- Trading -------------------------------------------------------------

    def buy(self, foreign_amount: int, min_native_out: int = 0) -> BuyResult:
        with self._lock:
            return self.router.buy(foreign_amount, min_native_out)

    def sell(self, native_amount: int, min_foreign_out: int = 0) -> SellResult:
        with self._lock:
            return self.router.sell(native_amount, min_foreign_out)

    # -- Read-only accessors -------------------------------------------------

    def price(self) -> int:
        """Current curve (mint) price."""
        with self._lock:
            return self.minter.price()

    def pool_price(self) -> Optional[int]:
        with self._lock:
            return self.pool.price() if self.pool.has_liquidity() else None

    def supply(self) -> int:
        with self._lock:
            return self.minter.supply

    def reserves(self) -> Tuple[int, int]:
        with self._lock:
            return self.pool.reserves()

    def bucket_balances(self) -> Dict[str, BucketBalance]:
        with self._lock:
            return self.tol.snapshot()

    # -- Audit ---------------------------------------------------------------

    def audit(self) -> AuditReport:
        with self._lock:
            return build_report(self.pool, self.minter, self.fee_burner)

    def check_invariants(self) -> list[str]:
        with self._lock:
            return check_all(self.pool, self.minter, self.fee_burner)

    def assert_invariants(self) -> None:
        violations = self.check_invariants()
        if violations:
            raise InvariantViolation(violations)


def create_system(config: SystemConfig = DEFAULT_CONFIG) -> TmctolSystem:
    pool = ConstantProductPool(fee_ppm=config.fee_pool_ppm)
    tol = TreasuryLiquidityAllocator(pool, config.buckets)
    minter = CurveMinter(
        price_initial=config.price_initial,
        slope=config.slope,
        user_ppm=config.user_ppm,
        treasury_ppm=config.treasury_ppm,
        allocator=tol,
    )
    fee_burner = FeeBurner(pool, minter, min_swap_threshold=config.min_swap_amount)
    router = Router(
        pool,
        minter,
        fee_burner,
        router_fee_ppm=config.fee_router_ppm,
        min_trade_amount=config.min_swap_amount,
        min_bootstrap_amount=config.min_bootstrap_amount,
    )
    return TmctolSystem(config, pool, tol, minter, fee_burner, router)

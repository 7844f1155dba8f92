"""
Router: the sole external entry point for trades.

Buy (foreign -> native):
    validate -> take router fee -> quote curve and pool -> select route ->
    forward fee to the burner -> execute mint or pool swap
Sell (native -> foreign):
    pool only; fails with PoolNotInitialized before the pool is seeded.

The router is stateless across calls. Any rejection raised after the first
mutation rolls every component back to its pre-call checkpoint, so a failed
call never leaves partial state behind.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from ..errors import (
    AmountTooSmall,
    BelowMinimum,
    BootstrapTooSmall,
    InvalidConfig,
    PoolNotInitialized,
    TmctolError,
)
from ..kernels.fixed_point import PPM, PRECISION, mul_div, require_int
from .fee_burner import FeeBurner
from .minter import CurveMinter
from .pool import ConstantProductPool
from .routing import select_route
from .types import BuyResult, Route, SellResult

logger = logging.getLogger(__name__)


class Router:
    def __init__(
        self,
        pool: ConstantProductPool,
        minter: CurveMinter,
        fee_burner: FeeBurner,
        *,
        router_fee_ppm: int,
        min_trade_amount: int,
        min_bootstrap_amount: int,
    ) -> None:
        for name, v in (
            ("router_fee_ppm", router_fee_ppm),
            ("min_trade_amount", min_trade_amount),
            ("min_bootstrap_amount", min_bootstrap_amount),
        ):
            require_int(name, v)
        if not (0 <= router_fee_ppm < PPM):
            raise InvalidConfig(f"router_fee_ppm must be in [0, {PPM}): {router_fee_ppm}")
        if min_trade_amount < 0 or min_bootstrap_amount < 0:
            raise InvalidConfig("minimum amounts must be non-negative")

        self.pool = pool
        self.minter = minter
        self.fee_burner = fee_burner
        self.router_fee_ppm = router_fee_ppm
        self.min_trade_amount = min_trade_amount
        self.min_bootstrap_amount = min_bootstrap_amount

    def router_fee(self, amount: int) -> int:
        return mul_div(amount, self.router_fee_ppm, PPM)

    # -- Buy -----------------------------------------------------------------

    def buy(self, foreign_in: int, min_native_out: int = 0) -> BuyResult:
        if foreign_in <= 0 or foreign_in < self.min_trade_amount:
            raise BelowMinimum(f"amount below minimum threshold ({self.min_trade_amount} foreign)")
        if not self.pool.has_liquidity() and foreign_in < self.min_bootstrap_amount:
            raise BootstrapTooSmall(f"initial mint requires minimum {self.min_bootstrap_amount} foreign")

        fee = self.router_fee(foreign_in)
        net = foreign_in - fee
        if net <= 0:
            raise AmountTooSmall("amount too small after router fee")

        quote = self.minter.quote(net)
        curve_out = quote.user_share if quote is not None else 0
        pool_out = self.pool.get_out_native(net) if self.pool.has_liquidity() else 0
        route = select_route(curve_out, pool_out, min_native_out)
        logger.debug("buy %d: curve_out=%d pool_out=%d route=%s", foreign_in, curve_out, pool_out, route.value)

        with self._atomic():
            self.fee_burner.receive_foreign_fee(fee)
            if route is Route.CURVE:
                minted = self.minter.mint(net)
                return BuyResult(
                    route=route,
                    native_out=minted.user_share,
                    foreign_in=foreign_in,
                    foreign_net=net,
                    router_fee=fee,
                    price_before=minted.price_before,
                    price_after=minted.price_after,
                    allocation=minted.allocation,
                )
            swap = self.pool.swap_foreign_to_native(net, min_native_out)
            return BuyResult(
                route=route,
                native_out=swap.amount_out,
                foreign_in=foreign_in,
                foreign_net=net,
                router_fee=fee,
                price_before=swap.price_before,
                price_after=swap.price_after,
                price_impact_ppm=swap.price_impact_ppm,
            )

    # -- Sell ----------------------------------------------------------------

    def sell(self, native_in: int, min_foreign_out: int = 0) -> SellResult:
        if native_in <= 0:
            raise BelowMinimum("amount must be positive")
        if not self.pool.has_liquidity():
            raise PoolNotInitialized("pool not initialized; cannot sell native before initial liquidity")

        fee = self.router_fee(native_in)
        net = native_in - fee
        if net <= 0:
            raise AmountTooSmall("amount too small after router fee")
        net_as_foreign = mul_div(net, self.pool.price(), PRECISION)
        if net_as_foreign < self.min_trade_amount:
            raise BelowMinimum(f"amount below minimum threshold ({self.min_trade_amount} foreign equivalent)")

        with self._atomic():
            self.fee_burner.receive_native_fee(fee)
            swap = self.pool.swap_native_to_foreign(net, min_foreign_out)
        return SellResult(
            route=Route.POOL,
            foreign_out=swap.amount_out,
            native_in=native_in,
            native_net=net,
            router_fee=fee,
            price_before=swap.price_before,
            price_after=swap.price_after,
            price_impact_ppm=swap.price_impact_ppm,
        )

    # -- Atomicity -----------------------------------------------------------

    @contextmanager
    def _atomic(self) -> Iterator[None]:
        pool_cp = self.pool.checkpoint()
        minter_cp = self.minter.checkpoint()
        tol_cp = self.minter.allocator.checkpoint()
        fee_cp = self.fee_burner.checkpoint()
        try:
            yield
        except TmctolError:
            self.pool.restore(pool_cp)
            self.minter.restore(minter_cp)
            self.minter.allocator.restore(tol_cp)
            self.fee_burner.restore(fee_cp)
            raise

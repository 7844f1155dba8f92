"""
Constant-product pool (XYK) holding the native/foreign pair.

Side "a" is the native token, side "b" the foreign token. The pool is shared by
reference: every liquidity bucket, the fee burner and the router hold the same
instance and never a copy.

Invariant: `reserve_a * reserve_b` is non-decreasing across swaps (strictly
increasing when `fee_ppm > 0`), and deposits preserve the reserve ratio.
All failures leave reserves and LP supply untouched.
"""

from __future__ import annotations

from typing import Tuple

from ..errors import InvalidAmount, InvalidConfig, NoLiquidity, SlippageExceeded
from ..kernels.cpmm_ppm import mint_liquidity, quote_out, swap_exact_in
from ..kernels.fixed_point import PPM, PRECISION, abs_int, mul_div, require_int
from .types import AddLiquidityResult, SwapDirection, SwapResult


class ConstantProductPool:
    """Two-reserve pool with an LP-share supply and an input-side ppm fee."""

    def __init__(self, fee_ppm: int = 0) -> None:
        require_int("fee_ppm", fee_ppm)
        if not (0 <= fee_ppm < PPM):
            raise InvalidConfig(f"fee_ppm must be in [0, {PPM}): {fee_ppm}")
        self.fee_ppm = fee_ppm
        self.reserve_a = 0
        self.reserve_b = 0
        self.lp_supply = 0

    # -- Read-only -----------------------------------------------------------

    @property
    def reserve_native(self) -> int:
        return self.reserve_a

    @property
    def reserve_foreign(self) -> int:
        return self.reserve_b

    def has_liquidity(self) -> bool:
        return self.reserve_a > 0 and self.reserve_b > 0

    def price(self) -> int:
        """Spot price of native in foreign units (amount-scale)."""
        if self.reserve_a == 0:
            raise NoLiquidity("cannot calculate price with zero native reserves")
        if self.reserve_b == 0:
            raise NoLiquidity("cannot calculate price with zero foreign reserves")
        return mul_div(self.reserve_b, PRECISION, self.reserve_a)

    def quote_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        if not self.has_liquidity():
            return 0
        return quote_out(amount_in=amount_in, reserve_in=reserve_in, reserve_out=reserve_out, fee_ppm=self.fee_ppm)

    def get_out_native(self, foreign_in: int) -> int:
        return self.quote_out(foreign_in, self.reserve_b, self.reserve_a)

    def get_out_foreign(self, native_in: int) -> int:
        return self.quote_out(native_in, self.reserve_a, self.reserve_b)

    def reserves(self) -> Tuple[int, int]:
        return self.reserve_a, self.reserve_b

    # -- Mutations -----------------------------------------------------------

    def add_liquidity(self, native: int, foreign: int) -> AddLiquidityResult:
        """
        Deposit both assets and mint LP shares.

        Raises:
            InvalidAmount: either amount is non-positive
            InsufficientInitialLiquidity: first deposit with isqrt(a*b) == 0
            InsufficientLiquidity: later deposit too small to mint a share
        """
        if native <= 0 or foreign <= 0:
            raise InvalidAmount(f"amounts must be positive: ({native}, {foreign})")

        if self.has_liquidity():
            res = mint_liquidity(
                reserve_a=self.reserve_a,
                reserve_b=self.reserve_b,
                lp_supply=self.lp_supply,
                amount_a=native,
                amount_b=foreign,
            )
        else:
            res = mint_liquidity(reserve_a=0, reserve_b=0, lp_supply=0, amount_a=native, amount_b=foreign)

        self.reserve_a = res.new_reserve_a
        self.reserve_b = res.new_reserve_b
        self.lp_supply = res.new_lp_supply
        return AddLiquidityResult(
            lp_minted=res.lp_minted,
            native_used=res.used_a,
            foreign_used=res.used_b,
            native_rest=res.rest_a,
            foreign_rest=res.rest_b,
        )

    def swap(self, amount_in: int, min_out: int, direction: SwapDirection) -> SwapResult:
        """
        Exact-in swap.

        Raises:
            InvalidAmount: `amount_in` is non-positive
            NoLiquidity: pool not initialized
            SlippageExceeded: quote below `min_out`
        """
        if amount_in <= 0:
            raise InvalidAmount(f"amount_in must be positive: {amount_in}")
        if not self.has_liquidity():
            raise NoLiquidity("no liquidity")

        native_to_foreign = direction is SwapDirection.NATIVE_TO_FOREIGN
        if native_to_foreign:
            reserve_in, reserve_out = self.reserve_a, self.reserve_b
        else:
            reserve_in, reserve_out = self.reserve_b, self.reserve_a

        res = swap_exact_in(amount_in=amount_in, reserve_in=reserve_in, reserve_out=reserve_out, fee_ppm=self.fee_ppm)
        if res.amount_out < min_out:
            raise SlippageExceeded(f"slippage exceeded: {res.amount_out} < {min_out}")

        price_before = self.price()
        if native_to_foreign:
            self.reserve_a, self.reserve_b = res.new_reserve_in, res.new_reserve_out
        else:
            self.reserve_b, self.reserve_a = res.new_reserve_in, res.new_reserve_out
        price_after = self.price()

        price_impact_ppm = mul_div(abs_int(price_after - price_before), PPM, price_before) if price_before > 0 else 0
        return SwapResult(
            direction=direction,
            amount_in=amount_in,
            amount_out=res.amount_out,
            pool_fee=res.fee_out,
            price_before=price_before,
            price_after=price_after,
            price_impact_ppm=price_impact_ppm,
        )

    def swap_foreign_to_native(self, foreign_in: int, min_native_out: int = 0) -> SwapResult:
        return self.swap(foreign_in, min_native_out, SwapDirection.FOREIGN_TO_NATIVE)

    def swap_native_to_foreign(self, native_in: int, min_foreign_out: int = 0) -> SwapResult:
        return self.swap(native_in, min_foreign_out, SwapDirection.NATIVE_TO_FOREIGN)

    # -- Checkpointing -------------------------------------------------------

    def checkpoint(self) -> Tuple[int, int, int]:
        return self.reserve_a, self.reserve_b, self.lp_supply

    def restore(self, cp: Tuple[int, int, int]) -> None:
        self.reserve_a, self.reserve_b, self.lp_supply = cp

    def __repr__(self) -> str:
        return f"ConstantProductPool(reserve_a={self.reserve_a}, reserve_b={self.reserve_b}, lp_supply={self.lp_supply})"

"""
Token minting curve (TMC) minter.

Holds the issued supply of the native token and mints against a linear price
curve. Each mint is split between the paying user and treasury-owned
liquidity: the user share is floored, the treasury share is the exact
remainder, and the treasury share is forwarded together with the full payment
to the TOL allocator.
"""

from __future__ import annotations

from typing import Optional, Tuple

from ..errors import InsufficientSupply, InvalidAmount, InvalidConfig, ZeroMint
from ..kernels.curve_mint import calculate_mint, mint_cost, price_at, split_minted
from ..kernels.fixed_point import PPM, require_int
from .tol import TreasuryLiquidityAllocator
from .types import BurnResult, MintQuote, MintResult


class CurveMinter:
    def __init__(
        self,
        *,
        price_initial: int,
        slope: int,
        user_ppm: int,
        treasury_ppm: int,
        allocator: TreasuryLiquidityAllocator,
    ) -> None:
        for name, v in (
            ("price_initial", price_initial),
            ("slope", slope),
            ("user_ppm", user_ppm),
            ("treasury_ppm", treasury_ppm),
        ):
            require_int(name, v)
        if price_initial <= 0:
            raise InvalidConfig("initial price must be positive")
        if slope < 0:
            raise InvalidConfig("slope must be non-negative")
        if user_ppm < 0 or treasury_ppm < 0 or user_ppm + treasury_ppm != PPM:
            raise InvalidConfig(f"shares must sum to {PPM}, got {user_ppm + treasury_ppm}")

        self.price_initial = price_initial
        self.slope = slope
        self.user_ppm = user_ppm
        self.treasury_ppm = treasury_ppm
        self.allocator = allocator
        self.supply = 0
        # Lifetime sum of mint outputs; supply + burned must always equal it.
        self.total_minted = 0

    def price(self, supply: Optional[int] = None) -> int:
        s = self.supply if supply is None else supply
        return price_at(price_initial=self.price_initial, slope=self.slope, supply=s)

    def calculate_mint(self, payment: int) -> int:
        return calculate_mint(payment=payment, price_initial=self.price_initial, slope=self.slope, supply=self.supply)

    def mint_cost(self, delta: int, supply: Optional[int] = None) -> int:
        s = self.supply if supply is None else supply
        return mint_cost(supply=s, delta=delta, price_initial=self.price_initial, slope=self.slope)

    def quote(self, payment: int) -> Optional[MintQuote]:
        """Mint preview; `None` means the curve route is unavailable for `payment`."""
        minted = self.calculate_mint(payment)
        if minted == 0:
            return None
        split = split_minted(minted, self.user_ppm)
        return MintQuote(minted=minted, user_share=split.user_share, treasury_share=split.treasury_share)

    def mint(self, payment: int) -> MintResult:
        price_before = self.price()
        minted = self.calculate_mint(payment)
        if minted == 0:
            raise ZeroMint(f"payment {payment} mints nothing")

        self.supply += minted
        self.total_minted += minted
        split = split_minted(minted, self.user_ppm)
        allocation = self.allocator.allocate(split.treasury_share, payment)
        return MintResult(
            total_minted=minted,
            user_share=split.user_share,
            treasury_share=split.treasury_share,
            price_before=price_before,
            price_after=self.price(),
            allocation=allocation,
        )

    def burn(self, amount: int) -> BurnResult:
        if amount <= 0:
            raise InvalidAmount(f"burn amount must be positive: {amount}")
        if amount > self.supply:
            raise InsufficientSupply(f"insufficient supply for burn: {self.supply} < {amount}")
        supply_before = self.supply
        self.supply -= amount
        return BurnResult(burned=amount, supply_before=supply_before, supply_after=self.supply)

    def checkpoint(self) -> Tuple[int, int]:
        return self.supply, self.total_minted

    def restore(self, cp: Tuple[int, int]) -> None:
        self.supply, self.total_minted = cp

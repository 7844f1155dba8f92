"""Shared enums and result types for the stateful components.

Amounts are amount-scale integers (`PRECISION`), `*_ppm` values are
ratio-scale (`PPM`).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional, Tuple, Union


@unique
class Route(Enum):
    """Execution route for a buy."""
    CURVE = "TMC"
    POOL = "XYK"


@unique
class SwapDirection(Enum):
    FOREIGN_TO_NATIVE = "foreign_to_native"
    NATIVE_TO_FOREIGN = "native_to_foreign"


# -- Sub-operation outcomes -------------------------------------------------
#
# Buckets and the fee burner run secondary steps (deposit, zap swap, burn) whose
# failure must never abort the primary mint/swap. Each step reports one of
# these instead of raising.


@dataclass(frozen=True)
class Applied:
    used: int = 0
    produced: int = 0


@dataclass(frozen=True)
class PartiallyApplied:
    used: int
    remainder: int
    produced: int = 0


@dataclass(frozen=True)
class Deferred:
    reason: str


@dataclass(frozen=True)
class Skipped:
    """Nothing to do (e.g. no single-sided remainder to zap)."""


Outcome = Union[Applied, PartiallyApplied, Deferred, Skipped]


# -- Pool -------------------------------------------------------------------


@dataclass(frozen=True)
class AddLiquidityResult:
    lp_minted: int
    native_used: int
    foreign_used: int
    native_rest: int
    foreign_rest: int


@dataclass(frozen=True)
class SwapResult:
    direction: SwapDirection
    amount_in: int
    amount_out: int
    pool_fee: int
    price_before: int
    price_after: int
    price_impact_ppm: int

    @property
    def native_out(self) -> int:
        return self.amount_out if self.direction is SwapDirection.FOREIGN_TO_NATIVE else 0

    @property
    def foreign_out(self) -> int:
        return self.amount_out if self.direction is SwapDirection.NATIVE_TO_FOREIGN else 0


# -- Treasury liquidity -----------------------------------------------------


@dataclass(frozen=True)
class BucketBalance:
    bucket_id: str
    buffer_native: int
    buffer_foreign: int
    owned_lp: int
    contributed_native: int
    contributed_foreign: int


@dataclass(frozen=True)
class BucketDepositResult:
    bucket_id: str
    lp_minted: int
    native_used: int
    foreign_used: int
    buffer_native: int
    buffer_foreign: int
    deposit: Outcome
    zap: Outcome


# -- Minting ----------------------------------------------------------------


@dataclass(frozen=True)
class MintQuote:
    minted: int
    user_share: int
    treasury_share: int


@dataclass(frozen=True)
class MintResult:
    total_minted: int
    user_share: int
    treasury_share: int
    price_before: int
    price_after: int
    allocation: Tuple[BucketDepositResult, ...]


@dataclass(frozen=True)
class BurnResult:
    burned: int
    supply_before: int
    supply_after: int


# -- Fees -------------------------------------------------------------------


@dataclass(frozen=True)
class FeeBurnResult:
    native_burned: int
    foreign_swapped: int
    buffer_native: int
    buffer_foreign: int
    swap: Outcome
    burn: Outcome


# -- Router -----------------------------------------------------------------


@dataclass(frozen=True)
class BuyResult:
    route: Route
    native_out: int
    foreign_in: int
    foreign_net: int
    router_fee: int
    price_before: int
    price_after: int
    price_impact_ppm: Optional[int] = None
    allocation: Tuple[BucketDepositResult, ...] = ()


@dataclass(frozen=True)
class SellResult:
    route: Route
    foreign_out: int
    native_in: int
    native_net: int
    router_fee: int
    price_before: int
    price_after: int
    price_impact_ppm: int

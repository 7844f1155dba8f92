"""
Core TMCTOL components
"""

from .bucket import LiquidityBucket
from .fee_burner import FeeBurner
from .invariants import AuditReport, check_all
from .minter import CurveMinter
from .pool import ConstantProductPool
from .router import Router
from .routing import select_route
from .system import TmctolSystem, create_system
from .tol import TreasuryLiquidityAllocator, split_by_shares
from .types import (
    Applied,
    BucketBalance,
    BucketDepositResult,
    BuyResult,
    Deferred,
    MintQuote,
    MintResult,
    PartiallyApplied,
    Route,
    SellResult,
    Skipped,
    SwapDirection,
    SwapResult,
)

__all__ = [
    "LiquidityBucket",
    "FeeBurner",
    "AuditReport",
    "check_all",
    "CurveMinter",
    "ConstantProductPool",
    "Router",
    "select_route",
    "TmctolSystem",
    "create_system",
    "TreasuryLiquidityAllocator",
    "split_by_shares",
    "Applied",
    "BucketBalance",
    "BucketDepositResult",
    "BuyResult",
    "Deferred",
    "MintQuote",
    "MintResult",
    "PartiallyApplied",
    "Route",
    "SellResult",
    "Skipped",
    "SwapDirection",
    "SwapResult",
]

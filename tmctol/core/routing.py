"""
Route selection for buys (pure).

A route is viable when its output is positive and meets the caller's minimum.
The curve route wins when viable and the pool route is not, or when its output
is at least the pool's: ties go to minting.
"""

from __future__ import annotations

from ..errors import NoRoute, SlippageExceeded
from ..kernels.fixed_point import max_int
from .types import Route


def is_viable(amount_out: int, min_out: int) -> bool:
    return amount_out > 0 and amount_out >= min_out


def select_route(curve_out: int, pool_out: int, min_out: int = 0) -> Route:
    """
    Pick the execution route for a buy.

    Raises:
        SlippageExceeded: no viable route, but the pool quoted a positive amount
        NoRoute: no viable route and no pool quote at all
    """
    curve_viable = is_viable(curve_out, min_out)
    pool_viable = is_viable(pool_out, min_out)
    if curve_viable and (not pool_viable or curve_out >= pool_out):
        return Route.CURVE
    if pool_viable:
        return Route.POOL
    if pool_out > 0:
        raise SlippageExceeded(f"slippage exceeded: best quote {max_int(curve_out, pool_out)} < {min_out}")
    raise NoRoute("no route available")

"""
Linear bonding-curve kernel.

Spot price is linear in supply (all values amount-scale):

    price(s) = price_initial + slope * s / PRECISION

Minting `d` units starting at supply `s` costs the integral of the price:

    cost(s, d) = (price_initial * d + slope * d * (2s + d) / (2 * PRECISION)) / PRECISION

Solving `cost(s, d) = payment` for `d` gives the quadratic

    slope * d^2 + (2 * price_initial * PRECISION + 2 * slope * s) * d - 2 * payment * PRECISION^2 = 0

whose non-negative root is `(sqrt(b^2 + 4ac) - b) / 2a` with `c = 2 * payment * PRECISION^2`
taken as a positive magnitude. Both the integer square root and the final
division floor, so the minted amount never costs more than `payment`.
"""

from __future__ import annotations

from dataclasses import dataclass

from .fixed_point import PPM, PRECISION, div_ceil, isqrt, mul_div


@dataclass(frozen=True)
class ShareSplit:
    user_share: int
    treasury_share: int


def price_at(*, price_initial: int, slope: int, supply: int) -> int:
    return price_initial + mul_div(slope, supply, PRECISION)


def calculate_mint(*, payment: int, price_initial: int, slope: int, supply: int) -> int:
    """Largest supply increase whose curve cost does not exceed `payment`."""
    if payment <= 0:
        return 0
    if slope == 0:
        return mul_div(payment, PRECISION, price_initial)

    a = slope
    b = 2 * price_initial * PRECISION + 2 * slope * supply
    c = 2 * payment * PRECISION * PRECISION
    discriminant = b * b + 4 * a * c
    numerator = isqrt(discriminant) - b
    if numerator <= 0:
        return 0
    return numerator // (2 * a)


def mint_cost(*, supply: int, delta: int, price_initial: int, slope: int) -> int:
    """
    Payment required to mint `delta` units from `supply` (ceil rounding).

    Inverse of `calculate_mint`: `mint_cost(s, calculate_mint(p, ...)) <= p`.
    """
    if delta <= 0:
        return 0
    numerator = 2 * PRECISION * price_initial * delta + slope * delta * (2 * supply + delta)
    return div_ceil(numerator, 2 * PRECISION * PRECISION)


def split_minted(total: int, user_ppm: int) -> ShareSplit:
    """Floor the user share; the treasury receives the exact remainder."""
    user_share = mul_div(total, user_ppm, PPM)
    return ShareSplit(user_share=user_share, treasury_share=total - user_share)

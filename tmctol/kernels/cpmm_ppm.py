"""
Constant-product swap and liquidity kernel (ppm fee semantics).

Pure integer functions with explicit rounding rules; the stateful pool in
`tmctol.core.pool` applies their results.

Swap pricing (fee taken from the input, output floored):

    in_with_fee = amount_in * (PPM - fee_ppm)
    amount_out  = floor(in_with_fee * reserve_out / (reserve_in * PPM + in_with_fee))

Post-swap reserves keep the full gross input:

    new_reserve_in  = reserve_in + amount_in
    new_reserve_out = reserve_out - amount_out

so `new_reserve_in * new_reserve_out >= reserve_in * reserve_out`, strictly
greater whenever `fee_ppm > 0`.

Liquidity minting (no LP lock):

    initial:    lp = isqrt(amount_a * amount_b), reserves set exactly to the inputs
    subsequent: lp = min(floor(a * L / ra), floor(b * L / rb))
                used_a = floor(ra * lp / L), used_b = floor(rb * lp / L)
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InsufficientInitialLiquidity, InsufficientLiquidity, InvalidAmount, NoLiquidity
from .fixed_point import PPM, isqrt, min_int, mul_div, require_int


@dataclass(frozen=True)
class SwapExactInResult:
    amount_out: int
    ideal_out: int
    fee_out: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int


@dataclass(frozen=True)
class MintLiquidityResult:
    lp_minted: int
    used_a: int
    used_b: int
    rest_a: int
    rest_b: int
    new_reserve_a: int
    new_reserve_b: int
    new_lp_supply: int


def quote_out(*, amount_in: int, reserve_in: int, reserve_out: int, fee_ppm: int) -> int:
    """
    Exact-in output quote. Returns 0 for non-positive input or empty reserves.

    Never raises on degenerate inputs: callers treat 0 as "no quote".
    """
    if amount_in <= 0 or reserve_in <= 0 or reserve_out <= 0:
        return 0
    in_with_fee = amount_in * (PPM - fee_ppm)
    numerator = in_with_fee * reserve_out
    denominator = reserve_in * PPM + in_with_fee
    return numerator // denominator


def swap_exact_in(*, amount_in: int, reserve_in: int, reserve_out: int, fee_ppm: int) -> SwapExactInResult:
    """
    Exact-in swap quote + post-state.

    Raises NoLiquidity on empty reserves and InvalidAmount on non-positive input.
    Slippage is the caller's concern; a zero `amount_out` is returned as-is.
    """
    for name, v in (
        ("amount_in", amount_in),
        ("reserve_in", reserve_in),
        ("reserve_out", reserve_out),
        ("fee_ppm", fee_ppm),
    ):
        require_int(name, v)

    if reserve_in <= 0 or reserve_out <= 0:
        raise NoLiquidity("cannot swap against an empty reserve")
    if amount_in <= 0:
        raise InvalidAmount(f"amount_in must be positive: {amount_in}")
    if not (0 <= fee_ppm < PPM):
        raise InvalidAmount(f"fee_ppm must be in [0, {PPM}): {fee_ppm}")

    amount_out = quote_out(amount_in=amount_in, reserve_in=reserve_in, reserve_out=reserve_out, fee_ppm=fee_ppm)
    if amount_out >= reserve_out:
        raise InsufficientLiquidity("amount_out would drain reserve_out")

    # Output a fee-less pool would have paid; the difference stays in the pool.
    ideal_out = mul_div(amount_in, reserve_out, reserve_in + amount_in)

    new_reserve_in = reserve_in + amount_in
    new_reserve_out = reserve_out - amount_out
    return SwapExactInResult(
        amount_out=amount_out,
        ideal_out=ideal_out,
        fee_out=ideal_out - amount_out,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=reserve_in * reserve_out,
        k_after=new_reserve_in * new_reserve_out,
    )


def mint_liquidity(
    *,
    reserve_a: int,
    reserve_b: int,
    lp_supply: int,
    amount_a: int,
    amount_b: int,
) -> MintLiquidityResult:
    """
    Mint LP shares for a two-sided deposit.

    An empty pool (either reserve zero) takes both amounts verbatim. Otherwise
    the used amounts are derived from the minted shares so the reserve ratio is
    preserved; whatever is left over is reported back as `rest_*`.
    """
    for name, v in (
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("lp_supply", lp_supply),
        ("amount_a", amount_a),
        ("amount_b", amount_b),
    ):
        require_int(name, v)

    if amount_a <= 0 or amount_b <= 0:
        raise InvalidAmount(f"deposit amounts must be positive: ({amount_a}, {amount_b})")

    if reserve_a == 0 or reserve_b == 0:
        lp_minted = isqrt(amount_a * amount_b)
        if lp_minted == 0:
            raise InsufficientInitialLiquidity("isqrt(amount_a * amount_b) is zero")
        return MintLiquidityResult(
            lp_minted=lp_minted,
            used_a=amount_a,
            used_b=amount_b,
            rest_a=0,
            rest_b=0,
            new_reserve_a=amount_a,
            new_reserve_b=amount_b,
            new_lp_supply=lp_minted,
        )

    if lp_supply <= 0:
        raise InsufficientLiquidity("pool has reserves but no LP supply")

    lp_minted = min_int(mul_div(amount_a, lp_supply, reserve_a), mul_div(amount_b, lp_supply, reserve_b))
    if lp_minted == 0:
        raise InsufficientLiquidity("liquidity_minted is zero (deposit too small)")

    used_a = mul_div(reserve_a, lp_minted, lp_supply)
    used_b = mul_div(reserve_b, lp_minted, lp_supply)
    if used_a > amount_a or used_b > amount_b:
        raise AssertionError("used amounts exceed deposited amounts")

    return MintLiquidityResult(
        lp_minted=lp_minted,
        used_a=used_a,
        used_b=used_b,
        rest_a=amount_a - used_a,
        rest_b=amount_b - used_b,
        new_reserve_a=reserve_a + used_a,
        new_reserve_b=reserve_b + used_b,
        new_lp_supply=lp_supply + lp_minted,
    )


def ratio_matched_pair(*, amount_a: int, amount_b: int, reserve_a: int, reserve_b: int) -> tuple[int, int]:
    """
    Largest `(a, b)` not exceeding the inputs that matches `reserve_a : reserve_b`.

    The binding side is whichever input runs out first at the current ratio.
    """
    b_for_a = mul_div(amount_a, reserve_b, reserve_a)
    if b_for_a <= amount_b:
        return amount_a, b_for_a
    return mul_div(amount_b, reserve_a, reserve_b), amount_b

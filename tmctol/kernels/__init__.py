"""
Pure integer kernels.

Stateless functions with explicit rounding rules. The stateful components in
`tmctol.core` call into these and apply the returned post-state.
"""

from .fixed_point import DECIMALS, PPM, PRECISION, abs_int, div_ceil, isqrt, max_int, min_int, mul_div

__all__ = [
    "DECIMALS",
    "PPM",
    "PRECISION",
    "abs_int",
    "div_ceil",
    "isqrt",
    "max_int",
    "min_int",
    "mul_div",
]

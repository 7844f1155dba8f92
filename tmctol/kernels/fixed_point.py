"""
Fixed-point integer helpers.

Two scaling domains are used throughout the engine and must never be mixed
without an explicit conversion:

- amount-scale, `PRECISION = 10**12`: prices, slopes, token amounts, reserves
- ratio-scale, `PPM = 10**6`: fee rates and distribution shares

Every helper here is integer-only and rounds toward zero (floor for the
non-negative values the engine works with) unless its name says otherwise.
"""

from __future__ import annotations

from ..errors import DivisionByZero


DECIMALS = 12
PRECISION = 10**DECIMALS
PPM = 1_000_000


def require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def mul_div(a: int, b: int, c: int) -> int:
    """Return `floor(a * b / c)` without intermediate precision loss."""
    require_int("a", a)
    require_int("b", b)
    require_int("c", c)
    if c == 0:
        raise DivisionByZero("mul_div: division by zero")
    return (a * b) // c


def div_ceil(a: int, b: int) -> int:
    """Ceiling division for a non-negative numerator and positive denominator."""
    require_int("a", a)
    require_int("b", b)
    if b == 0:
        raise DivisionByZero("div_ceil: division by zero")
    q, r = divmod(a, b)
    return q + 1 if r else q


def isqrt(n: int) -> int:
    """Floor integer square root (exact for arbitrarily large ints)."""
    require_int("n", n)
    if n < 0:
        raise ValueError(f"square root of negative number: {n}")
    if n < 2:
        return n
    # Newton iteration from above; stops at floor(sqrt(n)).
    x = n
    y = (x + 1) // 2
    while y < x:
        x = y
        y = (x + n // x) // 2
    return x


def min_int(a: int, b: int) -> int:
    return a if a < b else b


def max_int(a: int, b: int) -> int:
    return a if a > b else b


def abs_int(a: int) -> int:
    return -a if a < 0 else a

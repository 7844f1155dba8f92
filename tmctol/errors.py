"""Exception taxonomy for the TMCTOL engine.

Every failure surfaces to the immediate caller as a typed exception. Each class
carries a stable `code` so scenario tooling can report rejections without
matching on message text.

Groups:
- construction: `InvalidConfig` (fatal, the system must not start)
- operation-local, recoverable: `ZeroMint`, `InsufficientSupply`,
  `NoLiquidity`, `InsufficientLiquidity`, `InsufficientInitialLiquidity`,
  `InvalidAmount`
- caller-input rejections: `SlippageExceeded`, `BelowMinimum`,
  `BootstrapTooSmall`, `AmountTooSmall`, `NoRoute`, `PoolNotInitialized`,
  `InsufficientBalance`
- guards: `DivisionByZero`, `InvariantViolation`
"""

from __future__ import annotations


class TmctolError(Exception):
    """Base class for all engine failures."""

    code = "tmctol_error"


class InvalidConfig(TmctolError, ValueError):
    """Raised at construction when configuration invariants do not hold."""

    code = "invalid_config"


class InvalidAmount(TmctolError, ValueError):
    """Raised when an amount argument is outside its domain (e.g. negative)."""

    code = "invalid_amount"


class ZeroMint(TmctolError):
    code = "zero_mint"


class InsufficientSupply(TmctolError):
    code = "insufficient_supply"


class NoLiquidity(TmctolError):
    code = "no_liquidity"


class InsufficientLiquidity(TmctolError):
    code = "insufficient_liquidity"


class InsufficientInitialLiquidity(TmctolError):
    code = "insufficient_initial_liquidity"


class SlippageExceeded(TmctolError):
    code = "slippage_exceeded"


class BelowMinimum(TmctolError):
    code = "below_minimum"


class BootstrapTooSmall(TmctolError):
    code = "bootstrap_too_small"


class AmountTooSmall(TmctolError):
    code = "amount_too_small"


class NoRoute(TmctolError):
    code = "no_route"


class PoolNotInitialized(TmctolError):
    code = "pool_not_initialized"


class InsufficientBalance(TmctolError):
    """Raised by actor ledgers when a participant spends more than they hold."""

    code = "insufficient_balance"


class DivisionByZero(TmctolError, ZeroDivisionError):
    """Defensive guard; upstream validation should make this unreachable."""

    code = "division_by_zero"


class InvariantViolation(TmctolError):
    """Raised when a post-state audit reports one or more violated invariants."""

    code = "invariant_violation"

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")

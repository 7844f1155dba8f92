"""
Actor ledgers used to drive scenarios.

A `User` holds native/foreign balances and trades through the system facade;
a `Treasury` holds native tokens it may sell. Balances are debited before the
trade and restored if the trade is rejected, so a rejection leaves both the
ledger and the engine unchanged.
"""

from __future__ import annotations

from typing import Dict, Optional

from ..core.system import TmctolSystem
from ..core.types import BuyResult, SellResult
from ..errors import InsufficientBalance, InvalidAmount


class User:
    def __init__(self, initial_native: int = 0, initial_foreign: int = 0, system: Optional[TmctolSystem] = None) -> None:
        if initial_native < 0 or initial_foreign < 0:
            raise InvalidAmount("initial balances cannot be negative")
        self.balance_native = initial_native
        self.balance_foreign = initial_foreign
        self.system = system

    def attach(self, system: TmctolSystem) -> None:
        self.system = system

    def get_balance(self) -> Dict[str, int]:
        return {"native": self.balance_native, "foreign": self.balance_foreign}

    def deposit_native(self, amount: int) -> int:
        if amount <= 0:
            raise InvalidAmount("deposit amount must be positive")
        self.balance_native += amount
        return self.balance_native

    def deposit_foreign(self, amount: int) -> int:
        if amount <= 0:
            raise InvalidAmount("deposit amount must be positive")
        self.balance_foreign += amount
        return self.balance_foreign

    def withdraw_native(self, amount: int) -> int:
        if amount <= 0:
            raise InvalidAmount("withdraw amount must be positive")
        if amount > self.balance_native:
            raise InsufficientBalance(f"insufficient native balance: {self.balance_native} < {amount}")
        self.balance_native -= amount
        return self.balance_native

    def withdraw_foreign(self, amount: int) -> int:
        if amount <= 0:
            raise InvalidAmount("withdraw amount must be positive")
        if amount > self.balance_foreign:
            raise InsufficientBalance(f"insufficient foreign balance: {self.balance_foreign} < {amount}")
        self.balance_foreign -= amount
        return self.balance_foreign

    def buy_native(self, foreign_amount: int, min_native_out: int = 0) -> BuyResult:
        system = self._require_system()
        self.withdraw_foreign(foreign_amount)
        try:
            result = system.buy(foreign_amount, min_native_out)
        except Exception:
            self.balance_foreign += foreign_amount
            raise
        self.balance_native += result.native_out
        return result

    def sell_native(self, native_amount: int, min_foreign_out: int = 0) -> SellResult:
        system = self._require_system()
        self.withdraw_native(native_amount)
        try:
            result = system.sell(native_amount, min_foreign_out)
        except Exception:
            self.balance_native += native_amount
            raise
        self.balance_foreign += result.foreign_out
        return result

    def _require_system(self) -> TmctolSystem:
        if self.system is None:
            raise RuntimeError("user is not attached to a system")
        return self.system

    def __repr__(self) -> str:
        return f"User(native={self.balance_native}, foreign={self.balance_foreign})"


class Treasury:
    """Native-only holder (e.g. a team or grants wallet) that can sell into the pool."""

    def __init__(self, initial_native: int = 0, system: Optional[TmctolSystem] = None) -> None:
        if initial_native < 0:
            raise InvalidAmount("initial balance cannot be negative")
        self.balance_native = initial_native
        self.balance_foreign = 0
        self.system = system

    def attach(self, system: TmctolSystem) -> None:
        self.system = system

    def receive_allocation(self, amount: int) -> int:
        if amount < 0:
            raise InvalidAmount("allocation amount cannot be negative")
        self.balance_native += amount
        return self.balance_native

    def sell_native(self, native_amount: int, min_foreign_out: int = 0) -> SellResult:
        if self.system is None:
            raise RuntimeError("treasury is not attached to a system")
        if native_amount <= 0:
            raise InvalidAmount("sell amount must be positive")
        if native_amount > self.balance_native:
            raise InsufficientBalance(f"insufficient treasury balance: {self.balance_native} < {native_amount}")
        self.balance_native -= native_amount
        try:
            result = self.system.sell(native_amount, min_foreign_out)
        except Exception:
            self.balance_native += native_amount
            raise
        self.balance_foreign += result.foreign_out
        return result

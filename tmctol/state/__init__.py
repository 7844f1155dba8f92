"""
Actor ledgers for scenario driving
"""

from .ledger import Treasury, User

__all__ = [
    "Treasury",
    "User",
]

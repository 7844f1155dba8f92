"""
TMCTOL: token minting curve + treasury-owned liquidity reference engine.

Integer-exact model of a linear bonding-curve minter coupled with a
constant-product pool whose liquidity is owned by the protocol, a router that
picks between minting and swapping, and a fee burner.
"""

from .config import DEFAULT_CONFIG, SystemConfig, config_from_mapping, load_config
from .core.system import TmctolSystem, create_system
from .kernels.fixed_point import PPM, PRECISION

__all__ = [
    "DEFAULT_CONFIG",
    "SystemConfig",
    "config_from_mapping",
    "load_config",
    "TmctolSystem",
    "create_system",
    "PPM",
    "PRECISION",
]

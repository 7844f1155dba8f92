"""
System configuration.

`SystemConfig` is an explicit, validated value passed into the factory; there is
no ambient or global configuration. `config_from_mapping` merges overrides onto
`DEFAULT_CONFIG` and `load_config` reads the same overrides from a YAML file.

Value conventions for mappings/YAML:
- amount fields accept an int (raw amount-scale) or a decimal string in whole
  tokens (`"0.01"` -> `10**10`)
- `*_ppm` fields are ints in parts per million
- `buckets` is a mapping `{bucket_id: ppm}` in allocation order, or a list of
  `[bucket_id, ppm]` pairs
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Mapping, Tuple

import yaml

from .errors import InvalidConfig
from .kernels.fixed_point import PPM, PRECISION


AMOUNT_FIELDS = ("price_initial", "slope", "min_swap_amount", "min_bootstrap_amount")
PPM_FIELDS = ("fee_pool_ppm", "fee_router_ppm", "user_ppm", "treasury_ppm")


@dataclass(frozen=True)
class SystemConfig:
    price_initial: int
    slope: int
    fee_pool_ppm: int
    fee_router_ppm: int
    min_swap_amount: int
    min_bootstrap_amount: int
    user_ppm: int
    treasury_ppm: int
    buckets: Tuple[Tuple[str, int], ...]

    def __post_init__(self) -> None:
        for name in AMOUNT_FIELDS + PPM_FIELDS:
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise InvalidConfig(f"{name} must be an int")
            if v < 0:
                raise InvalidConfig(f"{name} must be non-negative: {v}")
        if self.price_initial <= 0:
            raise InvalidConfig("price_initial must be positive")
        if self.fee_pool_ppm >= PPM:
            raise InvalidConfig(f"fee_pool_ppm must be < {PPM}")
        if self.fee_router_ppm >= PPM:
            raise InvalidConfig(f"fee_router_ppm must be < {PPM}")
        if self.user_ppm + self.treasury_ppm != PPM:
            raise InvalidConfig(f"shares must sum to {PPM}, got {self.user_ppm + self.treasury_ppm}")

        if not self.buckets:
            raise InvalidConfig("at least one bucket is required")
        for entry in self.buckets:
            if len(entry) != 2:
                raise InvalidConfig(f"bucket entries must be (id, ppm) pairs: {entry!r}")
            bucket_id, ppm = entry
            if not isinstance(bucket_id, str) or not bucket_id:
                raise InvalidConfig(f"bucket id must be a non-empty string: {bucket_id!r}")
            if not isinstance(ppm, int) or isinstance(ppm, bool) or ppm < 0:
                raise InvalidConfig(f"bucket {bucket_id} ppm must be a non-negative int")
        total = sum(ppm for _, ppm in self.buckets)
        if total != PPM:
            raise InvalidConfig(f"bucket shares must sum to {PPM}, got {total}")


DEFAULT_CONFIG = SystemConfig(
    price_initial=PRECISION // 1_000,
    slope=PRECISION // 1_000,
    fee_pool_ppm=0,
    fee_router_ppm=(5 * PPM) // 1_000,
    min_swap_amount=PRECISION // 100,
    min_bootstrap_amount=100 * PRECISION,
    user_ppm=333_333,
    treasury_ppm=666_667,
    buckets=(("A", 500_000), ("B", 166_667), ("C", 166_667), ("D", 166_666)),
)


def parse_amount(value: Any) -> int:
    """Int values pass through; strings are whole-token decimals scaled by PRECISION."""
    if isinstance(value, bool):
        raise InvalidConfig(f"amount must be an int or decimal string, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            scaled = Decimal(value.replace("_", "")) * PRECISION
        except InvalidOperation as exc:
            raise InvalidConfig(f"invalid decimal amount: {value!r}") from exc
        if not scaled.is_finite():
            raise InvalidConfig(f"amount must be finite: {value!r}")
        if scaled != scaled.to_integral_value():
            raise InvalidConfig(f"amount {value!r} has more than 12 decimals")
        return int(scaled)
    raise InvalidConfig(f"amount must be an int or decimal string, got {type(value).__name__}")


def _parse_buckets(value: Any) -> Tuple[Tuple[str, int], ...]:
    if isinstance(value, Mapping):
        items = list(value.items())
    elif isinstance(value, (list, tuple)):
        items = [tuple(item) for item in value]
    else:
        raise InvalidConfig("buckets must be a mapping or a list of [id, ppm] pairs")
    for item in items:
        if len(item) != 2:
            raise InvalidConfig(f"bucket entries must be [id, ppm] pairs: {list(item)!r}")
    return tuple((str(bucket_id), ppm) for bucket_id, ppm in items)


def config_from_mapping(overrides: Mapping[str, Any], base: SystemConfig = DEFAULT_CONFIG) -> SystemConfig:
    """Merge `overrides` onto `base`; unknown keys are rejected."""
    known = {f.name for f in fields(SystemConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise InvalidConfig(f"unknown config keys: {', '.join(unknown)}")

    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        if key in AMOUNT_FIELDS:
            changes[key] = parse_amount(value)
        elif key == "buckets":
            changes[key] = _parse_buckets(value)
        else:
            changes[key] = value

    # Setting only one side of the user/treasury split implies the other.
    if "user_ppm" in changes and "treasury_ppm" not in changes and isinstance(changes["user_ppm"], int):
        changes["treasury_ppm"] = PPM - changes["user_ppm"]
    elif "treasury_ppm" in changes and "user_ppm" not in changes and isinstance(changes["treasury_ppm"], int):
        changes["user_ppm"] = PPM - changes["treasury_ppm"]

    return replace(base, **changes)


def load_config(path: str | Path, base: SystemConfig = DEFAULT_CONFIG) -> SystemConfig:
    """Load overrides from a YAML file (empty file -> `base`)."""
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if obj is None:
        return base
    if not isinstance(obj, Mapping):
        raise InvalidConfig("config YAML must be a mapping")
    return config_from_mapping(obj, base)

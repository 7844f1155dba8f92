from __future__ import annotations

import pytest

from tmctol import DEFAULT_CONFIG, PPM, PRECISION, config_from_mapping, load_config
from tmctol.config import parse_amount
from tmctol.errors import InvalidConfig


def test_default_config_values():
    assert DEFAULT_CONFIG.price_initial == PRECISION // 1_000
    assert DEFAULT_CONFIG.fee_router_ppm == 5_000
    assert DEFAULT_CONFIG.user_ppm + DEFAULT_CONFIG.treasury_ppm == PPM
    assert sum(ppm for _, ppm in DEFAULT_CONFIG.buckets) == PPM


@pytest.mark.parametrize(
    "value, expected",
    [
        (5, 5),
        ("1", PRECISION),
        ("0.01", 10**10),
        ("1_000", 1_000 * PRECISION),
        ("0.000000000001", 1),
    ],
)
def test_parse_amount(value, expected):
    assert parse_amount(value) == expected


@pytest.mark.parametrize("value", ["0.0000000000001", "abc", True, 1.5])
def test_parse_amount_rejects(value):
    with pytest.raises(InvalidConfig):
        parse_amount(value)


@pytest.mark.parametrize("value", ["Infinity", "-inf", "NaN"])
def test_parse_amount_rejects_non_finite(value):
    with pytest.raises(InvalidConfig, match="finite"):
        parse_amount(value)


def test_load_config_rejects_non_finite_amount(tmp_path):
    path = tmp_path / "inf.yaml"
    path.write_text("min_swap_amount: \"inf\"\n", encoding="utf-8")
    with pytest.raises(InvalidConfig, match="finite"):
        load_config(path)


def test_overrides_merge_onto_defaults():
    cfg = config_from_mapping({"slope": "0.5", "user_ppm": 400_000, "buckets": {"X": 600_000, "Y": 400_000}})
    assert cfg.slope == PRECISION // 2
    assert (cfg.user_ppm, cfg.treasury_ppm) == (400_000, 600_000)
    assert cfg.buckets == (("X", 600_000), ("Y", 400_000))
    assert cfg.price_initial == DEFAULT_CONFIG.price_initial


def test_treasury_share_implies_user_share():
    cfg = config_from_mapping({"treasury_ppm": 750_000})
    assert cfg.user_ppm == 250_000


@pytest.mark.parametrize(
    "overrides",
    [
        {"nope": 1},
        {"price_initial": 0},
        {"fee_pool_ppm": PPM},
        {"user_ppm": 500_000, "treasury_ppm": 400_000},
        {"buckets": {"A": 500_000}},
        {"buckets": [["A"]]},
        {"buckets": "A"},
    ],
)
def test_invalid_overrides(overrides):
    with pytest.raises(InvalidConfig):
        config_from_mapping(overrides)


def test_load_config_from_yaml(tmp_path):
    path = tmp_path / "tmctol.yaml"
    path.write_text(
        "fee_router_ppm: 3000\n"
        "min_bootstrap_amount: \"10\"\n"
        "buckets:\n"
        "  - [main, 1000000]\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.fee_router_ppm == 3_000
    assert cfg.min_bootstrap_amount == 10 * PRECISION
    assert cfg.buckets == (("main", 1_000_000),)


def test_load_empty_or_invalid_yaml(tmp_path):
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_config(empty) is DEFAULT_CONFIG

    bad = tmp_path / "bad.yaml"
    bad.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(InvalidConfig):
        load_config(bad)

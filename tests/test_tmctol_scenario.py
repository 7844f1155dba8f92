from __future__ import annotations

import json


def test_scenario_runner_prints_audit(capsys) -> None:
    from tools.tmctol_scenario import main

    rc = main(["--buy", "100", "--buy", "10", "--sell", "5"])
    out = capsys.readouterr().out

    assert rc == 0
    lines = [ln for ln in out.splitlines() if ln.startswith("[tmctol] buy") or ln.startswith("[tmctol] sell")]
    assert len(lines) == 3
    assert "via TMC" in lines[0]
    assert "via XYK" in lines[1]
    assert lines[2].startswith("[tmctol] sell")


def test_scenario_runner_json_and_config(tmp_path, capsys) -> None:
    from tools.tmctol_scenario import main

    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("min_bootstrap_amount: \"1\"\n", encoding="utf-8")

    rc = main(["--config", str(cfg), "--buy", "2", "--json"])
    payload = json.loads(capsys.readouterr().out.split("\n", 1)[1])

    assert rc == 0
    assert payload["violations"] == []
    assert payload["audit"]["supply"] > 0
    assert len(payload["audit"]["buckets"]) == 4


def test_scenario_runner_reports_rejection(capsys) -> None:
    from tools.tmctol_scenario import main

    rc = main(["--buy", "50"])
    out = capsys.readouterr().out
    assert rc == 1
    assert "FAIL (buy 50)" in out
    assert "bootstrap_too_small" in out


def test_scenario_runner_rejects_non_finite_amount(capsys) -> None:
    from tools.tmctol_scenario import main

    rc = main(["--buy", "Infinity"])
    out = capsys.readouterr().out
    assert rc == 1
    assert "[invalid_config]" in out


def test_jsonable_converts_enums_only() -> None:
    from types import SimpleNamespace

    from tmctol.core.types import Route
    from tools.tmctol_scenario import _jsonable

    holder = SimpleNamespace(value=5)
    assert _jsonable({"route": Route.POOL, "items": (Route.CURVE, 3)}) == {"route": "XYK", "items": ["TMC", 3]}
    assert _jsonable(holder) is holder

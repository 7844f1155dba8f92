#!/usr/bin/env python3
"""
Run a buy/sell scenario against a fresh TMCTOL system and print the audit.

Examples:
    tools/tmctol_scenario.py --buy 1000 --buy 250 --sell 50
    tools/tmctol_scenario.py --config scenario.yaml --buy 500 --json

Amounts on the command line are whole-token decimals ("0.5" = PRECISION // 2).
Exit code is 0 on success and 1 when a step is rejected or an invariant fails.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from enum import Enum
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tmctol import DEFAULT_CONFIG, create_system, load_config
from tmctol.config import parse_amount
from tmctol.errors import TmctolError
from tmctol.state import User


class _AppendStep(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        steps = getattr(namespace, "steps", None) or []
        steps.append((self.dest, values))
        namespace.steps = steps


def _fmt(amount: int) -> str:
    return f"{amount / 10**12:.6f}"


def _jsonable(obj):
    if dataclasses.is_dataclass(obj):
        return {k: _jsonable(v) for k, v in dataclasses.asdict(obj).items()}
    if isinstance(obj, dict):
        return {k: _jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_jsonable(v) for v in obj]
    if isinstance(obj, Enum):
        return obj.value
    return obj


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    ap.add_argument("--config", type=Path, default=None, help="YAML file with config overrides")
    ap.add_argument("--buy", action=_AppendStep, metavar="FOREIGN", help="buy native with FOREIGN (repeatable)")
    ap.add_argument("--sell", action=_AppendStep, metavar="NATIVE", help="sell NATIVE (repeatable)")
    ap.add_argument("--funds", default="1000000", help="initial foreign balance of the trading user")
    ap.add_argument("--json", action="store_true", help="print the final audit report as JSON")
    ap.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(args.config) if args.config else DEFAULT_CONFIG
        system = create_system(config)
        user = User(initial_foreign=parse_amount(args.funds), system=system)
    except TmctolError as exc:
        print(f"[tmctol] FAIL (setup): {exc}")
        return 1

    for kind, raw in getattr(args, "steps", None) or []:
        try:
            amount = parse_amount(raw)
            if kind == "buy":
                res = user.buy_native(amount)
                print(f"[tmctol] buy  {_fmt(amount)} via {res.route.value}: native_out={_fmt(res.native_out)} price_after={_fmt(res.price_after)}")
            else:
                res = user.sell_native(amount)
                print(f"[tmctol] sell {_fmt(amount)} via {res.route.value}: foreign_out={_fmt(res.foreign_out)} price_after={_fmt(res.price_after)}")
        except TmctolError as exc:
            print(f"[tmctol] FAIL ({kind} {raw}): [{exc.code}] {exc}")
            return 1

    report = system.audit()
    violations = system.check_invariants()
    if args.json:
        print(json.dumps({"audit": _jsonable(report), "violations": violations}, indent=2, sort_keys=True))
    else:
        print(f"[tmctol] supply={_fmt(report.supply)} burned={_fmt(report.total_burned)} owned_lp={report.owned_lp}")
        print(f"[tmctol] reserves native={_fmt(report.reserve_native)} foreign={_fmt(report.reserve_foreign)}")
    if violations:
        print(f"[tmctol] FAIL: invariant violations: {', '.join(violations)}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

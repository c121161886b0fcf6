from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .console.menu import MainMenu
from .infra.config import load_runtime_profile
from .infra.errors import MaintrackError
from .infra.factory import InfraBundle, build_infra
from .reporting import aggregates, render
from .session import load_registry, save_registry
from .stores import Registry

REPORTS: Dict[str, Callable[[Registry], List[str]]] = {
    "assets": render.asset_report,
    "departments": render.department_report,
    "technicians": render.technician_report,
    "orders": render.order_report,
    "unstable": render.unstable_report,
    "locations": render.location_report,
    "summary": render.summary_report,
}

# Key of each report inside the JSON summary; None means the whole document.
SUMMARY_KEYS: Dict[str, Optional[str]] = {
    "assets": "assets",
    "departments": "departments",
    "technicians": "technicians",
    "orders": "orders",
    "unstable": "unstable_assets",
    "locations": "locations",
    "summary": None,
}


def _repo_root() -> Path:
    # Assume this file is at repo_root/maintrack/cli.py
    return Path(__file__).resolve().parents[1]


def _bundle(args: argparse.Namespace) -> InfraBundle:
    profile = load_runtime_profile(_repo_root(), cli_path=args.runtime_profile)
    return build_infra(profile=profile)


def cmd_run(args: argparse.Namespace) -> int:
    bundle = _bundle(args)
    prompter = bundle.require_prompter()
    registry = load_registry(bundle)
    menu = MainMenu(registry, prompter, bundle.log_sink)
    try:
        menu.run()
    except EOFError:
        print("\n[maintrack] end of input, saving and exiting")
    except KeyboardInterrupt:
        print("\n[maintrack] interrupted, changes discarded")
        return 130

    results = save_registry(registry, bundle)
    failed = sorted(name for name, ok in results.items() if not ok)
    if failed:
        print(f"[maintrack][WARN] collections not saved: {', '.join(failed)}")
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    registry = load_registry(_bundle(args))
    if args.json:
        doc = aggregates.summary(registry)
        key = SUMMARY_KEYS[args.kind]
        print(json.dumps(doc if key is None else doc[key], indent=2, sort_keys=True))
        return 0
    for line in REPORTS[args.kind](registry):
        print(line)
    return 0


def cmd_logs(args: argparse.Namespace) -> int:
    for line in _bundle(args).log_sink.read_lines():
        print(line)
    return 0


def cmd_describe(args: argparse.Namespace) -> int:
    print(json.dumps(_bundle(args).describe(), indent=2, sort_keys=True))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="maintrack")
    p.add_argument("--runtime-profile", default="", help="Runtime profile YAML (overrides MAINTRACK_RUNTIME_PROFILE)")
    p.set_defaults(func=cmd_run)
    sub = p.add_subparsers(dest="cmd")

    sp = sub.add_parser("run", help="Run the interactive menu (default)")
    sp.set_defaults(func=cmd_run)

    sp = sub.add_parser("report", help="Print a report from the saved collections")
    sp.add_argument("kind", nargs="?", default="summary", choices=sorted(REPORTS))
    sp.add_argument("--json", action="store_true", help="Emit the aggregate document as JSON")
    sp.set_defaults(func=cmd_report)

    sp = sub.add_parser("logs", help="Print the audit log")
    sp.set_defaults(func=cmd_logs)

    sp = sub.add_parser("describe", help="Describe the adapters wired by the runtime profile")
    sp.set_defaults(func=cmd_describe)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args) or 0)
    except MaintrackError as e:
        print(f"[maintrack][ERROR] {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

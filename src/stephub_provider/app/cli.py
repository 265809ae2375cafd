from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from stephub_provider.app.runtime import build_runtime
from stephub_provider.config.loader import load_config
from stephub_provider.errors import ProviderConfigError
from stephub_provider.observability.logging import StdoutLogSink


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stephub-provider", description="Step provider tooling")
    commands = parser.add_subparsers(dest="command", required=True)
    specs = commands.add_parser("specs", help="Run discovery and print registered step specs as JSON")
    specs.add_argument("--config", required=True, help="Path to YAML config")
    specs.add_argument(
        "--module",
        action="append",
        dest="modules",
        help="Module to scan for provider beans (repeatable, overrides provider.modules)",
    )
    specs.add_argument("--indent", type=int, default=2)
    return parser


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    return build_parser().parse_args(list(argv))


def run(argv: Sequence[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        config = load_config(Path(args.config))
        # Keep stdout for the JSON document.
        log_sink = StdoutLogSink(sys.stderr) if config.logging.sink == "stdout" else None
        runtime = build_runtime(config, modules=args.modules, log_sink=log_sink)
    except ProviderConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    print(json.dumps(runtime.describe(), indent=args.indent, ensure_ascii=False))
    return 0


def main() -> None:
    raise SystemExit(run())

# -----------------------------------------------------------------------------
# konvert command line
#   konvert 1 kg mg             → 1.0 kg = 1000000.0 mg
#   konvert 0 C F --all-paths   → also list every alternative path
#   konvert --list-units
# Exit codes: 0 ok, 1 no path / search exhausted, 2 usage, unknown unit or bad table
# -----------------------------------------------------------------------------

from __future__ import annotations
import argparse
import platform
import sys
from typing import List, Optional
from . import __version__
from .config import ConfigError, load_settings
from .converter import Converter
from .planner import SearchExhausted
from .table import ConversionTable, TableError
from .tracer import save_trace

EXIT_OK = 0
EXIT_NO_PATH = 1
EXIT_USAGE = 2

def echo(msg: str): print(f"[konvert] {msg}", file=sys.stderr, flush=True)

def _positive_int(raw: str) -> int:
    try:
        n = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}")
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {n}")
    return n

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="konvert", description="Convert a value between units.")
    p.add_argument("value", nargs="?", type=float, help="numeric value to convert")
    p.add_argument("source", nargs="?", help="unit to convert from")
    p.add_argument("target", nargs="?", help="unit to convert to")
    p.add_argument("--table", "-t", help="YAML conversion table (default: $KONVERT_TABLE or built-in)")
    p.add_argument("--list-units", action="store_true", help="print known units and exit")
    p.add_argument("--all-paths", action="store_true", help="also print every alternative path")
    p.add_argument("--verify", action="store_true", help="cross-check the result with pint")
    p.add_argument("--trace", action="store_true", help="write a JSON trace to $TRACE_DIR")
    p.add_argument("--max-expansions", type=_positive_int, help="path-search budget")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p

def _load_table(path: Optional[str]) -> ConversionTable:
    return ConversionTable.from_file(path) if path else ConversionTable.builtin()

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
        table = _load_table(args.table or settings.table_path)
    except (ConfigError, TableError) as e:
        echo(str(e))
        return EXIT_USAGE

    budget = args.max_expansions if args.max_expansions is not None else settings.max_expansions
    converter = Converter.from_table(table, max_expansions=budget)

    if args.list_units:
        for u in converter.units():
            print(u)
        return EXIT_OK

    if args.value is None or args.target is None:
        parser.print_usage(sys.stderr)
        echo("VALUE, SOURCE and TARGET are required.")
        return EXIT_USAGE

    res = converter.convert(args.value, args.source, args.target, verify=args.verify)

    if args.trace:
        meta = {"version": __version__, "platform": platform.platform(), "argv": argv if argv is not None else sys.argv[1:]}
        path = save_trace(meta, res.full_trace, settings.trace_dir)
        echo(f"trace written to {path}")

    if not res.ok:
        echo(res.error or "conversion failed")
        if res.error_kind == "unknown_unit":
            echo(f"known units: {', '.join(converter.units())}")
            return EXIT_USAGE
        return EXIT_NO_PATH

    print(f"{args.value} {args.source} = {res.value} {args.target}")
    for line in res.steps:
        echo(f"  {line}")

    if args.all_paths:
        try:
            for p in converter.all_paths(args.source, args.target):
                print("  " + " -> ".join([p[0].source_unit] + [c.target_unit for c in p]))
        except SearchExhausted as e:
            echo(str(e))

    if res.check is not None:
        if res.check["status"] == "failed":
            echo(f"cross-check failed: {res.check['reason']}")
        else:
            echo(f"cross-check {res.check['status']}")

    return EXIT_OK

if __name__ == "__main__":
    sys.exit(main())

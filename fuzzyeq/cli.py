from __future__ import annotations
import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from fuzzyeq.core.config import ComparisonConfig
from fuzzyeq.core.engine import FuzzyComparer
from fuzzyeq.core.errors import FuzzyEqualError
from fuzzyeq.core.observer import RecordingObserver
from fuzzyeq.io import build_config, load_config, load_value, save_json
from fuzzyeq.reporting import build_json_report, format_text_report
from fuzzyeq import __version__

logger = logging.getLogger("fuzzyeq")


def _resolve_config(args: argparse.Namespace) -> ComparisonConfig:
    cfg: Dict[str, Any] = load_config(args.config) if args.config else {}
    if args.tolerance is not None:
        cfg["tolerance"] = args.tolerance
    if args.map_strategy is not None:
        cfg["map_strategy"] = args.map_strategy
    return build_config(cfg)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="fuzzyeq", description="Tolerance-aware structural equality")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_cmp = sub.add_parser("compare", help="Compare two JSON/YAML documents")
    p_cmp.add_argument("left", help="Path to the left document (JSON or YAML)")
    p_cmp.add_argument("right", help="Path to the right document (JSON or YAML)")
    p_cmp.add_argument("--tolerance", type=float, default=None, help="Absolute tolerance for numeric leaves")
    p_cmp.add_argument("--map-strategy", choices=["keyed", "lockstep"], default=None, help="How map entries are paired")
    p_cmp.add_argument("--config", required=False, help="Path to configuration file (JSON/YAML)")
    p_cmp.add_argument("--explain", action="store_true", help="Print a table of every comparison step")
    p_cmp.add_argument("--out", required=False, help="Path to write a JSON report")
    p_cmp.add_argument("-v", "--verbose", action="store_true", help="Log mismatches to stderr")
    sub.add_parser("version", help="Show fuzzyeq version and exit")

    args = parser.parse_args(argv)

    if args.cmd == "version":
        print(__version__)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _resolve_config(args)
    except FuzzyEqualError as e:
        logger.error("invalid configuration: %s", e)
        return 2

    left = load_value(args.left)
    right = load_value(args.right)
    recorder = RecordingObserver()
    comparer = FuzzyComparer.from_config(config, observer=recorder)
    result = comparer.compare(left, right)

    first = recorder.first_mismatch
    if first is not None:
        logger.debug("first mismatch at %s (%s): %s vs %s", first.path, first.category.value, first.left, first.right)

    if args.out:
        save_json(args.out, build_json_report(result, recorder.events, config=config))
    if args.explain:
        print(format_text_report(result, recorder.events, config=config))
    else:
        print("true" if result else "false")
    return 0 if result else 1


if __name__ == "__main__":
    sys.exit(main())

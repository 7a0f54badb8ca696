"""Command-line interface for ruleflow.

This module provides the CLI for evaluating rules from the command line.

Usage:
    ruleflow evaluate --rule <path-or-json> [--data <path-or-json>] [options]

Commands:
    evaluate    Evaluate a rule against a JSON data context.
    operators   List the builtin and registered custom operators.

Exit codes:
    0: The result is truthy (or help shown)
    1: The rule or data could not be loaded or evaluated
    2: Unknown command
    3: The result is falsy
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .engine import RuleEngine
from .errors import RuleFlowError
from .loader import load_data, load_rule
from .operators import BUILTIN_OPERATORS
from .utils import is_truthy

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format="%(levelname)s %(name)s: %(message)s")


def _cmd_evaluate(argv: list[str]) -> int:
    """Execute the 'evaluate' command.

    Args:
        argv: Command-line arguments after 'evaluate'.

    Returns:
        int: Exit code (0 if truthy, 3 if falsy, 1 on error).
    """
    p = argparse.ArgumentParser(prog="ruleflow evaluate")
    p.add_argument("--rule", required=True, help="Rule JSON file path or inline JSON")
    p.add_argument("--data", default=None, help="Data JSON file path or inline JSON")
    p.add_argument("--log-level", default="warning", help="debug|info|warning|error")
    args = p.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        rule = load_rule(args.rule)
        data = load_data(args.data)
        result = RuleEngine().evaluate(rule, data)
    except RuleFlowError as exc:
        logger.debug("evaluation failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result, sort_keys=True, default=str))
    return 0 if is_truthy(result) else 3


def _cmd_operators(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="ruleflow operators")
    p.parse_args(argv)

    engine = RuleEngine()
    for name in sorted(BUILTIN_OPERATORS):
        print(name)
    for name in engine.registry.operators():
        print(f"{name} (custom)")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the ruleflow CLI.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        int: Exit code.
            - 0: Truthy result, or help shown
            - 1: Loading or evaluation failed
            - 2: Unknown command
            - 3: Falsy result
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] in {"-h", "--help"}:
        print("Usage: ruleflow <command> [args]\n\nCommands:\n  evaluate\n  operators")
        return 0

    cmd, rest = argv[0], argv[1:]
    if cmd == "evaluate":
        return _cmd_evaluate(rest)
    if cmd == "operators":
        return _cmd_operators(rest)

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())

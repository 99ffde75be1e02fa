"""Command-line interface for rulelex."""

from __future__ import annotations

import argparse
import io
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from rulelex.config import load_config, rules_from_config
from rulelex.debug import dump_tokens, tokens_to_json
from rulelex.errors import IllegalCharacter, RuleError
from rulelex.rules import Rule
from rulelex.scanner import Scanner


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    rules: tuple[Rule, ...]
    json: bool
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="rulelex",
        description="Tokenize a file with a TOML rule table",
    )
    p.add_argument("input", help="Input file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-r",
        "--rules",
        metavar="FILE",
        help="Rule table (default: auto-discover rulelex.toml next to the input)",
    )
    p.add_argument("--json", action="store_true", help="Write tokens as JSON")
    p.add_argument("-v", "--verbose", action="store_true", help="Log scanner activity to stderr")
    return p


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Load the rule table and build CliOptions. Raises RuleError on a bad table."""
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    rules_path = Path(args.rules) if args.rules else None
    if rules_path is not None and not rules_path.is_file():
        raise RuleError(f"rule file not found: {rules_path}")
    config = load_config(rules_path, input_dir)

    return CliOptions(
        input_file=input_file,
        output_file=Path(args.output) if args.output else None,
        rules=rules_from_config(config),
        json=args.json,
        verbose=args.verbose,
    )


def tokenize_file(options: CliOptions) -> str:
    """Read and scan the input file, returning the rendered token listing."""
    source = options.input_file.read_text(encoding="utf-8")
    scanner = Scanner(options.rules)
    tokens = scanner.scan(source)

    if options.json:
        return json.dumps(tokens_to_json(tokens), indent=2) + "\n"
    out = io.StringIO()
    dump_tokens(tokens, scanner.rules, file=out)
    return out.getvalue()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        options = resolve_options(args)
        output = tokenize_file(options)
    except IllegalCharacter as exc:
        print(exc.format(args.input), file=sys.stderr)
        return 1
    except RuleError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {args.input}: {exc}", file=sys.stderr)
        return 2

    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    return 0

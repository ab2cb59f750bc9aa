"""
Main Entry Point for qb-lint CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `qb_lint.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from qb_lint import __version__
from qb_lint.cli import commands
from qb_lint.config import parse_cli_key_values
from qb_lint.enums import CheckLevel, Platform


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="qb-lint: Static analysis for QB64PE BASIC")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CHECK ---
  cmd_check = subparsers.add_parser("check", help="Validate a source file or every source file in a directory")
  cmd_check.add_argument("path", type=Path, help="Input .bas file or directory")
  cmd_check.add_argument(
    "--level",
    choices=[level.value for level in CheckLevel],
    default=None,
    help="Check level (default: from toml, else basic)",
  )
  cmd_check.add_argument("--json", action="store_true", help="Print reports as JSON instead of tables")
  cmd_check.add_argument(
    "--config",
    nargs="*",
    help="Configuration overrides in key=value format (e.g. max_line_length=100 disabled_rules=magic-number)",
  )

  # --- Command: KEYWORD ---
  cmd_kw = subparsers.add_parser("keyword", help="Look up a keyword")
  cmd_kw.add_argument("name", help="Keyword to validate, e.g. _KEYHIT")

  # --- Command: SEARCH ---
  cmd_search = subparsers.add_parser("search", help="Search keywords by name, description and related terms")
  cmd_search.add_argument("query", help="Search text")
  cmd_search.add_argument("--limit", type=int, default=20, help="Maximum number of results (default: 20)")

  # --- Command: RULES ---
  cmd_rules = subparsers.add_parser("rules", help="List compatibility rules or search compatibility notes")
  cmd_rules.add_argument("--query", default=None, help="Search compatibility categories instead of listing rules")

  # --- Command: PLATFORM ---
  cmd_plat = subparsers.add_parser("platform", help="Show platform compatibility")
  cmd_plat.add_argument(
    "platform",
    nargs="?",
    default="all",
    choices=[p.value for p in Platform] + ["all"],
    help="Platform to show (default: all)",
  )

  # --- Command: KEYBOARD ---
  cmd_kb = subparsers.add_parser("keyboard", help="Check _KEYDOWN/INKEY$ usage for keyboard buffer leaks")
  cmd_kb.add_argument("path", type=Path, help="Input .bas file")

  args = parser.parse_args(argv)

  if args.command == "check":
    overrides = parse_cli_key_values(args.config)
    return commands.handle_check(args.path, args.level, args.json, overrides)

  elif args.command == "keyword":
    return commands.handle_keyword(args.name)

  elif args.command == "search":
    return commands.handle_search(args.query, args.limit)

  elif args.command == "rules":
    return commands.handle_rules(args.query)

  elif args.command == "platform":
    return commands.handle_platform(args.platform)

  elif args.command == "keyboard":
    return commands.handle_keyboard(args.path)

  return 0


if __name__ == "__main__":
  sys.exit(main())

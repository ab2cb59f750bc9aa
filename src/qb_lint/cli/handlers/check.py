"""
Check Command Handler.

Validates a single source file, or every QB64PE source file below a
directory, and renders the reports as Rich tables or JSON.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from qb_lint.config import RuntimeConfig
from qb_lint.core.engine import ValidationEngine
from qb_lint.core.inputs import check_source_input
from qb_lint.core.report import ValidationReport
from qb_lint.errors import ConfigurationError
from qb_lint.utils.console import (
  SEVERITY_STYLES,
  console,
  get_console,
  log_error,
  log_info,
  log_success,
  log_warning,
  set_console,
)

SOURCE_SUFFIXES = (".bas", ".bi", ".bm")


def collect_source_files(path: Path) -> List[Path]:
  """
  Expands a path into the source files to validate.

  Args:
      path: A file, or a directory searched recursively.

  Returns:
      List[Path]: Files in sorted order. A file argument is returned as-is
      whatever its suffix.
  """
  if path.is_file():
    return [path]
  return sorted(p for p in path.rglob("*") if p.is_file() and p.suffix.lower() in SOURCE_SUFFIXES)


def read_source(path: Path) -> str:
  """
  Reads a source file.

  QB64PE sources are frequently saved in a DOS code page rather than UTF-8;
  such files are decoded as Latin-1 so that every byte maps to a character.

  Args:
      path: File to read.

  Returns:
      str: The decoded text.

  Raises:
      OSError: If the file cannot be read.
  """
  data = path.read_bytes()
  try:
    return data.decode("utf-8")
  except UnicodeDecodeError:
    log_warning(f"{escape(str(path))} is not UTF-8; decoding as Latin-1")
    return data.decode("latin-1")


def _issue_rows(report: ValidationReport) -> List[Tuple[int, int, str, str, str, str]]:
  rows = []
  for issue in [*report.errors, *report.warnings]:
    rows.append((issue.line, issue.column, issue.severity.value, issue.rule, issue.message, issue.suggestion))
  for issue in report.compatibility_issues:
    rows.append((issue.line, issue.column, issue.severity.value, issue.category, issue.message, issue.suggestion))
  for issue in report.keyword_issues:
    rows.append(
      (issue.line, issue.column, issue.severity.value, issue.keyword, issue.message, ", ".join(issue.suggestions))
    )
  return sorted(rows, key=lambda r: (r[0], r[1]))


def _render_report(path: Path, report: ValidationReport) -> None:
  rows = _issue_rows(report)
  if rows:
    table = Table(title=f"Issues in {escape(str(path))}")
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Severity")
    table.add_column("Rule", style="cyan")
    table.add_column("Message")
    table.add_column("Suggestion", style="dim")
    for line, column, severity, rule, message, suggestion in rows:
      style = SEVERITY_STYLES.get(severity, "")
      table.add_row(
        str(line),
        str(column),
        f"[{style}]{severity}[/{style}]",
        escape(rule),
        escape(message),
        escape(suggestion),
      )
    console.print(table)

  for hint in report.suggestions:
    console.print(f"  [info]hint:[/info] {escape(hint)}")

  status = "[success]valid[/success]" if report.is_valid else "[error]invalid[/error]"
  console.print(
    f"[path]{escape(str(path))}[/path]: {status}, score [bold]{report.score}[/bold]/100, "
    f"{report.error_count} error(s), {report.warning_count} warning(s)"
  )


def handle_check(
  path: Path,
  level: Optional[str] = None,
  json_mode: bool = False,
  overrides: Optional[Dict[str, Any]] = None,
) -> int:
  """
  Validates source files and prints the results.

  Args:
      path: Input file or directory.
      level: Check level override.
      json_mode: If True, print a JSON array to stdout. Log messages go to
        stderr for the duration of the call so stdout stays parseable.
      overrides: Extra configuration values from `--config`.

  Returns:
      int: Exit code (0 if every file is valid, 1 otherwise).
  """
  if not json_mode:
    return _check(path, level, json_mode, overrides)

  previous = get_console()
  set_console(Console(stderr=True))
  try:
    return _check(path, level, json_mode, overrides)
  finally:
    set_console(previous)


def _check(path: Path, level: Optional[str], json_mode: bool, overrides: Optional[Dict[str, Any]]) -> int:
  if not path.exists():
    log_error(f"Path not found: {escape(str(path))}")
    return 1

  search_dir = path if path.is_dir() else path.parent
  try:
    config = RuntimeConfig.load(check_level=level, overrides=overrides, search_path=search_dir)
  except ConfigurationError as e:
    log_error(escape(str(e)))
    return 1

  files = collect_source_files(path)
  if not files:
    log_warning(f"No QB64PE source files found under {escape(str(path))}")
    if json_mode:
      print("[]")
    return 0

  if not json_mode:
    log_info(f"Checking {len(files)} file(s) at level '{config.check_level.value}'...")

  engine = ValidationEngine(config=config)
  failed = False
  results = []

  for f in files:
    try:
      code = read_source(f)
    except OSError as e:
      log_error(f"Failed to read {escape(str(f))}: {escape(str(e))}")
      failed = True
      continue

    guard = check_source_input(code, allow_empty=True)
    for warning in guard.warnings:
      log_warning(f"{escape(str(f))}: {warning}")
    if not guard.is_valid:
      for error in guard.errors:
        log_error(f"{escape(str(f))}: {error}")
      failed = True
      continue

    report = engine.validate(code)
    failed = failed or not report.is_valid

    if json_mode:
      results.append({"file": str(f), "report": report.model_dump(mode="json")})
    else:
      _render_report(f, report)

  if json_mode:
    print(json.dumps(results, indent=2))
  elif not failed:
    log_success(f"All {len(files)} file(s) passed.")

  return 1 if failed else 0

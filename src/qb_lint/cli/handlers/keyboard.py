"""
Keyboard Safety Handler.

Reports keyboard buffer hazards in one source file.
"""

from pathlib import Path

from rich.markup import escape
from rich.table import Table

from qb_lint.cli.handlers.check import read_source
from qb_lint.core.engine import split_lines
from qb_lint.rules.keyboard import analyze_keyboard_safety
from qb_lint.utils.console import console, log_error, log_success


def handle_keyboard(path: Path) -> int:
  """
  Analyzes `_KEYDOWN` and `INKEY$` usage in a file.

  Args:
      path: Source file to analyze.

  Returns:
      int: 0 if no hazards were found, 1 otherwise.
  """
  if not path.is_file():
    log_error(f"File not found: {escape(str(path))}")
    return 1

  try:
    code = read_source(path)
  except OSError as e:
    log_error(f"Failed to read {escape(str(path))}: {escape(str(e))}")
    return 1

  report = analyze_keyboard_safety(split_lines(code))
  if not report.has_issues:
    log_success(f"No keyboard buffer issues in {escape(str(path))}")
    return 0

  table = Table(title=f"Keyboard buffer issues in {escape(str(path))}")
  table.add_column("Line", justify="right")
  table.add_column("Risk")
  table.add_column("Pattern", style="cyan")
  table.add_column("Message")
  table.add_column("Suggestion", style="dim")
  for issue in report.issues:
    table.add_row(
      str(issue.line),
      issue.risk_level.value,
      escape(issue.pattern),
      escape(issue.message),
      escape(issue.suggestion),
    )
  console.print(table)

  for suggestion in report.suggestions:
    console.print(f"  - {escape(suggestion)}")
  return 1

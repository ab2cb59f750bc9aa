"""
Compatibility Knowledge Handlers.

List the active compatibility rules, search compatibility notes, and show
the platform support table.
"""

from typing import Optional

from rich.markup import escape
from rich.table import Table

from qb_lint.rules.knowledge import get_best_practices, get_platform_compatibility, search_compatibility
from qb_lint.rules.loader import default_rule_set
from qb_lint.utils.console import SEVERITY_STYLES, console, log_warning


def handle_rules(query: Optional[str] = None) -> int:
  """
  Prints the active rules, or compatibility notes matching `query`.

  Args:
      query: Optional search text.

  Returns:
      int: Exit code (1 if a search found nothing).
  """
  rule_set = default_rule_set()

  if query is None:
    table = Table(title=f"Compatibility rules ({len(rule_set)})")
    table.add_column("Category", style="cyan")
    table.add_column("Severity")
    table.add_column("Scope")
    table.add_column("Message")
    for rule in rule_set:
      style = SEVERITY_STYLES.get(rule.severity.value, "")
      table.add_row(
        rule.category,
        f"[{style}]{rule.severity.value}[/{style}]",
        rule.scope.value,
        escape(rule.message),
      )
    console.print(table)
    console.print("\n[bold]Best practices[/bold]")
    for practice in get_best_practices():
      console.print(f"  - {escape(practice)}")
    return 0

  results = search_compatibility(query, rule_set)
  if not results:
    log_warning(f"No compatibility notes match '{escape(query)}'")
    return 1

  for result in results:
    console.print(f"[bold]{escape(result.title)}[/bold] ({result.category})")
    console.print(f"  {escape(result.description)}")
    for issue in result.issues:
      console.print(f"  - {escape(issue.message)}")
      if issue.suggestion:
        console.print(f"    [dim]{escape(issue.suggestion)}[/dim]")
  return 0


def handle_platform(platform: str = "all") -> int:
  """
  Prints which features each platform supports.

  Args:
      platform: "windows", "linux", "macos" or "all".

  Returns:
      int: Always 0.
  """
  table = Table(title="Platform compatibility")
  table.add_column("Platform", style="cyan")
  table.add_column("Supported")
  table.add_column("Unsupported", style="red")
  table.add_column("Notes", style="dim")
  for name, info in get_platform_compatibility(platform).items():
    table.add_row(name, escape(info.supported), escape(", ".join(info.unsupported)), escape(info.notes))
  console.print(table)
  return 0

"""
Keyword Command Handlers.

Look up a single keyword, or search the dictionary.
"""

from rich.markup import escape
from rich.table import Table

from qb_lint.keywords.dictionary import default_keyword_dictionary
from qb_lint.utils.console import console, log_error, log_warning


def handle_keyword(name: str) -> int:
  """
  Validates a keyword and prints its entry or the closest matches.

  Args:
      name: Keyword as typed by the user.

  Returns:
      int: 0 if the keyword exists, 1 otherwise.
  """
  dictionary = default_keyword_dictionary()
  validation = dictionary.validate_keyword(name)

  if not validation.is_valid:
    log_error(f"Unknown keyword: [code]{escape(name)}[/code]")
    if validation.suggestions:
      console.print("Did you mean: " + ", ".join(escape(s) for s in validation.suggestions))
    return 1

  entry = validation.entry
  console.print(f"[bold]{escape(entry.name)}[/bold] ({entry.type.value}, {entry.version.value})")
  if entry.description:
    console.print(escape(entry.description))
  if entry.syntax:
    console.print(f"  Syntax:  [code]{escape(entry.syntax)}[/code]")
  if entry.returns:
    console.print(f"  Returns: {escape(entry.returns)}")
  if entry.example:
    console.print(f"  Example: [code]{escape(entry.example)}[/code]")
  if entry.availability:
    console.print(f"  Availability: {escape(entry.availability)}")
  if entry.related:
    console.print("  Related: " + ", ".join(escape(r) for r in entry.related))
  if entry.deprecated:
    log_warning(f"{escape(entry.name)} is deprecated.")
  return 0


def handle_search(query: str, limit: int = 20) -> int:
  """
  Searches the dictionary and prints a ranked table.

  Args:
      query: Search text.
      limit: Maximum number of rows.

  Returns:
      int: 0 if anything matched, 1 otherwise.
  """
  results = default_keyword_dictionary().search(query, max_results=limit)
  if not results:
    log_warning(f"No keywords match '{escape(query)}'")
    return 1

  table = Table(title=f"Keywords matching '{escape(query)}'")
  table.add_column("Keyword", style="cyan")
  table.add_column("Match")
  table.add_column("Score", justify="right")
  table.add_column("Description", style="dim")
  for result in results:
    table.add_row(
      escape(result.keyword),
      result.match_type.value,
      str(result.relevance),
      escape(result.entry.description),
    )
  console.print(table)
  return 0

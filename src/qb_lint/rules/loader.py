"""
Rule Set Loading.

Reads compatibility rule definitions from a JSON data file and merges them
with the built-in rules into an immutable `RuleSet`. Read or parse failures are
logged and recovered from; the built-in rules are always present.
"""

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from pydantic import ValidationError
from rich.markup import escape

from qb_lint.errors import DataLoadError
from qb_lint.paths import default_rules_path
from qb_lint.rules.builtin import BUILTIN_RULES
from qb_lint.rules.schema import Rule
from qb_lint.utils.console import log_warning


@dataclass(frozen=True)
class RuleSet:
  """
  Immutable, ordered collection of active rules.

  Attributes:
      rules: Data file rules first, then the built-in rules they did not replace.
      source: Path of the data file that was loaded, or None if only built-ins are active.
  """

  rules: Tuple[Rule, ...]
  source: Optional[Path] = None

  @property
  def categories(self) -> Tuple[str, ...]:
    """Rule categories in evaluation order."""
    return tuple(rule.category for rule in self.rules)

  def get(self, category: str) -> Optional[Rule]:
    """
    Looks up a rule by category.

    Args:
        category: The rule name.

    Returns:
        Optional[Rule]: The rule, or None if no rule has that category.
    """
    for rule in self.rules:
      if rule.category == category:
        return rule
    return None

  def __len__(self) -> int:
    return len(self.rules)

  def __iter__(self):
    return iter(self.rules)


def load_rule_file(path: Path) -> List[Rule]:
  """
  Parses a rule data file.

  Entries that are not objects or lack a `regex` or `message` are skipped.
  Entries whose values fail validation are skipped with a warning.

  Args:
      path: JSON file shaped as `{"patterns": {category: {...}}}`.

  Returns:
      List[Rule]: Rules in file order.

  Raises:
      DataLoadError: If the file cannot be read, is not valid JSON, or has no
          `patterns` object.
  """
  try:
    with open(path, "r", encoding="utf-8") as f:
      content = json.load(f)
  except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
    raise DataLoadError(path, str(e))

  patterns = content.get("patterns") if isinstance(content, dict) else None
  if not isinstance(patterns, dict):
    raise DataLoadError(path, "missing 'patterns' object")

  rules = []
  for category, definition in patterns.items():
    if not isinstance(definition, dict) or "regex" not in definition or "message" not in definition:
      continue
    try:
      rules.append(Rule.from_definition(category, definition))
    except ValidationError as e:
      log_warning(f"Skipping rule '{escape(category)}' in {escape(path.name)}: {escape(str(e))}")
  return rules


def merge_rules(external: Iterable[Rule], builtin: Iterable[Rule] = BUILTIN_RULES) -> Tuple[Rule, ...]:
  """
  Combines data file rules with built-in rules.

  A data file rule replaces the built-in rule of the same category. Built-in
  rules for every other category are appended after the data file rules.

  Args:
      external: Rules read from a data file.
      builtin: Rules that must always be covered.

  Returns:
      Tuple[Rule, ...]: The merged, ordered rules.
  """
  merged = list(external)
  seen = {rule.category for rule in merged}
  for rule in builtin:
    if rule.category not in seen:
      merged.append(rule)
      seen.add(rule.category)
  return tuple(merged)


def build_rule_set(path: Optional[Path] = None, disabled: Iterable[str] = ()) -> RuleSet:
  """
  Loads a rule file and merges it with the built-in rules.

  Args:
      path: Rule data file. Defaults to the packaged `compatibility_rules.json`.
      disabled: Categories to leave out of the result.

  Returns:
      RuleSet: The active rules. Never empty unless every category is disabled.
  """
  target = path or default_rules_path()
  source: Optional[Path] = target
  try:
    external = load_rule_file(target)
  except DataLoadError as e:
    log_warning(f"Using built-in compatibility rules only. {escape(str(e))}")
    external = []
    source = None

  skip = set(disabled)
  rules = tuple(rule for rule in merge_rules(external) if rule.category not in skip)
  return RuleSet(rules=rules, source=source)


@lru_cache(maxsize=1)
def default_rule_set() -> RuleSet:
  """
  Returns the shared rule set built from the packaged data file.

  Returns:
      RuleSet: Built once per process and reused by every engine.
  """
  return build_rule_set()

"""
Rule Engine.

Evaluates a `RuleSet` against source lines. Line-scope rules are searched on
every physical line on their own; document-scope rules are searched once over
the newline-joined text and their matches are mapped back to line and column.
"""

from bisect import bisect_right
from typing import List, Optional, Sequence

from qb_lint.core.report import CompatibilityIssue
from qb_lint.enums import RuleScope
from qb_lint.rules.loader import RuleSet, default_rule_set
from qb_lint.rules.schema import Rule

ANCHOR_GROUP = "at"


def _issue(rule: Rule, line: int, column: int, matched: str) -> CompatibilityIssue:
  return CompatibilityIssue(
    line=line,
    column=column,
    severity=rule.severity,
    category=rule.category,
    pattern=matched,
    message=rule.message,
    suggestion=rule.suggestion,
    examples=rule.examples,
  )


class RuleEngine:
  """
  Applies compatibility rules to source text.

  The engine holds a reference to an immutable rule set and no per-call state.
  """

  def __init__(self, rule_set: Optional[RuleSet] = None) -> None:
    """
    Args:
        rule_set: Rules to apply. Defaults to the shared packaged rule set.
    """
    self.rule_set = rule_set if rule_set is not None else default_rule_set()

  def apply_rules(self, lines: Sequence[str]) -> List[CompatibilityIssue]:
    """
    Runs every rule over the given lines.

    Each line-scope rule contributes at most one issue per line, at the first
    match. Each document-scope rule contributes at most one issue per line.

    Args:
        lines: Physical source lines.

    Returns:
        List[CompatibilityIssue]: Line-scope issues ordered by line then rule,
        followed by document-scope issues ordered by rule then position.
    """
    line_rules = [rule for rule in self.rule_set if rule.scope == RuleScope.LINE]
    doc_rules = [rule for rule in self.rule_set if rule.scope == RuleScope.DOCUMENT]

    issues: List[CompatibilityIssue] = []
    for index, line in enumerate(lines):
      for rule in line_rules:
        match = rule.regex.search(line)
        if match:
          issues.append(_issue(rule, index + 1, match.start() + 1, match.group(0)))

    if doc_rules:
      issues.extend(self._apply_document_rules(doc_rules, lines))

    return issues

  def _apply_document_rules(self, rules: List[Rule], lines: Sequence[str]) -> List[CompatibilityIssue]:
    text = "\n".join(lines)
    line_starts = [0]
    for line in lines[:-1]:
      line_starts.append(line_starts[-1] + len(line) + 1)

    issues = []
    for rule in rules:
      reported = set()
      for match in rule.regex.finditer(text):
        if ANCHOR_GROUP in rule.regex.groupindex and match.start(ANCHOR_GROUP) >= 0:
          offset = match.start(ANCHOR_GROUP)
          matched = match.group(ANCHOR_GROUP)
        else:
          offset = match.start()
          matched = match.group(0)

        line_index = bisect_right(line_starts, offset) - 1
        if line_index in reported:
          continue
        reported.add(line_index)
        column = offset - line_starts[line_index] + 1
        issues.append(_issue(rule, line_index + 1, column, matched))
    return issues

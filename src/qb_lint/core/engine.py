"""
Orchestration Engine for source validation.

This module provides the `ValidationEngine`, the primary driver of the
analysis. It splits the source into physical lines and coordinates the
independent passes over them:

1.  **Structure**: loop and procedure nesting (`StructuralValidator`).
2.  **Syntax**: per-level line checks (`SyntaxChecker`).
3.  **Compatibility**: regex rules from the rule set (`RuleEngine`).
4.  **Keywords**: identifier tokens against the dictionary (`KeywordResolver`).
5.  **Scoring**: a 0-100 quality score over all findings.

The rule set and keyword dictionary are loaded once, when the engine is
constructed, and are shared read-only by every `validate` call. Apart from
them the engine carries no state, so one instance can be reused freely.
"""

import re
from typing import List, Optional, Union

from qb_lint.config import RuntimeConfig
from qb_lint.core.checks import SyntaxChecker
from qb_lint.core.report import ValidationReport
from qb_lint.core.scoring import calculate_score
from qb_lint.core.structure import StructuralValidator
from qb_lint.enums import CheckLevel, Severity
from qb_lint.errors import ConfigurationError
from qb_lint.keywords.dictionary import KeywordDictionary, build_keyword_dictionary, default_keyword_dictionary
from qb_lint.keywords.resolver import KeywordResolver
from qb_lint.rules.engine import RuleEngine
from qb_lint.rules.loader import RuleSet, build_rule_set, default_rule_set

_LINE_BREAK_RE = re.compile(r"\r?\n")


def split_lines(text: str) -> List[str]:
  """
  Splits source text into physical lines.

  Both LF and CRLF line endings are accepted. A trailing newline does not
  produce an extra empty line.

  Args:
      text: The full source text.

  Returns:
      List[str]: Lines without their terminators.
  """
  lines = _LINE_BREAK_RE.split(text)
  if len(lines) > 1 and lines[-1] == "":
    lines.pop()
  return lines


class ValidationEngine:
  """
  Runs every analysis pass over a source text and aggregates the results.
  """

  def __init__(
    self,
    rule_set: Optional[RuleSet] = None,
    dictionary: Optional[KeywordDictionary] = None,
    config: Optional[RuntimeConfig] = None,
  ) -> None:
    """
    Initializes the Engine.

    Explicit `rule_set` and `dictionary` arguments take precedence. Otherwise
    data files named in `config` are loaded, and without those the shared
    packaged data is used.

    Args:
        rule_set: Compatibility rules to apply.
        dictionary: Keyword dictionary to resolve against.
        config: Runtime settings. Defaults to `RuntimeConfig()`.
    """
    self.config = config or RuntimeConfig()

    if rule_set is None:
      if self.config.rules_path is not None:
        rule_set = build_rule_set(self.config.rules_path)
      else:
        rule_set = default_rule_set()
    if dictionary is None:
      if self.config.keywords_path is not None:
        dictionary = build_keyword_dictionary(self.config.keywords_path)
      else:
        dictionary = default_keyword_dictionary()

    if self.config.disabled_rules:
      active = tuple(rule for rule in rule_set if self.config.is_enabled(rule.category))
      rule_set = RuleSet(rules=active, source=rule_set.source)

    self.rule_set = rule_set
    self.dictionary = dictionary
    self.structure = StructuralValidator()
    self.checker = SyntaxChecker(dictionary, max_line_length=self.config.max_line_length)
    self.rules = RuleEngine(rule_set)
    self.resolver = KeywordResolver(dictionary)

  def validate(self, text: str, check_level: Optional[Union[CheckLevel, str]] = None) -> ValidationReport:
    """
    Validates a source text.

    Never raises for any input text; problems in the source are reported as
    issues.

    Args:
        text: The full source text.
        check_level: Depth of syntax analysis. Defaults to the configured level.

    Returns:
        ValidationReport: All findings, the score and the validity verdict.

    Raises:
        ConfigurationError: If `check_level` is not a known level.
    """
    level = self.config.check_level
    if check_level is not None:
      if isinstance(check_level, str):
        check_level = check_level.strip().lower()
      try:
        level = CheckLevel(check_level)
      except ValueError as e:
        raise ConfigurationError(f"Unknown check level: '{check_level}'") from e
    lines = split_lines(text)

    findings = self.checker.check(lines, level)
    errors = self.structure.validate(lines) + findings.errors
    warnings = findings.warnings
    if self.config.disabled_rules:
      errors = [issue for issue in errors if self.config.is_enabled(issue.rule)]
      warnings = [issue for issue in warnings if self.config.is_enabled(issue.rule)]

    compatibility_issues = self.rules.apply_rules(lines)
    keyword_issues = self.resolver.resolve(lines)

    score = calculate_score(lines, [*errors, *warnings, *compatibility_issues, *keyword_issues])
    is_valid = not any(
      issue.severity == Severity.ERROR for issue in [*errors, *compatibility_issues, *keyword_issues]
    )

    return ValidationReport(
      is_valid=is_valid,
      errors=errors,
      warnings=warnings,
      suggestions=findings.suggestions,
      compatibility_issues=compatibility_issues,
      keyword_issues=keyword_issues,
      score=score,
      check_level=level,
    )

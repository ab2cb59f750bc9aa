"""
Data structures representing the output of the validation pipeline.

This module defines the issue models emitted by each analysis pass and the
`ValidationReport` that aggregates them. Every model is a plain Pydantic model
without back references, so `report.model_dump_json()` always succeeds.
"""

from typing import Iterable, List, Optional

from pydantic import BaseModel, Field

from qb_lint.enums import CheckLevel, Severity


class RuleExamples(BaseModel):
  """Before/after sample attached to a compatibility rule."""

  incorrect: str = Field(default="", description="Source that triggers the rule.")
  correct: str = Field(default="", description="Equivalent source that does not.")


class SyntaxIssue(BaseModel):
  """
  A structural or syntax finding anchored to a source position.
  """

  line: int = Field(description="1-based line number.")
  column: int = Field(default=1, description="1-based column number.")
  severity: Severity
  rule: str = Field(description="Identifier of the check that produced the issue.")
  message: str
  suggestion: str = ""


class CompatibilityIssue(BaseModel):
  """
  A compatibility rule match.
  """

  line: int
  column: int
  severity: Severity
  category: str = Field(description="Category of the rule that matched.")
  pattern: str = Field(description="The source text matched by the rule.")
  message: str
  suggestion: str = ""
  examples: Optional[RuleExamples] = None


class KeywordIssue(BaseModel):
  """
  A keyword dictionary finding for one identifier token.
  """

  line: int
  column: int
  severity: Severity
  keyword: str = Field(description="The token text as written in the source.")
  message: str
  suggestions: List[str] = Field(default_factory=list)


def count_severity(issues: Iterable[BaseModel], severity: Severity) -> int:
  """
  Counts issues of a given severity across any issue model.

  Args:
      issues: Iterable of issue models carrying a `severity` field.
      severity: The severity to count.

  Returns:
      int: Number of matching issues.
  """
  return sum(1 for issue in issues if issue.severity == severity)


class ValidationReport(BaseModel):
  """
  Aggregated result of validating one source text.
  """

  is_valid: bool = Field(description="True when no error-severity issue was found by any pass.")
  errors: List[SyntaxIssue] = Field(default_factory=list, description="Structural and syntax errors.")
  warnings: List[SyntaxIssue] = Field(default_factory=list, description="Non-error syntax findings.")
  suggestions: List[str] = Field(default_factory=list, description="Document level improvement hints.")
  compatibility_issues: List[CompatibilityIssue] = Field(default_factory=list)
  keyword_issues: List[KeywordIssue] = Field(default_factory=list)
  score: int = Field(ge=0, le=100, description="Quality score in [0, 100].")
  check_level: CheckLevel = CheckLevel.BASIC

  @property
  def error_count(self) -> int:
    """Error-severity issues across all issue lists."""
    return (
      len(self.errors)
      + count_severity(self.compatibility_issues, Severity.ERROR)
      + count_severity(self.keyword_issues, Severity.ERROR)
    )

  @property
  def warning_count(self) -> int:
    """Warning-severity issues across all issue lists."""
    return (
      count_severity(self.warnings, Severity.WARNING)
      + count_severity(self.compatibility_issues, Severity.WARNING)
      + count_severity(self.keyword_issues, Severity.WARNING)
    )

  @property
  def has_errors(self) -> bool:
    """
    Check if the report contains any error-severity issue.

    Returns:
        True if one or more errors are present.
    """
    return self.error_count > 0

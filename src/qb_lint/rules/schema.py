"""
Pydantic schema for compatibility rules.

A rule pairs a regular expression with the issue it reports. Rules are frozen
after construction and expose their compiled pattern through `regex`, which
carries no match position between uses.
"""

import re
from typing import Any, Dict, Optional, Pattern

from pydantic import BaseModel, ConfigDict, Field, field_validator

from qb_lint.core.report import RuleExamples
from qb_lint.enums import RuleScope, Severity


class Rule(BaseModel):
  """
  One named compatibility pattern.
  """

  model_config = ConfigDict(frozen=True)

  category: str = Field(description="Unique rule name, reported on every issue it produces.")
  pattern: str = Field(description="Regular expression, matched case-insensitively.")
  severity: Severity = Severity.ERROR
  message: str
  suggestion: str = ""
  examples: Optional[RuleExamples] = None
  scope: RuleScope = Field(
    default=RuleScope.LINE,
    description="LINE rules run per physical line; DOCUMENT rules run once over the joined text.",
  )

  @field_validator("pattern")
  @classmethod
  def validate_pattern(cls, v: str) -> str:
    """
    Rejects patterns that Python's `re` module cannot compile.

    Args:
        v (str): Raw regular expression.

    Returns:
        str: The unchanged pattern.

    Raises:
        ValueError: If the expression is invalid.
    """
    try:
      re.compile(v)
    except re.error as e:
      raise ValueError(f"Invalid regular expression {v!r}: {e}")
    return v

  @property
  def flags(self) -> int:
    """Regex flags used for this rule's scope."""
    if self.scope == RuleScope.DOCUMENT:
      return re.IGNORECASE | re.MULTILINE
    return re.IGNORECASE

  @property
  def regex(self) -> Pattern[str]:
    """The compiled pattern (served from the `re` module cache)."""
    return re.compile(self.pattern, self.flags)

  @classmethod
  def from_definition(cls, category: str, definition: Dict[str, Any]) -> "Rule":
    """
    Builds a rule from one entry of a rule data file.

    Args:
        category: The key the entry was stored under.
        definition: Mapping with `regex`, `message` and optional `severity`,
            `suggestion`, `examples` and `scope` keys.

    Returns:
        Rule: The validated rule.

    Raises:
        KeyError: If `regex` or `message` is missing.
        pydantic.ValidationError: If a value fails validation.
    """
    examples = definition.get("examples")
    return cls(
      category=category,
      pattern=definition["regex"],
      severity=definition.get("severity") or Severity.ERROR,
      message=definition["message"],
      suggestion=definition.get("suggestion") or "",
      examples=RuleExamples(**examples) if isinstance(examples, dict) else None,
      scope=definition.get("scope") or RuleScope.LINE,
    )
